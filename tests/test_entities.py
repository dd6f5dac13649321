from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import pytest

from weather_pipeline.app import build_orchestrator
from weather_pipeline.config import Settings
from weather_pipeline.entities import AcquisitionState, Coordinates, PermissionState, PlaceQuery
from weather_pipeline.errors import ConfigurationError
from weather_pipeline.observable import Observable


def test_place_query_has_exactly_one_source():
    assert PlaceQuery.city("Paris").is_city
    assert PlaceQuery.device().use_device
    assert PlaceQuery.at(Coordinates(1.0, 2.0)).coordinates == Coordinates(1.0, 2.0)

    with pytest.raises(ValueError):
        PlaceQuery(name="Paris", coordinates=Coordinates(1.0, 2.0))
    with pytest.raises(ValueError):
        PlaceQuery()


def test_state_starts_with_empty_snapshot():
    state = AcquisitionState(active_place="Noida")

    assert state.snapshot.is_empty
    assert state.generation == 0


def test_observable_notifies_until_unsubscribed():
    observable = Observable(0)
    seen = []

    subscription = observable.subscribe(seen.append, replay=True)
    observable.set(1)
    subscription.unsubscribe()
    observable.set(2)

    assert seen == [0, 1]
    assert observable.value == 2


def test_observable_isolates_failing_subscribers():
    observable = Observable("a")
    seen = []

    def broken(_value):
        raise RuntimeError("subscriber bug")

    observable.subscribe(broken)
    observable.subscribe(seen.append)
    observable.set("b")

    assert seen == ["b"]


class IdlePlatform:
    def services_enabled(self):
        return True

    def authorization_state(self):
        return PermissionState.AUTHORIZED

    def request_authorization(self):
        pass

    def last_known_fix(self):
        return None

    def request_location(self):
        pass


def test_build_orchestrator_wires_settings():
    settings = Settings(api_key="test-key", default_place="Oslo", request_timeout=3.0, location_timeout=2.0)

    with build_orchestrator(IdlePlatform(), settings=settings) as orchestrator:
        assert orchestrator.state.active_place == "Oslo"
        assert orchestrator.fetcher.api_key == "test-key"
        assert orchestrator.fetcher.request_config.timeout == 3.0
        assert orchestrator.resolver.geocoder.request_config.user_agent == settings.geocoder_user_agent
        assert orchestrator.location_provider.timeout == 2.0


def test_build_orchestrator_requires_api_key():
    with pytest.raises(ConfigurationError):
        build_orchestrator(IdlePlatform(), settings=Settings(api_key=""))


def test_observable_replay_is_delivered_before_concurrent_set():
    observable = Observable("old")
    seen = []
    replaying = threading.Event()
    release = threading.Event()

    def slow(value):
        seen.append(value)
        if value == "old":
            replaying.set()
            release.wait(5)

    with ThreadPoolExecutor(max_workers=2) as pool:
        subscribed = pool.submit(observable.subscribe, slow, replay=True)
        assert replaying.wait(5)
        setter = pool.submit(observable.set, "new")
        with pytest.raises(FutureTimeout):
            setter.result(timeout=0.1)
        release.set()
        subscribed.result(timeout=5)
        setter.result(timeout=5)

    assert seen == ["old", "new"]
