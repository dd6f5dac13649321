"""Acquisition orchestrator.

Every trigger becomes an *attempt* stamped with the next generation token.
Attempt bodies (device location, geocoding, fetch) run on a worker pool; their
results are handed back to a single owner thread which is the only place the
published :class:`AcquisitionState` and the generation counter change. An
attempt whose token is no longer the latest when it completes is dropped
without touching state.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol, Tuple

from ..config import Settings
from ..entities import (
    AcquisitionState,
    AttemptOutcome,
    AttemptPhase,
    Coordinates,
    PlaceQuery,
    WeatherSnapshot,
)
from ..errors import AcquisitionError, PlaceNotFound, TransportError
from ..observable import Observable, Subscription
from ..resolver import CoordinateResolver


logger = logging.getLogger(__name__)


class WeatherFetcher(Protocol):
    def fetch(self, coords: Coordinates) -> WeatherSnapshot:
        ...


class LocationProvider(Protocol):
    def get_current_location(self) -> Coordinates:
        ...


@dataclass(frozen=True)
class _AttemptResult:
    place: str
    snapshot: WeatherSnapshot


class AcquisitionOrchestrator:
    """Owns the published weather state and sequences acquisition attempts."""

    def __init__(
        self,
        *,
        resolver: CoordinateResolver,
        fetcher: WeatherFetcher,
        location_provider: LocationProvider,
        settings: Optional[Settings] = None,
        max_workers: int = 4,
    ) -> None:
        self.resolver = resolver
        self.fetcher = fetcher
        self.location_provider = location_provider
        self.settings = settings or Settings()
        self._state: Observable[AcquisitionState] = Observable(
            AcquisitionState(active_place=self.settings.default_place)
        )
        self._generation = 0
        self._owner = ThreadPoolExecutor(max_workers=1, thread_name_prefix="acquisition-owner")
        self._workers = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="acquisition")

    # Public API ---------------------------------------------------------
    @property
    def state(self) -> AcquisitionState:
        return self._state.value

    def subscribe(self, callback: Callable[[AcquisitionState], None], *, replay: bool = False) -> Subscription:
        return self._state.subscribe(callback, replay=replay)

    def set_place(self, name: str) -> "Future[AttemptOutcome]":
        return self._trigger(PlaceQuery.city(name))

    def use_current_location(self) -> "Future[AttemptOutcome]":
        return self._trigger(PlaceQuery.device())

    def refresh(self) -> "Future[AttemptOutcome]":
        """Re-acquire weather for the device location.

        A fresh fix is reused without a new platform request. Failures surface
        through the state; the startup fallback does not apply here.
        """
        return self._trigger(PlaceQuery.device())

    def start(self, *, use_device_location: bool = False) -> "Future[AttemptOutcome]":
        """Launch-time acquisition; falls back to the default coordinates if locating fails."""
        if use_device_location:
            query = PlaceQuery.device()
        else:
            query = PlaceQuery.city(self.settings.default_place)
        return self._trigger(query, bootstrap=True)

    def close(self) -> None:
        self._workers.shutdown(wait=True)
        self._owner.shutdown(wait=True)

    def __enter__(self) -> "AcquisitionOrchestrator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Owner thread -------------------------------------------------------
    def _trigger(self, query: PlaceQuery, bootstrap: bool = False) -> "Future[AttemptOutcome]":
        outcome: "Future[AttemptOutcome]" = Future()
        self._on_owner(outcome, self._begin, query, bootstrap, outcome)
        return outcome

    def _on_owner(self, outcome: Future, fn: Callable, *args) -> None:
        def _guard(task: Future) -> None:
            exc = task.exception()
            if exc is not None and not outcome.done():
                logger.error("Owner task %s failed", fn.__name__, exc_info=exc)
                outcome.set_exception(exc)

        self._owner.submit(fn, *args).add_done_callback(_guard)

    def _begin(self, query: PlaceQuery, bootstrap: bool, outcome: Future) -> None:
        self._generation += 1
        token = self._generation
        logger.info("Attempt %d started for %s", token, _describe_query(query))
        self._publish(replace(self.state, is_loading=True, generation=token, phase=AttemptPhase.RESOLVING))
        self._workers.submit(self._run_attempt, token, query, bootstrap, outcome)

    def _advance(self, token: int, phase: AttemptPhase) -> None:
        if token == self._generation:
            self._publish(replace(self.state, phase=phase))

    def _complete(
        self,
        token: int,
        result: Optional[_AttemptResult],
        failure: Optional[AcquisitionError],
        outcome: Future,
    ) -> None:
        if token != self._generation:
            logger.info("Discarding attempt %d, superseded by %d", token, self._generation)
            outcome.set_result(AttemptOutcome.SUPERSEDED)
            return

        state = self.state
        if result is not None:
            new_state = replace(
                state,
                active_place=result.place,
                snapshot=result.snapshot,
                is_invalid_place=False,
                last_error=None,
                is_loading=False,
                phase=AttemptPhase.COMMITTED,
            )
            verdict = AttemptOutcome.COMMITTED
            logger.info("Attempt %d committed weather for %s", token, result.place)
        elif isinstance(failure, PlaceNotFound):
            new_state = replace(
                state,
                is_invalid_place=True,
                last_error=failure,
                is_loading=False,
                phase=AttemptPhase.FAILED,
            )
            verdict = AttemptOutcome.FAILED
            logger.info("Attempt %d rejected place: %s", token, failure)
        else:
            new_state = replace(state, last_error=failure, is_loading=False, phase=AttemptPhase.FAILED)
            verdict = AttemptOutcome.FAILED
            logger.warning("Attempt %d failed with %s: %s", token, failure.kind, failure)
        self._publish(new_state)
        outcome.set_result(verdict)

    def _publish(self, state: AcquisitionState) -> None:
        self._state.set(state)

    # Worker threads -----------------------------------------------------
    def _run_attempt(self, token: int, query: PlaceQuery, bootstrap: bool, outcome: Future) -> None:
        result: Optional[_AttemptResult] = None
        failure: Optional[AcquisitionError] = None
        try:
            result = self._acquire(token, query, bootstrap, outcome)
        except AcquisitionError as exc:
            failure = exc
        except Exception as exc:  # noqa: BLE001
            logger.exception("Attempt %d crashed", token)
            failure = TransportError(f"unexpected error: {exc}")
        self._on_owner(outcome, self._complete, token, result, failure, outcome)

    def _acquire(self, token: int, query: PlaceQuery, bootstrap: bool, outcome: Future) -> _AttemptResult:
        try:
            coords, place = self._locate(query)
        except AcquisitionError as exc:
            if not bootstrap:
                raise
            coords = self.settings.default_coordinates
            logger.warning("Startup location failed (%s), using default coordinates %s", exc, coords)
            place = self.resolver.describe(coords)

        self._on_owner(outcome, self._advance, token, AttemptPhase.FETCHING)
        snapshot = self.fetcher.fetch(coords)
        return _AttemptResult(place=place, snapshot=snapshot)

    def _locate(self, query: PlaceQuery) -> Tuple[Coordinates, str]:
        if query.is_city:
            name = query.name.strip()
            return self.resolver.resolve(name), name
        if query.coordinates is not None:
            coords = query.coordinates
        else:
            coords = self.location_provider.get_current_location()
        return coords, self.resolver.describe(coords)


def _describe_query(query: PlaceQuery) -> str:
    if query.is_city:
        return f"city {query.name!r}"
    if query.coordinates is not None:
        return f"coordinates {query.coordinates}"
    return "device location"


__all__ = ["AcquisitionOrchestrator", "LocationProvider", "WeatherFetcher"]
