"""Device location provider.

The platform side is a :class:`LocationPlatform`: something that can report
whether location services are on, ask the user for permission and request a
single fix. Results come back asynchronously through the provider's delegate
methods (``on_authorization_changed``, ``on_location``, ``on_failure``), which
the platform calls from whatever thread it likes.

:meth:`DeviceLocationProvider.get_current_location` turns that callback flow
into a blocking call with a bounded wait. Concurrent callers share one
platform request.
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, Optional, Protocol

from .entities import Coordinates, LocationFix, PermissionState
from .errors import AcquisitionError, LocationUnavailable, PermissionDenied, Timeout
from .observable import Observable

logger = logging.getLogger(__name__)


class LocationPlatform(Protocol):
    def services_enabled(self) -> bool:
        ...

    def authorization_state(self) -> PermissionState:
        ...

    def request_authorization(self) -> None:
        ...

    def last_known_fix(self) -> Optional[LocationFix]:
        ...

    def request_location(self) -> None:
        ...


class DeviceLocationProvider:
    def __init__(
        self,
        platform: LocationPlatform,
        *,
        timeout: float = 10.0,
        max_fix_age: float = 300.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.platform = platform
        self.timeout = timeout
        self.max_fix_age = max_fix_age
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._permission_requested = False
        self.permission: Observable[PermissionState] = Observable(platform.authorization_state())
        self.error: Observable[Optional[AcquisitionError]] = Observable(None)
        self.current_location: Observable[Optional[Coordinates]] = Observable(None)

    @property
    def is_authorized(self) -> bool:
        return self.permission.value is PermissionState.AUTHORIZED

    def request_permission(self) -> None:
        if self.permission.value is not PermissionState.NOT_DETERMINED:
            return
        with self._lock:
            if self._permission_requested:
                return
            self._permission_requested = True
        logger.info("Requesting location authorization")
        self.platform.request_authorization()

    def get_current_location(self) -> Coordinates:
        if not self.platform.services_enabled():
            raise self._report(LocationUnavailable("location services are not enabled"))
        state = self.permission.value
        if state is PermissionState.NOT_DETERMINED:
            self.request_permission()
            raise PermissionDenied("location authorization not determined yet")
        if state is not PermissionState.AUTHORIZED:
            raise PermissionDenied("location access denied or restricted")

        fix = self.platform.last_known_fix()
        if fix is not None and self._clock() - fix.taken_at <= self.max_fix_age:
            return fix.coordinates

        with self._lock:
            pending = self._pending
            issue = pending is None
            if issue:
                pending = self._pending = Future()
        if issue:
            logger.debug("Issuing platform location request")
            try:
                self.platform.request_location()
            except Exception as exc:
                self._settle(pending, error=LocationUnavailable(str(exc)))
                raise LocationUnavailable(str(exc)) from exc
        else:
            logger.debug("Joining in-flight location request")

        try:
            return pending.result(timeout=self.timeout)
        except FutureTimeout:
            error = Timeout(f"no location fix within {self.timeout:g}s")
            self._settle(pending, error=error)
            raise self._report(error) from None

    # Platform delegate ---------------------------------------------------
    def on_authorization_changed(self, state: PermissionState) -> None:
        logger.info("Location authorization changed to %s", state.value)
        self.permission.set(state)
        if state is PermissionState.DENIED:
            error = PermissionDenied("location access denied or restricted")
            self._report(error)
            with self._lock:
                pending = self._pending
            if pending is not None:
                self._settle(pending, error=error)
        elif state is PermissionState.AUTHORIZED:
            self.error.set(None)

    def on_location(self, fix: LocationFix) -> None:
        self.current_location.set(fix.coordinates)
        with self._lock:
            pending = self._pending
        if pending is not None:
            self._settle(pending, coords=fix.coordinates)

    def on_failure(self, error: Exception) -> None:
        logger.warning("Location manager error: %s", error)
        wrapped = LocationUnavailable(str(error))
        self._report(wrapped)
        with self._lock:
            pending = self._pending
        if pending is not None:
            self._settle(pending, error=wrapped)

    # Helpers ---------------------------------------------------------------
    def _settle(
        self,
        pending: Future,
        *,
        coords: Optional[Coordinates] = None,
        error: Optional[AcquisitionError] = None,
    ) -> None:
        with self._lock:
            if self._pending is pending:
                self._pending = None
            if pending.done():
                return
            if error is not None:
                pending.set_exception(error)
            else:
                pending.set_result(coords)

    def _report(self, error: AcquisitionError) -> AcquisitionError:
        self.error.set(error)
        return error


__all__ = ["DeviceLocationProvider", "LocationPlatform"]
