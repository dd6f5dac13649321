"""Latest-value holders that notify subscribers on change.

Presentation code reads :attr:`Observable.value` for the current value and
calls :meth:`Observable.subscribe` to hear about replacements. Callbacks run
on whichever thread performed the update; the orchestrator funnels its own
updates through a single owner thread, so its subscribers never run
concurrently with each other.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Subscription:
    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel = cancel
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._cancel()


class Observable(Generic[T]):
    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []
        self._lock = threading.Lock()
        # Serializes deliveries so a replay is never overtaken by a later set().
        self._delivery = threading.RLock()

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callable[[T], None], *, replay: bool = False) -> Subscription:
        """Register ``callback``; with ``replay`` it is called once with the current value."""
        with self._delivery:
            with self._lock:
                self._subscribers.append(callback)
                current = self._value
            if replay:
                callback(current)
        return Subscription(lambda: self._remove(callback))

    def set(self, value: T) -> None:
        with self._delivery:
            with self._lock:
                self._value = value
                subscribers = list(self._subscribers)
            for callback in subscribers:
                try:
                    callback(value)
                except Exception:  # noqa: BLE001
                    logger.exception("Subscriber %r failed", callback)

    def _remove(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass


__all__ = ["Observable", "Subscription"]
