from __future__ import annotations

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Notifier(Generic[T]):
    """Synchronous fan-out to subscriber callbacks.

    Subscribers are called in subscription order after the triggering state
    change has been committed. A failing subscriber is logged and skipped; it
    never affects the caller or the remaining subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, payload: T) -> None:
        for callback in list(self._subscribers):
            try:
                callback(payload)
            except Exception:
                logger.exception("Notification subscriber %r failed", callback)
