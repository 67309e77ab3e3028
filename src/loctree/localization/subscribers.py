"""Subscriber registry for language-change notification.

A subscriber is either an object with a ``localise()`` method (see
Localisable) or a plain callable. notify_all() invokes every subscriber in
registration order on a snapshot of the list, so callbacks may register,
unregister or trigger another switch without disturbing the pass in
progress.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from loctree.diagnostics import ErrorTemplate

__all__ = ["Localisable", "Subscriber", "SubscriberRegistry", "invoke", "try_invoke"]

logger = logging.getLogger(__name__)


@runtime_checkable
class Localisable(Protocol):
    """Anything that can re-render its text for the active language."""

    def localise(self) -> None:
        """Re-read localised text and display it."""


type Subscriber = Localisable | Callable[[], object]


class SubscriberRegistry:
    """Ordered, duplicate-free list of subscribers.

    Duplicates are detected by equality, so bound methods of the same
    object count as the same subscriber.

    Thread-safe: list mutation and snapshots are guarded by a lock;
    subscribers themselves are invoked outside of it.
    """

    __slots__ = ("_lock", "_subscribers")

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        with self._lock:
            return subscriber in self._subscribers

    def snapshot(self) -> tuple[Subscriber, ...]:
        """Current subscribers in registration order."""
        with self._lock:
            return tuple(self._subscribers)

    def register(self, subscriber: Subscriber) -> bool:
        """Append subscriber.

        Returns:
            False (and a warning) if subscriber is already registered
        """
        if not isinstance(subscriber, Localisable) and not callable(subscriber):
            msg = (
                "Subscriber must be callable or define localise(), "
                f"got {type(subscriber).__name__}"
            )
            raise TypeError(msg)
        with self._lock:
            if subscriber in self._subscribers:
                duplicate = True
            else:
                duplicate = False
                self._subscribers.append(subscriber)
        if duplicate:
            logger.warning("%s", ErrorTemplate.duplicate_subscriber(subscriber))
            return False
        logger.debug("Subscriber registered (%d total)", len(self))
        return True

    def unregister(self, subscriber: Subscriber) -> bool:
        """Remove subscriber.

        Returns:
            False (and a warning) if subscriber was not registered
        """
        with self._lock:
            try:
                self._subscribers.remove(subscriber)
            except ValueError:
                removed = False
            else:
                removed = True
        if not removed:
            logger.warning("%s", ErrorTemplate.unknown_subscriber(subscriber))
        return removed

    def clear(self) -> None:
        """Remove every subscriber."""
        with self._lock:
            self._subscribers.clear()

    def notify_all(self) -> int:
        """Invoke every subscriber once, in registration order.

        Subscribers unregistered by an earlier callback of the same pass
        are skipped. Subscribers registered during the pass are not invoked
        by it. A subscriber that raises is logged and the pass moves on to
        the next one.

        Returns:
            Number of subscribers that completed without raising
        """
        invoked = 0
        for subscriber in self.snapshot():
            if subscriber not in self:
                continue
            if try_invoke(subscriber):
                invoked += 1
        logger.debug("Notified %d subscriber(s)", invoked)
        return invoked


def invoke(subscriber: Subscriber) -> None:
    """Run one subscriber: ``localise()`` if it has one, else call it."""
    if isinstance(subscriber, Localisable):
        subscriber.localise()
    else:
        subscriber()


def try_invoke(subscriber: Subscriber) -> bool:
    """Run one subscriber, logging instead of raising on failure.

    Returns:
        False if the subscriber raised
    """
    try:
        invoke(subscriber)
    except Exception:
        logger.exception("Subscriber %r failed during language notification", subscriber)
        return False
    return True
