"""Synchronous publish/subscribe primitive.

Subscribers are plain callables notified in registration order. A subscriber
that raises is logged and skipped; the remaining subscribers still run.
"""

import logging
from typing import Any, Callable, Generic, TypeVar

from adaptive_ux.core.errors import CallbackFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ``Broadcaster.subscribe``."""

    def __init__(self, broadcaster: "Broadcaster[Any]", callback: Callable[..., Any]) -> None:
        self._broadcaster = broadcaster
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._broadcaster._is_registered(self)

    def cancel(self) -> None:
        """Stop this registration. Other registrations of the same callback stay.

        Safe to call more than once.
        """
        self._broadcaster._remove(self)


class Broadcaster(Generic[T]):
    """Fan a value out to every current subscriber."""

    def __init__(self, name: str = "broadcast") -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[..., Any]) -> Subscription:
        """Register a callback and return a handle that can cancel it."""
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, callback: Callable[..., Any]) -> None:
        """Remove the first registration equal to ``callback``.

        Removing a callback that is not registered is a no-op.
        """
        for index, subscription in enumerate(self._subscriptions):
            registered = subscription.callback
            if registered is callback or registered == callback:
                del self._subscriptions[index]
                return

    def clear(self) -> None:
        self._subscriptions.clear()

    def _is_registered(self, subscription: Subscription) -> bool:
        return any(s is subscription for s in self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        for index, registered in enumerate(self._subscriptions):
            if registered is subscription:
                del self._subscriptions[index]
                return

    def emit(self, *args: Any) -> list[CallbackFailure]:
        """Notify all subscribers with ``args``.

        Returns:
            Failures raised by individual subscribers (empty when all succeed)
        """
        failures: list[CallbackFailure] = []
        # Snapshot so callbacks may (un)subscribe while being notified
        for subscription in list(self._subscriptions):
            callback = subscription.callback
            try:
                callback(*args)
            except Exception as e:
                failure = CallbackFailure(callback, e)
                logger.error(f"Error in {self.name} subscriber: {failure}", exc_info=True)
                failures.append(failure)
        return failures
