"""
Observable values for playback state propagation.

An Observable holds one current value and notifies subscribers only when a
new value differs from the current one. Callbacks run synchronously on the
thread that set the value; for session state that is always a thread holding
the session lock, so observers see changes in the order they were made.
"""

from typing import Callable, Generic, List, Optional, TypeVar

from loguru import logger

T = TypeVar("T")

Callback = Callable[[T], None]


class Subscription:
    """Handle returned by Observable.subscribe(); cancel() detaches the callback."""

    def __init__(self, observable: "Observable", callback: Callback):
        self._observable: Optional[Observable] = observable
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._observable is not None

    def cancel(self) -> None:
        """Detach from the observable. Safe to call more than once."""
        if self._observable is not None:
            self._observable._detach(self)
            self._observable = None

    def _deliver(self, value) -> None:
        if self._observable is None:
            return
        try:
            self._callback(value)
        except Exception:
            logger.exception(f"Observer for {self._observable.name} raised")


class Observable(Generic[T]):
    """A named value stream with change-only emission."""

    def __init__(self, name: str, initial: T):
        self.name = name
        self._value = initial
        self._subscriptions: List[Subscription] = []
        self._view: Optional["ReadOnlyObservable[T]"] = None

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callback, replay: bool = False) -> Subscription:
        """Register a callback for future changes.

        Args:
            callback: Called with each new value
            replay: Also call immediately with the current value

        Returns:
            Subscription handle; cancel() it to stop receiving values
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        if replay:
            subscription._deliver(self._value)
        return subscription

    def set(self, value: T) -> bool:
        """Set the value, notifying subscribers if it changed.

        Returns:
            True if the value changed and subscribers were notified
        """
        if value == self._value:
            return False
        self._value = value
        # Snapshot so callbacks may subscribe/cancel during delivery
        for subscription in list(self._subscriptions):
            subscription._deliver(value)
        return True

    def _detach(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def read_only(self) -> "ReadOnlyObservable[T]":
        """View of this stream that can be read and subscribed to but not set."""
        if self._view is None:
            self._view = ReadOnlyObservable(self)
        return self._view

    def __repr__(self) -> str:
        return f"Observable({self.name!r}, {self._value!r})"


class ReadOnlyObservable(Generic[T]):
    """Subscribe-only view over an Observable owned by someone else."""

    __slots__ = ("_source",)

    def __init__(self, source: Observable[T]):
        self._source = source

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, callback: Callback, replay: bool = False) -> Subscription:
        return self._source.subscribe(callback, replay=replay)

    @property
    def subscriber_count(self) -> int:
        return self._source.subscriber_count

    def __repr__(self) -> str:
        return f"ReadOnlyObservable({self.name!r}, {self.value!r})"


class SubscriptionBag:
    """Collection of subscriptions torn down together."""

    def __init__(self):
        self._subscriptions: List[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def cancel_all(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()

    def __len__(self) -> int:
        return len(self._subscriptions)
