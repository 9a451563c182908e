"""Change notification streams for locale, language, currency and reloads.

Two stream kinds:
- ReplayStream: multicast stream that caches its latest value and replays
  it to each new subscriber, so late subscribers still learn the state.
- TriggerStream: payload-less multicast trigger with no replay.

Delivery is synchronous, on the emitter's stack, in subscription order.
An emit made from inside a callback (on any stream of the same channel) is
queued until the current pass over the subscribers finishes.
A subscriber that raises is logged and skipped; remaining subscribers still
receive the event. There is no batching or coalescing.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import itertools
import logging
from collections import deque
from typing import TYPE_CHECKING, Generic, Self, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from localestate.types import Listener, TriggerListener

__all__ = [
    "ChangeNotificationChannel",
    "DeliveryQueue",
    "ReplayStream",
    "Subscription",
    "TriggerStream",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by subscribe(); detaches one callback.

    Usable as a context manager:

        >>> with channel.locale_changed.subscribe(print):
        ...     resolver.set_locale("de", "AT")
        de-AT
    """

    __slots__ = ("_detach", "_id")

    def __init__(self, subscriber_id: int, detach: Callable[[int], None]) -> None:
        self._id = subscriber_id
        self._detach: Callable[[int], None] | None = detach

    @property
    def active(self) -> bool:
        """False once unsubscribe() has been called."""
        return self._detach is not None

    def unsubscribe(self) -> None:
        """Stop delivery to the callback. Idempotent."""
        if self._detach is not None:
            self._detach(self._id)
            self._detach = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.unsubscribe()


class DeliveryQueue:
    """Runs stream deliveries one pass at a time, in request order.

    The streams of one channel share a queue: an emit made from inside any
    of their callbacks waits until the current pass over the subscribers
    finishes, so every subscriber observes changes in the order they were
    made, across streams.
    """

    __slots__ = ("_active", "_pending")

    def __init__(self) -> None:
        self._active = False
        self._pending: deque[tuple[_Stream, tuple[object, ...]]] = deque()

    def has_pending(self, stream: _Stream) -> bool:
        """True while a delivery for ``stream`` is waiting its turn."""
        return any(target is stream for target, _ in self._pending)

    def submit(self, stream: _Stream, args: tuple[object, ...]) -> None:
        """Deliver ``args`` on ``stream`` now, or after the pass in progress."""
        self._pending.append((stream, args))
        if self._active:
            return
        self._active = True
        try:
            while self._pending:
                target, pending_args = self._pending.popleft()
                target._deliver_now(pending_args)
        finally:
            self._active = False
            self._pending.clear()


class _Stream:
    """Subscriber registry shared by both stream kinds."""

    __slots__ = ("_ids", "_name", "_queue", "_subscribers")

    def __init__(self, name: str, queue: DeliveryQueue | None = None) -> None:
        self._name = name
        self._queue = queue if queue is not None else DeliveryQueue()
        # dict preserves insertion order, and ids only grow, so iteration
        # order is subscription order
        self._subscribers: dict[int, Callable[..., object]] = {}
        self._ids = itertools.count()

    @property
    def name(self) -> str:
        """Stream name used in log records."""
        return self._name

    def _attach(self, callback: Callable[..., object]) -> Subscription:
        if not callable(callback):
            msg = f"Subscriber for {self._name} must be callable, got {type(callback).__name__}"
            raise TypeError(msg)
        subscriber_id = next(self._ids)
        self._subscribers[subscriber_id] = callback
        return Subscription(subscriber_id, self._detach)

    def _detach(self, subscriber_id: int) -> None:
        self._subscribers.pop(subscriber_id, None)

    def _deliver(self, *args: object) -> None:
        self._queue.submit(self, args)

    def _deliver_now(self, args: tuple[object, ...]) -> None:
        # Snapshot: callbacks may subscribe or unsubscribe during delivery
        for callback in tuple(self._subscribers.values()):
            self._invoke(callback, args)

    def _invoke(self, callback: Callable[..., object], args: tuple[object, ...]) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Subscriber %r failed while handling %s", callback, self._name)

    def clear(self) -> None:
        """Drop every subscriber."""
        self._subscribers.clear()

    def __len__(self) -> int:
        return len(self._subscribers)


class ReplayStream(_Stream, Generic[T]):
    """Multicast stream replaying its latest value to new subscribers.

    Example:
        >>> stream: ReplayStream[str] = ReplayStream("locale_changed")
        >>> stream.emit("en-US")
        >>> _ = stream.subscribe(print)
        en-US
    """

    __slots__ = ("_has_value", "_value")

    def __init__(self, name: str, queue: DeliveryQueue | None = None) -> None:
        super().__init__(name, queue)
        self._value: T | None = None
        self._has_value = False

    @property
    def value(self) -> T | None:
        """Most recently emitted value, or None before the first emit."""
        return self._value

    @property
    def has_value(self) -> bool:
        """True once a value has been emitted."""
        return self._has_value

    def subscribe(self, callback: Listener[T]) -> Subscription:
        """Register ``callback``; replay the cached value to it immediately.

        Args:
            callback: Called with each emitted value

        Returns:
            Subscription handle

        Raises:
            TypeError: If callback is not callable
        """
        subscription = self._attach(callback)
        # A queued emit reaches the new subscriber anyway; replaying too would
        # deliver the latest value twice
        if self._has_value and not self._queue.has_pending(self):
            self._invoke(callback, (self._value,))
        return subscription

    def emit(self, value: T) -> None:
        """Cache ``value`` and deliver it to every subscriber."""
        self._value = value
        self._has_value = True
        self._deliver(value)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"ReplayStream({self._name!r}, value={self._value!r}, subscribers={len(self)})"


class TriggerStream(_Stream):
    """Payload-less multicast trigger. Late subscribers see only future triggers."""

    __slots__ = ()

    def subscribe(self, callback: TriggerListener) -> Subscription:
        """Register ``callback``; it is called with no arguments on each trigger.

        Raises:
            TypeError: If callback is not callable
        """
        return self._attach(callback)

    def emit(self) -> None:
        """Fire the trigger."""
        self._deliver()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TriggerStream({self._name!r}, subscribers={len(self)})"


class ChangeNotificationChannel:
    """The four streams a LocaleResolver publishes to.

    Attributes:
        language_changed: Bare language code after a language-only change
        locale_changed: Canonical tag after a full locale change
        currency_changed: Currency code after a currency change
        reload_translations: Trigger for the translation-catalog loader,
            fired after every effective language or locale change
    """

    __slots__ = ("currency_changed", "language_changed", "locale_changed", "reload_translations")

    def __init__(self) -> None:
        queue = DeliveryQueue()
        self.language_changed: ReplayStream[str] = ReplayStream("language_changed", queue)
        self.locale_changed: ReplayStream[str] = ReplayStream("locale_changed", queue)
        self.currency_changed: ReplayStream[str] = ReplayStream("currency_changed", queue)
        self.reload_translations = TriggerStream("reload_translations", queue)

    def close(self) -> None:
        """Drop all subscribers on every stream. Cached values are kept."""
        self.language_changed.clear()
        self.locale_changed.clear()
        self.currency_changed.clear()
        self.reload_translations.clear()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"ChangeNotificationChannel(language={self.language_changed.value!r}, "
            f"locale={self.locale_changed.value!r}, currency={self.currency_changed.value!r})"
        )
