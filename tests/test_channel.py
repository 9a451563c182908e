"""Tests for ReplayStream, TriggerStream and ChangeNotificationChannel.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest

from localestate.channel import ChangeNotificationChannel, ReplayStream, TriggerStream


class TestReplayStream:
    """Test replay-on-subscribe semantics."""

    def test_no_replay_before_first_emit(self) -> None:
        """A fresh stream has nothing to replay."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        received: list[str] = []

        stream.subscribe(received.append)

        assert received == []
        assert not stream.has_value
        assert stream.value is None

    def test_late_subscriber_receives_latest_value(self) -> None:
        """Only the most recent value is replayed."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        stream.emit("en-US")
        stream.emit("de-AT")
        received: list[str] = []

        stream.subscribe(received.append)

        assert received == ["de-AT"]

    def test_subscriber_receives_replay_then_live_values(self) -> None:
        """Replay precedes subsequent emissions."""
        stream: ReplayStream[str] = ReplayStream("currency_changed")
        stream.emit("USD")
        received: list[str] = []
        stream.subscribe(received.append)

        stream.emit("EUR")

        assert received == ["USD", "EUR"]

    def test_repeated_values_not_deduplicated(self) -> None:
        """Emitting the same value twice delivers it twice."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        received: list[str] = []
        stream.subscribe(received.append)

        stream.emit("en")
        stream.emit("en")

        assert received == ["en", "en"]

    def test_delivery_in_subscription_order(self) -> None:
        """Subscribers are called in the order they subscribed."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        calls: list[str] = []
        stream.subscribe(lambda value: calls.append(f"first:{value}"))
        stream.subscribe(lambda value: calls.append(f"second:{value}"))
        stream.subscribe(lambda value: calls.append(f"third:{value}"))

        stream.emit("fr")

        assert calls == ["first:fr", "second:fr", "third:fr"]

    def test_failing_subscriber_isolated(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising subscriber is logged; later subscribers still receive."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        received: list[str] = []

        def broken(_value: str) -> None:
            msg = "subscriber bug"
            raise RuntimeError(msg)

        stream.subscribe(broken)
        stream.subscribe(received.append)

        with caplog.at_level(logging.ERROR, logger="localestate.channel"):
            stream.emit("ja-JP")

        assert received == ["ja-JP"]
        assert "failed while handling locale_changed" in caplog.text
        assert "subscriber bug" in caplog.text

    def test_failing_replay_does_not_break_subscribe(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An exception during replay is logged and the subscription stays active."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        stream.emit("en")
        calls: list[str] = []

        def flaky(value: str) -> None:
            calls.append(value)
            if len(calls) == 1:
                msg = "replay failure"
                raise ValueError(msg)

        with caplog.at_level(logging.ERROR, logger="localestate.channel"):
            subscription = stream.subscribe(flaky)
        stream.emit("de")

        assert subscription.active
        assert calls == ["en", "de"]
        assert "replay failure" in caplog.text

    def test_non_callable_rejected(self) -> None:
        """subscribe() rejects non-callables."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")

        with pytest.raises(TypeError, match="must be callable"):
            stream.subscribe("not callable")  # type: ignore[arg-type]

    def test_subscribe_during_delivery_sees_next_emit_only(self) -> None:
        """A subscriber added mid-delivery gets the replay, not the in-flight emit twice."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        late: list[str] = []

        def subscribe_late(_value: str) -> None:
            if not late:
                stream.subscribe(late.append)

        stream.subscribe(subscribe_late)
        stream.emit("pt")

        assert late == ["pt"]

    def test_repr(self) -> None:
        """repr shows name, value and subscriber count."""
        stream: ReplayStream[str] = ReplayStream("currency_changed")
        stream.emit("JPY")
        stream.subscribe(lambda _value: None)

        assert repr(stream) == "ReplayStream('currency_changed', value='JPY', subscribers=1)"


class TestTriggerStream:
    """Test payload-less triggers."""

    def test_no_replay(self) -> None:
        """Late subscribers never see earlier triggers."""
        trigger = TriggerStream("reload_translations")
        trigger.emit()
        calls: list[str] = []

        trigger.subscribe(lambda: calls.append("reload"))

        assert calls == []

    def test_every_emit_delivered(self) -> None:
        """Each emit() calls every subscriber once."""
        trigger = TriggerStream("reload_translations")
        calls: list[str] = []
        trigger.subscribe(lambda: calls.append("a"))
        trigger.subscribe(lambda: calls.append("b"))

        trigger.emit()
        trigger.emit()

        assert calls == ["a", "b", "a", "b"]

    def test_failing_subscriber_isolated(self, caplog: pytest.LogCaptureFixture) -> None:
        """Errors are logged with the stream name."""
        trigger = TriggerStream("reload_translations")
        calls: list[str] = []

        def broken() -> None:
            msg = "catalog missing"
            raise OSError(msg)

        trigger.subscribe(broken)
        trigger.subscribe(lambda: calls.append("ok"))

        with caplog.at_level(logging.ERROR, logger="localestate.channel"):
            trigger.emit()

        assert calls == ["ok"]
        assert "reload_translations" in caplog.text


class TestSubscription:
    """Test subscription handles."""

    def test_unsubscribe_stops_delivery(self) -> None:
        """After unsubscribe() the callback is not called."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        received: list[str] = []
        subscription = stream.subscribe(received.append)

        stream.emit("en")
        subscription.unsubscribe()
        stream.emit("fr")

        assert received == ["en"]
        assert not subscription.active
        assert len(stream) == 0

    def test_unsubscribe_idempotent(self) -> None:
        """Calling unsubscribe() twice is harmless."""
        trigger = TriggerStream("reload_translations")
        subscription = trigger.subscribe(lambda: None)

        subscription.unsubscribe()
        subscription.unsubscribe()

        assert len(trigger) == 0

    def test_unsubscribe_only_own_callback(self) -> None:
        """Subscribing the same callable twice yields independent handles."""
        trigger = TriggerStream("reload_translations")
        calls: list[str] = []

        def callback() -> None:
            calls.append("x")

        first = trigger.subscribe(callback)
        trigger.subscribe(callback)
        first.unsubscribe()
        trigger.emit()

        assert calls == ["x"]

    def test_context_manager(self) -> None:
        """Leaving the with-block unsubscribes."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        received: list[str] = []

        with stream.subscribe(received.append) as subscription:
            stream.emit("it")
        stream.emit("nl")

        assert received == ["it"]
        assert not subscription.active

    def test_unsubscribe_during_delivery(self) -> None:
        """A subscriber removed mid-delivery still completes the current emit."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        received: list[str] = []
        handles = []

        def remove_second(_value: str) -> None:
            handles[1].unsubscribe()

        handles.append(stream.subscribe(remove_second))
        handles.append(stream.subscribe(received.append))

        stream.emit("sv")
        stream.emit("da")

        assert received == ["sv"]


class TestNestedEmit:
    """Emits made from inside a callback."""

    def test_nested_emit_waits_for_current_pass(self) -> None:
        """Every subscriber sees values in emit order and ends on the latest."""
        stream: ReplayStream[str] = ReplayStream("locale_changed")
        seen: list[str] = []

        def redirect(value: str) -> None:
            if value == "de-AT":
                stream.emit("de-CH")

        stream.subscribe(redirect)
        stream.subscribe(seen.append)

        stream.emit("de-AT")

        assert seen == ["de-AT", "de-CH"]
        assert stream.value == "de-CH"

    def test_nested_trigger_delivered_once_per_emit(self) -> None:
        """A trigger fired from its own callback runs after the current pass."""
        trigger = TriggerStream("reload_translations")
        calls: list[str] = []

        def refire() -> None:
            calls.append("refire")
            if calls.count("refire") == 1:
                trigger.emit()

        trigger.subscribe(refire)
        trigger.subscribe(lambda: calls.append("after"))

        trigger.emit()

        assert calls == ["refire", "after", "refire", "after"]

    def test_subscriber_added_with_emit_pending_gets_value_once(self) -> None:
        """A queued emit reaches the newcomer instead of a replay."""
        stream: ReplayStream[str] = ReplayStream("currency_changed")
        late: list[str] = []

        def emit_then_subscribe(value: str) -> None:
            if value == "USD":
                stream.emit("EUR")
                stream.subscribe(late.append)

        stream.subscribe(emit_then_subscribe)
        stream.emit("USD")

        assert late == ["EUR"]

    def test_delivery_resumes_after_failing_nested_subscriber(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A subscriber raising during a queued pass does not stall the queue."""
        stream: ReplayStream[str] = ReplayStream("language_changed")
        seen: list[str] = []

        def flaky(value: str) -> None:
            if value == "es":
                stream.emit("pt")
                return
            msg = "render failed"
            raise RuntimeError(msg)

        stream.subscribe(flaky)
        stream.subscribe(seen.append)

        with caplog.at_level(logging.ERROR, logger="localestate.channel"):
            stream.emit("es")
        stream.emit("it")

        assert seen == ["es", "pt", "it"]
        assert "render failed" in caplog.text


class TestChangeNotificationChannel:
    """Test the four-stream channel."""

    def test_streams(self) -> None:
        """Channel exposes three replay streams and one trigger."""
        channel = ChangeNotificationChannel()

        assert isinstance(channel.language_changed, ReplayStream)
        assert isinstance(channel.locale_changed, ReplayStream)
        assert isinstance(channel.currency_changed, ReplayStream)
        assert isinstance(channel.reload_translations, TriggerStream)
        assert channel.locale_changed.name == "locale_changed"

    def test_streams_independent(self) -> None:
        """Emitting on one stream does not touch the others."""
        channel = ChangeNotificationChannel()
        channel.currency_changed.emit("EUR")

        assert not channel.locale_changed.has_value
        assert not channel.language_changed.has_value

    def test_emit_on_sibling_stream_waits(self) -> None:
        """Streams of one channel share a queue; cross-stream order is kept."""
        channel = ChangeNotificationChannel()
        order: list[str] = []

        def fallback(tag: str) -> None:
            if tag == "xx-ZZ":
                channel.language_changed.emit("en")

        channel.locale_changed.subscribe(fallback)
        channel.locale_changed.subscribe(lambda tag: order.append(f"locale:{tag}"))
        channel.language_changed.subscribe(lambda code: order.append(f"language:{code}"))

        channel.locale_changed.emit("xx-ZZ")

        assert order == ["locale:xx-ZZ", "language:en"]

    def test_separate_channels_do_not_wait_on_each_other(self) -> None:
        """An emit on another channel is delivered immediately."""
        first = ChangeNotificationChannel()
        second = ChangeNotificationChannel()
        order: list[str] = []

        def forward(tag: str) -> None:
            second.locale_changed.emit(tag)
            order.append("forwarded")

        first.locale_changed.subscribe(forward)
        second.locale_changed.subscribe(lambda tag: order.append(f"second:{tag}"))

        first.locale_changed.emit("nb-NO")

        assert order == ["second:nb-NO", "forwarded"]

    def test_close_drops_subscribers_keeps_values(self) -> None:
        """close() clears subscribers but cached values survive."""
        channel = ChangeNotificationChannel()
        received: list[str] = []
        channel.locale_changed.subscribe(received.append)
        channel.reload_translations.subscribe(lambda: received.append("reload"))
        channel.locale_changed.emit("en-GB")

        channel.close()
        channel.locale_changed.emit("en-AU")
        channel.reload_translations.emit()

        assert received == ["en-GB"]
        assert len(channel.locale_changed) == 0
        assert channel.locale_changed.value == "en-AU"

    def test_repr(self) -> None:
        """repr shows cached values."""
        channel = ChangeNotificationChannel()
        channel.language_changed.emit("en")

        assert repr(channel) == (
            "ChangeNotificationChannel(language='en', locale=None, currency=None)"
        )
