"""Unit tests for the NotificationChannel."""

from __future__ import annotations

from access_gate.infrastructure.notification_channel import NotificationChannel


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def __call__(self, payer: str, timestamp: int) -> None:
        self.calls.append((payer, timestamp))


class TestPublish:
    def test_records_in_order_with_sequence(self, ids) -> None:
        channel = NotificationChannel()
        first = channel.publish(ids.payer, 100)
        second = channel.publish(ids.outsider, 101)
        assert (first.sequence, second.sequence) == (0, 1)
        assert len(channel) == 2
        assert [n.payer for n in channel.history()] == [ids.payer, ids.outsider]

    def test_delivers_payer_and_timestamp_positionally(self, ids) -> None:
        channel = NotificationChannel()
        seen: list[tuple[str, int]] = []
        channel.subscribe(lambda payer, timestamp: seen.append((payer, timestamp)))
        channel.publish(ids.payer, 1_700_000_000)
        assert seen == [(ids.payer, 1_700_000_000)]

    def test_payer_is_normalized(self) -> None:
        channel = NotificationChannel()
        notification = channel.publish("0xABCDEFabcdefABCDEFabcdefABCDEFabcdefABCD", 1)
        assert notification.payer == "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"


class TestSubscribe:
    def test_payer_filter(self, ids) -> None:
        channel = NotificationChannel()
        only_payer = Recorder()
        everyone = Recorder()
        channel.subscribe(only_payer, payer=ids.payer)
        channel.subscribe(everyone)

        channel.publish(ids.outsider, 1)
        channel.publish(ids.payer, 2)

        assert only_payer.calls == [(ids.payer, 2)]
        assert everyone.calls == [(ids.outsider, 1), (ids.payer, 2)]

    def test_cancel_stops_delivery_and_returns_cursor(self, ids) -> None:
        channel = NotificationChannel()
        recorder = Recorder()
        subscription = channel.subscribe(recorder)
        channel.publish(ids.payer, 1)

        assert subscription.cancel() == 1
        assert not subscription.active
        channel.publish(ids.payer, 2)
        assert recorder.calls == [(ids.payer, 1)]

    def test_replay_then_live_without_gap_or_duplicate(self, ids) -> None:
        channel = NotificationChannel()
        for ts in (1, 2, 3):
            channel.publish(ids.payer, ts)

        recorder = Recorder()
        channel.subscribe(recorder, replay_from=1)
        channel.publish(ids.payer, 4)

        assert [ts for _, ts in recorder.calls] == [2, 3, 4]

    def test_failing_listener_does_not_block_others(self, ids) -> None:
        channel = NotificationChannel()

        def broken(payer: str, timestamp: int) -> None:
            raise RuntimeError("listener offline")

        recorder = Recorder()
        channel.subscribe(broken)
        channel.subscribe(recorder)

        notification = channel.publish(ids.payer, 5)
        assert notification.sequence == 0
        assert recorder.calls == [(ids.payer, 5)]


class TestHistory:
    def test_since_and_payer_index(self, ids) -> None:
        channel = NotificationChannel()
        channel.publish(ids.payer, 1)
        channel.publish(ids.outsider, 2)
        channel.publish(ids.payer, 3)

        assert [n.timestamp for n in channel.history(since=1)] == [2, 3]
        assert [n.sequence for n in channel.history(payer=ids.payer)] == [0, 2]
        assert [n.sequence for n in channel.history(since=1, payer=ids.payer)] == [2]
        assert channel.history(payer=ids.other) == []

    def test_history_is_a_copy(self, ids) -> None:
        channel = NotificationChannel()
        channel.publish(ids.payer, 1)
        channel.history().clear()
        assert len(channel) == 1
