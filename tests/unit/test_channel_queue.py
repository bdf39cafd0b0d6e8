"""Unit tests for ChannelQueue."""

from unittest.mock import Mock

import pytest

from batched_dispatch import ChannelQueue, InvalidArgumentError, UnknownChannelError
from tests.utils import ManualTrigger


@pytest.fixture
def deliver():
    return Mock(name="deliver")


@pytest.fixture
def queue(manual, deliver):
    return ChannelQueue({"slow": manual}, deliver)


class TestConstruction:
    """Validation of the channel declarations."""

    def test_no_channels(self, deliver):
        queue = ChannelQueue(None, deliver)
        assert queue.names == ()

    def test_rejects_non_callable_factory(self, deliver):
        with pytest.raises(InvalidArgumentError, match="'fast'"):
            ChannelQueue({"fast": "not a function"}, deliver)

    def test_validates_every_factory_before_calling_any(self, deliver):
        factory = Mock(return_value=Mock())

        with pytest.raises(InvalidArgumentError):
            ChannelQueue({"ok": factory, "broken": 3}, deliver)

        factory.assert_not_called()

    def test_rejects_none_channel_name(self, deliver):
        with pytest.raises(InvalidArgumentError, match="None"):
            ChannelQueue({None: ManualTrigger()}, deliver)

    def test_rejects_factory_returning_non_callable(self, deliver):
        with pytest.raises(InvalidArgumentError, match="return a callable"):
            ChannelQueue({"slow": lambda flush: None}, deliver)

    def test_each_factory_called_once_with_a_flush(self, deliver):
        factory = Mock(return_value=Mock())

        queue = ChannelQueue({"a": factory}, deliver)

        factory.assert_called_once()
        (flush,), _ = factory.call_args
        assert callable(flush)
        assert queue.names == ("a",)
        assert "a" in queue
        assert "b" not in queue


class TestEnqueue:
    """Appending to a channel and informing its limiter."""

    def test_unknown_channel_raises_and_enqueues_nothing(self, queue, manual):
        with pytest.raises(UnknownChannelError, match="'fast'") as excinfo:
            queue.enqueue("fast", "a")

        assert excinfo.value.channel == "fast"
        assert manual.seen == []
        assert queue.pending("slow") == ()

    def test_unknown_channel_is_a_lookup_error(self, queue):
        with pytest.raises(LookupError):
            queue.enqueue("fast", "a")

    def test_unhashable_channel_is_unknown(self, queue, manual):
        with pytest.raises(UnknownChannelError) as excinfo:
            queue.enqueue(["slow"], "a")

        assert excinfo.value.channel == ["slow"]
        assert ["slow"] not in queue
        assert manual.seen == []

    def test_limiter_sees_every_attempt(self, queue, manual, deliver):
        queue.enqueue("slow", "a")
        queue.enqueue("slow", "b")

        assert manual.seen == ["a", "b"]
        assert queue.pending("slow") == ("a", "b")
        deliver.assert_not_called()

    def test_returns_limiter_result(self, deliver):
        queue = ChannelQueue({"c": lambda flush: lambda action: "gated"}, deliver)
        assert queue.enqueue("c", "a") == "gated"


class TestFlush:
    """Delivering a channel's queue as a single batch."""

    def test_flush_delivers_queue_in_order_once(self, queue, manual, deliver):
        for action in ("a", "b", "c"):
            queue.enqueue("slow", action)

        manual.fire()

        deliver.assert_called_once_with(["a", "b", "c"])
        assert queue.pending("slow") == ()

    def test_flush_of_empty_queue_is_a_no_op(self, queue, manual, deliver):
        manual.fire()
        deliver.assert_not_called()

    def test_actions_enqueued_during_delivery_wait_for_next_flush(self, manual):
        delivered = []

        def deliver(batch):
            delivered.append(list(batch))
            if batch == ["a"]:
                queue.enqueue("slow", "late")

        queue = ChannelQueue({"slow": manual}, deliver)
        queue.enqueue("slow", "a")

        manual.fire()
        assert delivered == [["a"]]
        assert queue.pending("slow") == ("late",)

        manual.fire()
        assert delivered == [["a"], ["late"]]

    def test_failed_delivery_leaves_queue_cleared(self, manual):
        queue = ChannelQueue({"slow": manual}, Mock(side_effect=RuntimeError("down")))
        queue.enqueue("slow", "a")

        with pytest.raises(RuntimeError, match="down"):
            manual.fire()

        assert queue.pending("slow") == ()

    def test_flush_unknown_channel_raises(self, queue):
        with pytest.raises(UnknownChannelError):
            queue.flush("fast")


class TestClear:
    """Discarding pending actions without delivering them."""

    def test_clear_one_channel(self, deliver):
        slow, other = ManualTrigger(), ManualTrigger()
        queue = ChannelQueue({"slow": slow, "other": other}, deliver)
        queue.enqueue("slow", "a")
        queue.enqueue("other", "b")

        queue.clear("slow")

        assert queue.pending("slow") == ()
        assert queue.pending("other") == ("b",)
        slow.fire()
        deliver.assert_not_called()

    def test_clear_all_channels(self, deliver):
        slow, other = ManualTrigger(), ManualTrigger()
        queue = ChannelQueue({"slow": slow, "other": other}, deliver)
        queue.enqueue("slow", "a")
        queue.enqueue("other", "b")

        queue.clear()

        slow.fire()
        other.fire()
        deliver.assert_not_called()

    def test_clear_unknown_channel_raises(self, queue):
        with pytest.raises(UnknownChannelError):
            queue.clear("fast")

    def test_enqueue_after_clear_is_delivered(self, queue, manual, deliver):
        queue.enqueue("slow", "stale")
        queue.clear("slow")
        queue.enqueue("slow", "fresh")

        manual.fire()

        deliver.assert_called_once_with(["fresh"])
