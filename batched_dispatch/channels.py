"""
Channel Queues
==============

A channel is a named delivery path whose timing is decided by a caller
supplied rate limiter. The store never implements throttling or debouncing
itself; it only hands each limiter a ``flush`` callable and keeps the actions
that are waiting for it.

```python
def throttled(flush):
    return throttle(flush, 0.1)      # any callable(action) works

queue = ChannelQueue({"throttle": throttled}, unwrapper.dispatch)
queue.enqueue("throttle", add_todo("Hello"))
```

Every enqueue appends to the channel's queue and then informs the limiter.
When the limiter calls ``flush`` the whole queue is delivered as one batch, so
listeners hear about it once. The queue is swapped out before delivery:
actions enqueued while the batch is being delivered wait for the next flush.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from .errors import InvalidArgumentError, UnknownChannelError
from .types import GatedDispatch, LimiterFactory

logger = logging.getLogger(__name__)


@dataclass
class Channel:
    """Pending actions of one channel and the limiter gating them."""

    name: Hashable
    queue: List[Any] = field(default_factory=list)
    trigger: Optional[GatedDispatch] = None


class ChannelQueue:
    """Per-channel queues flushed through a shared delivery callable."""

    def __init__(
        self,
        limiter_factories: Optional[Mapping[Hashable, LimiterFactory]],
        deliver: Callable[[List[Any]], Any],
    ):
        self._deliver = deliver
        self._channels: Dict[Hashable, Channel] = {}

        factories = dict(limiter_factories or {})
        for name, factory in factories.items():
            if name is None:
                raise InvalidArgumentError("Channel names may not be None.")
            if not callable(factory):
                raise InvalidArgumentError(
                    f"Expected the limiter factory for channel {name!r} to be callable."
                )

        for name, factory in factories.items():
            channel = Channel(name)
            self._channels[name] = channel
            trigger = factory(self._flusher(name))
            if not callable(trigger):
                raise InvalidArgumentError(
                    f"Expected the limiter factory for channel {name!r} "
                    f"to return a callable."
                )
            channel.trigger = trigger

    def _flusher(self, name: Hashable) -> Callable[[], None]:
        def flush() -> None:
            self.flush(name)

        return flush

    def _lookup(self, name: Hashable) -> Channel:
        if name not in self:
            raise UnknownChannelError(name)
        return self._channels[name]

    @property
    def names(self) -> Tuple[Hashable, ...]:
        return tuple(self._channels)

    def __contains__(self, name: Hashable) -> bool:
        try:
            return name in self._channels
        except TypeError:
            # Unhashable names can never have been declared.
            return False

    def enqueue(self, name: Hashable, action: Any) -> Any:
        """Queue ``action`` on channel ``name`` and let its limiter know."""
        channel = self._lookup(name)
        channel.queue.append(action)
        logger.debug(f"Queued action on {name!r} ({len(channel.queue)} pending)")
        return channel.trigger(action)

    def flush(self, name: Hashable) -> None:
        """Deliver everything queued on ``name`` as one batch."""
        channel = self._lookup(name)
        if not channel.queue:
            return

        batch, channel.queue = channel.queue, []
        logger.debug(f"Flushing {len(batch)} actions from {name!r}")
        self._deliver(batch)

    def clear(self, name: Optional[Hashable] = None) -> None:
        """Drop pending actions of one channel, or of every channel."""
        if name is None:
            for channel in self._channels.values():
                channel.queue = []
            logger.debug("Cleared all channel queues")
            return

        self._lookup(name).queue = []
        logger.debug(f"Cleared queue of {name!r}")

    def pending(self, name: Hashable) -> Tuple[Any, ...]:
        return tuple(self._lookup(name).queue)
