"""
Batched Store
=============

BatchedStore decorates a state container so that callers can dispatch a
single action, an ordered batch of actions, or a batch routed through a
rate-limited channel, while listeners hear about each logical dispatch once.

Basic Usage
-----------

```python
from batched_dispatch import BatchedStore, batch_action

store = BatchedStore(create_store(todos))
store.subscribe(lambda: print(store.get_state()))

store.dispatch([add_todo("Hello"), add_todo("World")])   # prints once
```

Channels
--------

Channels are declared once, as a mapping of channel name to limiter factory.
A limiter factory receives the channel's ``flush`` callable and returns the
callable the store invokes on every enqueue. When to call ``flush`` is
entirely up to the limiter:

```python
store = BatchedStore(
    create_store(todos),
    channels={"throttle": lambda flush: throttle(flush, 0.1)},
)

store.dispatch(add_todo("Rate"), "throttle")
store.dispatch(batch_action([add_todo("Limited")], "throttle"))
store.clear_action_queue("throttle")    # drop whatever has not flushed yet
```

An explicit channel argument to ``dispatch`` wins over the channel carried by
a BatchAction. Naming a channel that was not declared raises
UnknownChannelError; there is no fallback to direct dispatch.

Enhancer
--------

``create_batch_enhancer`` adapts the decorator to the enhancer convention,
``enhancer(create_store)(*args)``, so it composes with container factories
that accept an enhancer.
"""

import logging
from typing import Any, Callable, Hashable, Mapping, Optional, Tuple

from .actions import as_batch_action
from .batch import BatchUnwrapper
from .channels import ChannelQueue
from .context import DispatchContext
from .listeners import ListenerRegistry
from .observable import StateObservable
from .types import Container, LimiterFactory, Listener, Reducer, Unsubscribe

logger = logging.getLogger(__name__)


class BatchedStore:
    """
    Container decorator with batched dispatch and rate-limited channels.

    Each instance owns its listeners, its channel queues and its dispatch
    context; nothing is shared between stores.
    """

    def __init__(
        self,
        container: Container,
        channels: Optional[Mapping[Hashable, LimiterFactory]] = None,
    ):
        self._container = container
        self._context = DispatchContext()
        self._listeners = ListenerRegistry(self._context)
        self._unwrapper = BatchUnwrapper(
            container.dispatch, self._listeners, self._context
        )
        self._channels = ChannelQueue(channels, self._unwrapper.dispatch)

    @property
    def container(self) -> Container:
        return self._container

    @property
    def channels(self) -> Tuple[Hashable, ...]:
        return self._channels.names

    def dispatch(self, action: Any, channel: Optional[Hashable] = None) -> Any:
        """
        Dispatch an action, a sequence of actions, or a BatchAction (also in its
        as_dict() shape).

        Without a channel the actions reach the container immediately and
        listeners are notified once. With a channel they are queued and
        delivered when that channel's limiter flushes.

        Returns:
            The container's result (a list of results for a sequence), or
            whatever the channel's limiter returned for a queued dispatch.
        """
        envelope = as_batch_action(action)
        if envelope is not None:
            if channel is None:
                channel = envelope.channel
            action = envelope.payload

        if channel is None:
            return self._unwrapper.dispatch(action)
        return self._channels.enqueue(channel, action)

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self._listeners.subscribe(listener)

    def get_state(self) -> Any:
        return self._container.get_state()

    def replace_reducer(self, next_reducer: Reducer) -> None:
        self._container.replace_reducer(next_reducer)

    def clear_action_queue(self, channel: Optional[Hashable] = None) -> None:
        """Discard pending actions of ``channel``, or of every channel."""
        self._channels.clear(channel)

    def get_action_queue(self, channel: Hashable) -> Tuple[Any, ...]:
        """Snapshot of the actions waiting on ``channel``."""
        return self._channels.pending(channel)

    def to_observable(self) -> StateObservable:
        return StateObservable(self.subscribe, self.get_state)

    def __repr__(self) -> str:
        return (
            f"BatchedStore(container={self._container!r}, "
            f"channels={list(self.channels)!r}, listeners={len(self._listeners)})"
        )


def create_batch_enhancer(
    channels: Optional[Mapping[Hashable, LimiterFactory]] = None,
) -> Callable[[Callable[..., Container]], Callable[..., BatchedStore]]:
    """
    Build an enhancer that wraps every store created through it.

    ```python
    enhanced_create_store = create_batch_enhancer({"debounce": debounced})(create_store)
    store = enhanced_create_store(todos)
    ```

    Each created store gets its own channel queues and limiter instances.
    """
    if channels is not None:
        channels = dict(channels)

    def enhancer(create_store: Callable[..., Container]) -> Callable[..., BatchedStore]:
        def create_batched_store(*args: Any, **kwargs: Any) -> BatchedStore:
            store = BatchedStore(create_store(*args, **kwargs), channels)
            logger.debug(f"Created {store!r}")
            return store

        return create_batched_store

    return enhancer
