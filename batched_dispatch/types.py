"""
Batched Dispatch Types
======================

Protocols and type aliases shared across the package.

The container protocol describes the store being decorated. Anything with the
four methods below can be wrapped, whether it is a hand-written store or an
adapter around another state library.
"""

from typing import (
    Any,
    Callable,
    Hashable,
    Mapping,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

Action = Mapping[str, Any]
ActionOrBatch = Union[Action, Sequence[Any]]

Listener = Callable[[], Any]
Unsubscribe = Callable[[], None]
Reducer = Callable[[Any, Action], Any]

ChannelName = Hashable
Flush = Callable[[], None]
GatedDispatch = Callable[[Any], Any]
LimiterFactory = Callable[[Flush], GatedDispatch]


@runtime_checkable
class Container(Protocol):
    """
    Protocol for the state container wrapped by BatchedStore.

    `dispatch` must reject calls made while the container is applying its
    reducer; the decorator relies on that guard instead of duplicating it.
    """

    def dispatch(self, action: Action) -> Any:
        ...

    def subscribe(self, listener: Listener) -> Unsubscribe:
        ...

    def get_state(self) -> Any:
        ...

    def replace_reducer(self, reducer: Reducer) -> None:
        ...
