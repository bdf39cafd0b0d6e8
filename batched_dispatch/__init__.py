"""
batched_dispatch - Batched Dispatch for State Containers

Wraps a state container so a batch of actions notifies listeners once, and
lets named channels of actions wait on caller-supplied rate limiters.
"""

from .actions import (
    BATCH,
    BatchAction,
    as_batch_action,
    batch_action,
    is_action_sequence,
)
from .batch import BatchUnwrapper
from .channels import Channel, ChannelQueue
from .context import DispatchContext
from .errors import (
    BatchedDispatchError,
    IllegalReentrantCallError,
    InvalidArgumentError,
    UnknownChannelError,
)
from .listeners import ListenerRegistry
from .observable import StateObservable, Subscription
from .store import BatchedStore, create_batch_enhancer
from .types import Container, LimiterFactory

__all__ = [
    # Store
    "BatchedStore",
    "create_batch_enhancer",
    # Actions
    "BATCH",
    "BatchAction",
    "as_batch_action",
    "batch_action",
    "is_action_sequence",
    # Building blocks
    "BatchUnwrapper",
    "Channel",
    "ChannelQueue",
    "DispatchContext",
    "ListenerRegistry",
    "StateObservable",
    "Subscription",
    # Protocols
    "Container",
    "LimiterFactory",
    # Exceptions
    "BatchedDispatchError",
    "IllegalReentrantCallError",
    "InvalidArgumentError",
    "UnknownChannelError",
]
