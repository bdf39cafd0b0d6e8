"""
Batched Dispatch Errors
=======================

Exceptions raised by the batching decorator itself. Errors raised by the
wrapped container or by listeners are never wrapped; they reach the caller
exactly as they were raised.
"""

from typing import Hashable


class BatchedDispatchError(Exception):
    """Base class for errors raised by batched_dispatch."""

    pass


class InvalidArgumentError(BatchedDispatchError, TypeError):
    """Raised when a listener, limiter factory or observer has the wrong shape."""

    pass


class UnknownChannelError(BatchedDispatchError, LookupError):
    """Raised when an action is routed to a channel that was never declared."""

    def __init__(self, channel: Hashable):
        self.channel = channel
        super().__init__(
            f"Invalid channel {channel!r}. You have to declare a limiter factory "
            f"with key {channel!r}."
        )


class IllegalReentrantCallError(BatchedDispatchError, RuntimeError):
    """Raised when listeners are mutated while actions reach the container."""

    pass
