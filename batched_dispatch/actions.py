"""
Batched Dispatch Actions
========================

The batch envelope and helpers for telling batches apart from single actions.

A plain action is any mapping with a ``type`` key and is handed to the
container untouched. A batch is either an ordered sequence of actions or a
BatchAction envelope, which additionally names the channel the batch should be
routed through:

```python
from batched_dispatch import batch_action

store.dispatch([add_todo("Hello"), add_todo("World")])
store.dispatch(batch_action([add_todo("Hello"), add_todo("World")], "throttle"))
```
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Mapping, Optional, Sequence

BATCH = "@@batched_dispatch/BATCH"


@dataclass(frozen=True)
class BatchAction:
    """
    Envelope carrying a payload and the channel it should be dispatched on.

    The envelope is only meaningful to BatchedStore; the container never sees
    it, only the leaf actions inside ``payload``.
    """

    payload: Any
    channel: Optional[Hashable] = None
    type: str = field(default=BATCH, init=False)

    def as_dict(self) -> Dict[str, Any]:
        """Render the envelope in its wire shape."""
        return {
            "type": self.type,
            "meta": {"channel": self.channel},
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BatchAction":
        """Rebuild an envelope from the shape produced by as_dict()."""
        meta = data.get("meta") or {}
        return cls(data["payload"], meta.get("channel"))


def batch_action(payload: Any, channel: Optional[Hashable] = None) -> BatchAction:
    """Wrap an action or a sequence of actions, optionally bound to a channel."""
    return BatchAction(payload, channel)


def as_batch_action(action: Any) -> Optional[BatchAction]:
    """
    The envelope behind ``action``, or None for anything that is not a batch.

    Accepts BatchAction instances as well as mappings tagged with BATCH, which
    is what an envelope looks like after a round trip through as_dict().
    """
    if isinstance(action, BatchAction):
        return action
    if isinstance(action, Mapping) and action.get("type") == BATCH:
        return BatchAction.from_dict(action)
    return None


def is_action_sequence(action: Any) -> bool:
    """True for lists, tuples and other non-string sequences of actions."""
    return isinstance(action, Sequence) and not isinstance(
        action, (str, bytes, bytearray)
    )


def count_leaves(action: Any) -> int:
    """Number of leaf actions a dispatch of ``action`` delivers to the container."""
    envelope = as_batch_action(action)
    if envelope is not None:
        return count_leaves(envelope.payload)
    if is_action_sequence(action):
        return sum(count_leaves(item) for item in action)
    return 1
