"""
Batch Unwrapper
===============

BatchUnwrapper turns one logical dispatch into leaf deliveries to the
container followed by a single notification round.

Sequences are walked depth-first, left to right, and the container's results
are returned in a list of the same shape:

```python
unwrapper.dispatch([add_todo("a"), [add_todo("b"), add_todo("c")]])
# -> [result_a, [result_b, result_c]], listeners notified once
```

If a leaf raises, the remaining leaves are skipped, the error propagates and
no notification round runs for that dispatch.
"""

import logging
from typing import Any, Callable

from .actions import as_batch_action, count_leaves, is_action_sequence
from .context import DispatchContext
from .listeners import ListenerRegistry

logger = logging.getLogger(__name__)


class BatchUnwrapper:
    """Delivers leaf actions to the container and notifies listeners once."""

    def __init__(
        self,
        deliver: Callable[[Any], Any],
        listeners: ListenerRegistry,
        context: DispatchContext,
    ):
        self._deliver = deliver
        self._listeners = listeners
        self._context = context

    def dispatch(self, action: Any) -> Any:
        if is_action_sequence(action) and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Dispatching batch of {count_leaves(action)} actions")

        with self._context:
            try:
                result = self._deliver_all(action)
            except Exception:
                logger.debug("Leaf delivery failed, skipping notification round")
                raise

        self._listeners.notify()
        return result

    def _deliver_all(self, action: Any) -> Any:
        # An envelope nested in a batch joins the batch; its channel is moot here.
        envelope = as_batch_action(action)
        if envelope is not None:
            return self._deliver_all(envelope.payload)
        if is_action_sequence(action):
            return [self._deliver_all(item) for item in action]
        return self._deliver(action)
