"""
State Observable
================

StateObservable exposes a store's state as a push stream. Subscribing replays
the current state once, then pushes the state again after every notification
round, so observers only ever see fully applied batches.

```python
subscription = store.to_observable().subscribe(Printer())   # Printer.next(state)
store.dispatch([add_todo("a"), add_todo("b")])               # one push
subscription.unsubscribe()
```

``to_rx()`` bridges the same stream into reactivex so the usual operators
can be applied:

```python
from reactivex import operators as ops

store.to_observable().to_rx().pipe(ops.map(len)).subscribe(print)
```
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import reactivex
from reactivex.disposable import Disposable

from .errors import InvalidArgumentError
from .types import Listener, Unsubscribe

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def _next_handler(observer: Any) -> Optional[Callable[[Any], Any]]:
    if isinstance(observer, Mapping):
        return observer.get("next") or observer.get("on_next")
    handler = getattr(observer, "next", None)
    if handler is None:
        handler = getattr(observer, "on_next", None)
    return handler


@dataclass(frozen=True)
class Subscription:
    """Handle returned by StateObservable.subscribe."""

    unsubscribe: Unsubscribe


class StateObservable:
    """Push-stream view over a store's listeners and state accessor."""

    def __init__(
        self,
        subscribe: Callable[[Listener], Unsubscribe],
        get_state: Callable[[], Any],
    ):
        self._subscribe = subscribe
        self._get_state = get_state

    def subscribe(self, observer: Any) -> Subscription:
        if observer is None or isinstance(observer, _SCALARS):
            raise InvalidArgumentError("Expected the observer to be an object.")
        handler = _next_handler(observer)
        if handler is None and callable(observer):
            raise InvalidArgumentError("Expected the observer to be an object.")

        def observe_state() -> None:
            if handler is not None:
                handler(self._get_state())

        observe_state()
        return Subscription(self._subscribe(observe_state))

    def to_rx(self) -> reactivex.Observable:
        def on_subscribe(observer, scheduler=None):
            subscription = self.subscribe(observer)
            return Disposable(subscription.unsubscribe)

        return reactivex.create(on_subscribe)
