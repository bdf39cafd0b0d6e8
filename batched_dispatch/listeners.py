"""
Copy-on-Write Listener Registry
===============================

ListenerRegistry keeps the store's listeners in two slots:

- ``_current``: the snapshot the running notification round iterates over
- ``_next``: the list that subscribe/unsubscribe mutate

Both slots point at the same list until the first mutation after a round,
at which point ``_next`` is copied. A listener that unsubscribes itself, or
subscribes another listener, therefore never disturbs the round it is running
in; the change becomes visible from the next round on.
"""

import logging
from typing import List

from .context import DispatchContext
from .errors import IllegalReentrantCallError, InvalidArgumentError
from .types import Listener, Unsubscribe

logger = logging.getLogger(__name__)


class _Registration:
    """One subscription. Registering the same callable twice yields two entries."""

    __slots__ = ("listener",)

    def __init__(self, listener: Listener):
        self.listener = listener


class ListenerRegistry:
    """Listeners of a BatchedStore, notified once per logical dispatch."""

    __slots__ = ("_context", "_current", "_next")

    def __init__(self, context: DispatchContext):
        self._context = context
        self._current: List[_Registration] = []
        self._next = self._current

    def _ensure_can_mutate_next(self) -> None:
        if self._next is self._current:
            self._next = self._current.copy()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Register ``listener`` for every future notification round.

        Returns a callable that removes this registration. Calling it again
        after the first time does nothing.
        """
        if not callable(listener):
            raise InvalidArgumentError("Expected the listener to be callable.")

        if self._context.active:
            raise IllegalReentrantCallError(
                "You may not call subscribe() while actions are being applied to "
                "the container. If you would like to be notified after the store "
                "has been updated, subscribe outside of the reducer and read "
                "get_state() in the callback."
            )

        registration = _Registration(listener)
        self._ensure_can_mutate_next()
        self._next.append(registration)
        is_subscribed = True

        def unsubscribe() -> None:
            nonlocal is_subscribed
            if not is_subscribed:
                return

            if self._context.active:
                raise IllegalReentrantCallError(
                    "You may not unsubscribe from a store listener while actions "
                    "are being applied to the container."
                )

            is_subscribed = False
            self._ensure_can_mutate_next()
            for index, entry in enumerate(self._next):
                if entry is registration:
                    del self._next[index]
                    break

        return unsubscribe

    def notify(self) -> None:
        """Run one notification round over the latest listener snapshot."""
        listeners = self._current = self._next
        for registration in listeners:
            try:
                registration.listener()
            except Exception:
                logger.debug(
                    f"Listener {registration.listener!r} raised, "
                    f"aborting notification round"
                )
                raise

    def __len__(self) -> int:
        return len(self._next)
