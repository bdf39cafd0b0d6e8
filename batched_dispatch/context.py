"""
Batched Dispatch Context
========================

DispatchContext marks the window during which leaf actions are being applied
to the wrapped container. The listener registry refuses to change its
listeners while the context is active, mirroring the container's own rule that
nothing may subscribe from inside a reducer.

The context nests: a dispatch issued while another one is still delivering
leaves keeps the flag raised until the outermost delivery finishes.
"""


class DispatchContext:
    """Re-entrant flag raised while leaves are delivered to the container."""

    __slots__ = ("_depth",)

    def __init__(self):
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    def __enter__(self):
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._depth -= 1

    def __repr__(self) -> str:
        return f"DispatchContext(active={self.active})"
