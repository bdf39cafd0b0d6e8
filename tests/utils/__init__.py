"""
Test utilities for batched_dispatch.

This package contains a reference container, shared actions and reducers,
and deterministic limiter doubles.
"""

from .containers import ReferenceContainer, combine_reducers, create_store
from .limiters import Debounce, FakeClock, ManualTrigger, Throttle, debounce, throttle

__all__ = [
    "ReferenceContainer",
    "combine_reducers",
    "create_store",
    "Debounce",
    "FakeClock",
    "ManualTrigger",
    "Throttle",
    "debounce",
    "throttle",
]
