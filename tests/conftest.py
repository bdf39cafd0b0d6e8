"""
Shared pytest fixtures and configuration for batched_dispatch tests.
"""

import pytest

from batched_dispatch import BatchedStore
from tests.utils import FakeClock, ManualTrigger, create_store
from tests.utils import actions


@pytest.fixture
def container():
    """A fresh reference container holding a todo list."""
    return create_store(actions.todos)


@pytest.fixture
def store(container):
    """Provide a BatchedStore over the todo container without channels."""
    return BatchedStore(container)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manual():
    """A limiter factory that only flushes when fire() is called."""
    return ManualTrigger()
