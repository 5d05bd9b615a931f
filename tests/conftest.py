"""
kvlink Test Configuration
=========================

Shared fixtures for all tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock


# Mapping fixtures
@pytest.fixture
def customer_entity():
    from kvlink.mapping import PersistentEntity
    return PersistentEntity("customer")


@pytest.fixture
def order_entity():
    from kvlink.mapping import PersistentEntity
    return PersistentEntity("order")


@pytest.fixture
def orders_association(customer_entity, order_entity):
    """customer -[orders]-> order"""
    from kvlink.mapping import Association
    return Association("orders", owner=customer_entity, associated_entity=order_entity)


# Mock link store for unit tests
@pytest.fixture
def mock_store():
    """Mock LinkStore: link writes succeed, link walks return nothing."""
    store = MagicMock()
    store.link = AsyncMock(return_value=None)
    store.unlink = AsyncMock(return_value=True)
    store.links_to = AsyncMock(return_value=[])
    store.health_check = AsyncMock(return_value=True)
    return store


@pytest.fixture
def memory_store():
    from kvlink.storage import InMemoryLinkStore
    return InMemoryLinkStore()
