"""Mock providers for testing."""

from .payments import MockPaymentsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockPaymentsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
