"""Infrastructure providers."""

# Import bases
from .payments import PaymentsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .payments import ProdPaymentsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "PaymentsProvider",
    "PersistenceProvider",
    "ProdPaymentsProvider",
    "ProdPersistenceProvider",
]
