"""Dependency injection module."""

from typing import Iterable, Type

from gouache.util.di.application import ProdApplicationProvider
from gouache.util.di.base import Component, ProviderBase, ProviderSelectionError
from gouache.util.di.core import ProdConfigProvider
from gouache.util.di.domain import ProdDomainProvider
from gouache.util.di.infrastructure import (
    PaymentsProvider,
    PersistenceProvider,
    ProdPaymentsProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    PaymentsProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__
    for base in PROVIDERS
    if base.__mock_component__ is not None
)


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    A provider without subclasses is used as is. Otherwise the subclass
    whose __is_mock__ flag matches use_mock is returned.

    Args:
        base: Provider listed in PROVIDERS
        use_mock: Whether the mock implementation is wanted

    Returns:
        Provider class (not instantiated)

    Raises:
        ProviderSelectionError: If no implementation of that kind exists
    """
    if not base.is_swappable():
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ProviderSelectionError(
        f"No {kind} provider for {base.__mock_component__ or base.__name__}"
    )


def select_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry of PROVIDERS.

    Args:
        mocked: Components to fake; everything else is production

    Returns:
        Provider instances ready for make_async_container

    Raises:
        ProviderSelectionError: If a component is unknown or has no mock
    """
    mocked = set(mocked)
    unknown = mocked - COMPONENTS
    if unknown:
        raise ProviderSelectionError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "COMPONENTS",
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "ProviderSelectionError",
    "get_provider",
    "select_providers",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "PaymentsProvider",
    "PersistenceProvider",
    "ProdPaymentsProvider",
    "ProdPersistenceProvider",
]
