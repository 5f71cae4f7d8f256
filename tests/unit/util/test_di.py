"""Tests for provider selection."""

import pytest

from gouache.util.di import (
    COMPONENTS,
    PaymentsProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdPaymentsProvider,
    ProdPersistenceProvider,
    ProviderSelectionError,
    get_provider,
    select_providers,
)
from tests.di import MockPaymentsProvider, MockPersistenceProvider


def test_components():
    assert COMPONENTS == {"persistence", "payments"}


def test_concrete_provider_used_as_is():
    assert get_provider(ProdConfigProvider) is ProdConfigProvider
    assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider


def test_swappable_provider_by_flag():
    assert get_provider(PaymentsProvider) is ProdPaymentsProvider
    assert get_provider(PaymentsProvider, use_mock=True) is MockPaymentsProvider
    assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


def test_select_mocks_only_named_components():
    providers = select_providers(mocked={"payments"})
    kinds = {type(provider) for provider in providers}

    assert MockPaymentsProvider in kinds
    assert ProdPersistenceProvider in kinds
    assert MockPersistenceProvider not in kinds


def test_unknown_component_rejected():
    with pytest.raises(ProviderSelectionError, match="Unknown components"):
        select_providers(mocked={"search"})
