"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from gouache.util.di import COMPONENTS, Component, select_providers


def build_test_container(
    unmock: set[Component] | None = None, with_fastapi: bool = False
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables (the autouse fixture
    sets ENVIRONMENT=test).

    Args:
        unmock: Components to use production implementations for.
                All others use mocks.
        with_fastapi: Add the FastAPI integration provider, for containers
                handed to create_app

    Returns:
        Configured test container

    Raises:
        ProviderSelectionError: If unmock names an unknown component

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Real payment processor client, mocked database
        container = build_test_container(unmock={"payments"})

        # E2E tests - mocks behind the real HTTP app
        app = create_app(container=build_test_container(with_fastapi=True))
    """
    unmock = unmock or set()
    providers = select_providers(mocked=COMPONENTS - unmock)
    if with_fastapi:
        providers.append(FastapiProvider())
    return make_async_container(*providers)
