"""Container fixtures for tests that resolve services from DI."""

import pytest_asyncio

from gouache.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Make a fixture yielding a request-scoped container.

    Each test gets a fresh container, so in-memory stores and the mock
    Stripe oracle start empty.

    Args:
        unmock: Components to resolve from production providers

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_issue(unit_env):
            registry = await unit_env.get(InviteRegistry)
            invite = await registry.issue(Email(root="ana@example.com"))
            assert invite.status == InviteStatus.PENDING
    """

    @pytest_asyncio.fixture
    async def _env():
        container = build_test_container(unmock=unmock)
        async with container() as request_container:
            yield request_container
        await container.close()

    return _env
