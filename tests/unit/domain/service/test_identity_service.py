"""Unit tests for IdentityService and the token identity provider."""

import pytest

from gouache.config import AuthSettings
from gouache.domain.error import IdentityPendingError, IdentityUnavailableError
from gouache.domain.service import (
    IdentityProvider,
    IdentityService,
    JWTService,
    TokenIdentityProvider,
)
from tests.conftest import make_identity, make_token


class CountingProvider(IdentityProvider):
    """Reports a fixed answer and counts the asks."""

    def __init__(self, identity) -> None:
        self.identity = identity
        self.calls = 0

    async def current_identity(self):
        self.calls += 1
        return self.identity


class TestResolve:
    """Tests for resolve method."""

    @pytest.mark.asyncio
    async def test_resolved_identity_is_returned(self):
        identity = make_identity()
        service = IdentityService(retry_after_seconds=1)

        resolved = await service.resolve(CountingProvider(identity))

        assert resolved == identity

    @pytest.mark.asyncio
    async def test_unknown_identity_asks_caller_to_retry(self):
        # Arrange
        provider = CountingProvider(None)
        service = IdentityService(retry_after_seconds=3)

        # Act & Assert
        with pytest.raises(IdentityPendingError) as exc_info:
            await service.resolve(provider)
        assert exc_info.value.retry_after == 3
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_pending_is_a_kind_of_unavailable(self):
        service = IdentityService(retry_after_seconds=1)

        with pytest.raises(IdentityUnavailableError):
            await service.resolve(CountingProvider(None))


class TestTokenIdentityProvider:
    """Tests for reading the identity from a sign-in token."""

    @pytest.mark.asyncio
    async def test_confirmed_token(self):
        identity = make_identity(identity_id="user_ana")
        token = make_token(identity.id, identity.email.root, identity.display_name)
        provider = TokenIdentityProvider(JWTService(AuthSettings()), token)

        assert await provider.current_identity() == identity

    @pytest.mark.asyncio
    async def test_token_without_email_is_not_yet_known(self):
        token = make_token("user_ana", None)
        provider = TokenIdentityProvider(JWTService(AuthSettings()), token)

        assert await provider.current_identity() is None

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        provider = TokenIdentityProvider(JWTService(AuthSettings()), "not-a-jwt")

        with pytest.raises(IdentityUnavailableError):
            await provider.current_identity()

    @pytest.mark.asyncio
    async def test_malformed_email_claim(self):
        token = make_token("user_ana", "not-an-email")
        provider = TokenIdentityProvider(JWTService(AuthSettings()), token)

        with pytest.raises(IdentityUnavailableError):
            await provider.current_identity()
