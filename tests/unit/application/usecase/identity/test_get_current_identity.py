"""Tests for GetCurrentIdentityUseCase."""

import pytest

from gouache.application.usecase.identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityUseCase,
)
from gouache.domain.error import IdentityPendingError, IdentityUnavailableError
from tests.conftest import auth_cookies, make_identity, make_token
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCurrentIdentityUseCase:
    """Tests for GetCurrentIdentityUseCase."""

    @pytest.mark.asyncio
    async def test_valid_token_resolves_identity(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCurrentIdentityUseCase)
        identity = make_identity("ana@example.com", identity_id="user_ana")
        token = auth_cookies(identity)["auth_token"]

        # Act
        resolved = await use_case.execute(GetCurrentIdentityRequest(token=token))

        # Assert
        assert resolved == identity

    @pytest.mark.asyncio
    async def test_missing_token(self, unit_env):
        use_case = await unit_env.get(GetCurrentIdentityUseCase)

        with pytest.raises(IdentityUnavailableError):
            await use_case.execute(GetCurrentIdentityRequest(token=None))

    @pytest.mark.asyncio
    async def test_garbage_token(self, unit_env):
        use_case = await unit_env.get(GetCurrentIdentityUseCase)

        with pytest.raises(IdentityUnavailableError):
            await use_case.execute(GetCurrentIdentityRequest(token="not-a-jwt"))

    @pytest.mark.asyncio
    async def test_unconfirmed_sign_in_is_pending(self, unit_env):
        use_case = await unit_env.get(GetCurrentIdentityUseCase)
        token = make_token("user_ana", None)

        with pytest.raises(IdentityPendingError) as exc_info:
            await use_case.execute(GetCurrentIdentityRequest(token=token))
        assert exc_info.value.retry_after == 1
