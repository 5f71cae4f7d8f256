"""Tests for invite use cases."""

import pytest

from gouache.application.usecase.invite import (
    GetInviteStateRequest,
    GetInviteStateUseCase,
    IssueInviteRequest,
    IssueInviteUseCase,
    ListInvitesRequest,
    ListInvitesUseCase,
    RevokeInviteRequest,
    RevokeInviteUseCase,
)
from gouache.domain.error import NotAuthorizedError, NotFoundError
from gouache.domain.service import InviteRegistry
from gouache.domain.value import (
    InviteStatus,
    InviteToken,
    RevokeResult,
    ValidationResult,
)
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

CURATOR = make_identity("Curator@Gouache.art", identity_id="user_curator")


class TestIssueInviteUseCase:
    """Tests for IssueInviteUseCase."""

    @pytest.mark.asyncio
    async def test_admin_issues_invite(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IssueInviteUseCase)

        # Act
        response = await use_case.execute(
            IssueInviteRequest(
                issuer=CURATOR,
                email="Ana@Example.com",
                name="Ana Lima",
                message="We loved your show",
            )
        )

        # Assert
        assert response.status == InviteStatus.PENDING
        assert response.email == "ana@example.com"
        assert response.invite_url == (
            f"http://localhost:3000/onboarding/artist/{response.token}"
        )

    @pytest.mark.asyncio
    async def test_configured_expiry(self, unit_env, monkeypatch):
        monkeypatch.setenv("INVITATIONS__EXPIRY_DAYS", "7")
        use_case = await unit_env.get(IssueInviteUseCase)

        response = await use_case.execute(
            IssueInviteRequest(issuer=CURATOR, email="ana@example.com")
        )

        assert (response.expires_at - response.issued_at).days == 7

    @pytest.mark.asyncio
    async def test_non_admin_cannot_issue(self, unit_env):
        use_case = await unit_env.get(IssueInviteUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                IssueInviteRequest(issuer=make_identity(), email="ana@example.com")
            )

    @pytest.mark.asyncio
    async def test_malformed_email(self, unit_env):
        use_case = await unit_env.get(IssueInviteUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(
                IssueInviteRequest(issuer=CURATOR, email="not-an-email")
            )


class TestGetInviteStateUseCase:
    """Tests for GetInviteStateUseCase."""

    @pytest.mark.asyncio
    async def test_pending_invite_is_valid(self, unit_env):
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        use_case = await unit_env.get(GetInviteStateUseCase)
        invite = await registry.issue(CURATOR.email, name="Bo")

        # Act
        response = await use_case.execute(
            GetInviteStateRequest(token=invite.token.root)
        )

        # Assert
        assert response.valid is True
        assert response.validation == ValidationResult.READY
        assert response.name == "Bo"

    @pytest.mark.asyncio
    async def test_revoked_invite_explains_why(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        use_case = await unit_env.get(GetInviteStateUseCase)
        invite = await registry.issue(CURATOR.email)
        await registry.revoke(invite.token)

        response = await use_case.execute(
            GetInviteStateRequest(token=invite.token.root)
        )

        assert response.valid is False
        assert response.status == InviteStatus.REVOKED
        assert response.message == "This invite has been revoked"

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(GetInviteStateUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetInviteStateRequest(token="missing-token"))


class TestRevokeInviteUseCase:
    """Tests for RevokeInviteUseCase."""

    @pytest.mark.asyncio
    async def test_admin_revokes_pending_invite(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        use_case = await unit_env.get(RevokeInviteUseCase)
        invite = await registry.issue(CURATOR.email)

        response = await use_case.execute(
            RevokeInviteRequest(revoker=CURATOR, token=invite.token.root)
        )

        assert response.result == RevokeResult.OK
        assert response.status == InviteStatus.REVOKED

    @pytest.mark.asyncio
    async def test_revoking_redeemed_invite_reports_conflict(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        use_case = await unit_env.get(RevokeInviteUseCase)
        invite = await registry.issue(CURATOR.email)
        await registry.redeem(invite.token, make_identity().id)

        response = await use_case.execute(
            RevokeInviteRequest(revoker=CURATOR, token=invite.token.root)
        )

        assert response.result == RevokeResult.CONFLICT
        assert response.status == InviteStatus.REDEEMED

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(RevokeInviteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RevokeInviteRequest(revoker=CURATOR, token="missing-token")
            )

    @pytest.mark.asyncio
    async def test_non_admin_cannot_revoke(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        use_case = await unit_env.get(RevokeInviteUseCase)
        invite = await registry.issue(CURATOR.email)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                RevokeInviteRequest(revoker=make_identity(), token=invite.token.root)
            )

        current = await registry.find(InviteToken(root=invite.token.root))
        assert current.status == InviteStatus.PENDING


class TestListInvitesUseCase:
    """Tests for ListInvitesUseCase."""

    @pytest.mark.asyncio
    async def test_admin_lists_invites_with_links(self, unit_env):
        # Arrange
        issue = await unit_env.get(IssueInviteUseCase)
        use_case = await unit_env.get(ListInvitesUseCase)
        issued = await issue.execute(
            IssueInviteRequest(issuer=CURATOR, email="ana@example.com", name="Ana")
        )

        # Act
        response = await use_case.execute(ListInvitesRequest(requester=CURATOR))

        # Assert
        assert response.total == 1
        item = response.invites[0]
        assert item.token == issued.token
        assert item.invite_url == issued.invite_url
        assert item.name == "Ana"
        assert item.status == InviteStatus.PENDING
        assert item.validation == ValidationResult.READY

    @pytest.mark.asyncio
    async def test_filter_by_status(self, unit_env):
        # Arrange
        issue = await unit_env.get(IssueInviteUseCase)
        revoke = await unit_env.get(RevokeInviteUseCase)
        use_case = await unit_env.get(ListInvitesUseCase)
        for email in ("ana@example.com", "bea@example.com"):
            await issue.execute(IssueInviteRequest(issuer=CURATOR, email=email))
        listed = await use_case.execute(ListInvitesRequest(requester=CURATOR))
        await revoke.execute(
            RevokeInviteRequest(revoker=CURATOR, token=listed.invites[0].token)
        )

        # Act
        pending = await use_case.execute(
            ListInvitesRequest(requester=CURATOR, status=InviteStatus.PENDING)
        )
        revoked = await use_case.execute(
            ListInvitesRequest(requester=CURATOR, status=InviteStatus.REVOKED)
        )

        # Assert
        assert pending.total == 1
        assert revoked.total == 1
        assert revoked.invites[0].token == listed.invites[0].token

    @pytest.mark.asyncio
    async def test_non_admin_cannot_list(self, unit_env):
        use_case = await unit_env.get(ListInvitesUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(ListInvitesRequest(requester=make_identity()))
