"""Unit tests for InviteRegistry."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from gouache.domain.model.invite import Invite
from gouache.domain.repository import InviteRepository
from gouache.domain.service import InviteRegistry
from gouache.domain.value import (
    Email,
    IdentityId,
    InviteStatus,
    InviteToken,
    RedeemResult,
    RevokeResult,
    ValidationResult,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_invite(**overrides) -> Invite:
    data = {
        "token": InviteToken(root="tok_abcdefghijkl"),
        "email": Email(root="ana@example.com"),
        "status": InviteStatus.PENDING,
        "issued_at": NOW - timedelta(days=1),
    }
    data.update(overrides)
    return Invite(**data)


class TestValidate:
    """Tests for the pure validate method."""

    def test_pending_invite_is_ready(self):
        assert InviteRegistry.validate(make_invite(), NOW) == ValidationResult.READY

    def test_redeemed_invite(self):
        invite = make_invite(
            status=InviteStatus.REDEEMED,
            redeemed_at=NOW,
            redeemed_by=IdentityId("user_1"),
        )
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.ALREADY_REDEEMED

    def test_revoked_invite(self):
        invite = make_invite(status=InviteStatus.REVOKED, revoked_at=NOW)
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.REVOKED

    def test_stored_expired_status(self):
        invite = make_invite(status=InviteStatus.EXPIRED)
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.EXPIRED

    def test_pending_past_expiry_is_expired(self):
        invite = make_invite(expires_at=NOW - timedelta(seconds=1))
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.EXPIRED

    def test_expiry_boundary_is_expired(self):
        invite = make_invite(expires_at=NOW)
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.EXPIRED

    def test_pending_before_expiry_is_ready(self):
        invite = make_invite(expires_at=NOW + timedelta(days=1))
        assert InviteRegistry.validate(invite, NOW) == ValidationResult.READY


class TestIssue:
    """Tests for issue method."""

    @pytest.mark.asyncio
    async def test_issue_creates_pending_invite(self, unit_env):
        """Issued invites are pending, lowercased and stored."""
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite_repo = await unit_env.get(InviteRepository)

        # Act
        invite = await registry.issue(
            Email(root="Ana@Example.com"),
            issued_by=IdentityId("curator"),
            name="  Ana  ",
            message="   ",
        )

        # Assert
        assert invite.status == InviteStatus.PENDING
        assert invite.email.root == "ana@example.com"
        assert invite.name == "Ana"
        assert invite.message is None
        assert invite.expires_at is None
        assert len(invite.token.root) >= 24

        saved = await invite_repo.find_by_token(invite.token)
        assert saved is not None
        assert saved.token == invite.token

    @pytest.mark.asyncio
    async def test_issue_with_lifetime_sets_expiry(self, unit_env):
        registry = await unit_env.get(InviteRegistry)

        invite = await registry.issue(
            Email(root="ana@example.com"), expires_in=timedelta(days=14)
        )

        assert invite.expires_at == invite.issued_at + timedelta(days=14)

    @pytest.mark.asyncio
    async def test_issued_tokens_are_unique(self, unit_env):
        registry = await unit_env.get(InviteRegistry)

        first = await registry.issue(Email(root="ana@example.com"))
        second = await registry.issue(Email(root="ana@example.com"))

        assert first.token != second.token


class TestLoad:
    """Tests for load method."""

    @pytest.mark.asyncio
    async def test_load_records_access(self, unit_env):
        """Loading an invite stamps last_accessed_at."""
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite_repo = await unit_env.get(InviteRepository)
        invite = await registry.issue(Email(root="ana@example.com"))
        assert invite.last_accessed_at is None

        # Act
        loaded = await registry.load(invite.token)

        # Assert
        assert loaded is not None
        assert loaded.last_accessed_at is not None
        saved = await invite_repo.find_by_token(invite.token)
        assert saved.last_accessed_at == loaded.last_accessed_at

    @pytest.mark.asyncio
    async def test_load_unknown_token_returns_none(self, unit_env):
        registry = await unit_env.get(InviteRegistry)

        assert await registry.load(InviteToken(root="missing-token")) is None

    @pytest.mark.asyncio
    async def test_load_survives_access_write_failure(self, unit_env):
        """A failed access stamp does not fail the load."""
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite_repo = await unit_env.get(InviteRepository)
        invite = await registry.issue(Email(root="ana@example.com"))

        async def broken_touch(token, at):
            raise RuntimeError("database unavailable")

        invite_repo.touch_last_accessed = broken_touch

        # Act
        loaded = await registry.load(invite.token)

        # Assert
        assert loaded is not None
        assert loaded.token == invite.token
        assert loaded.last_accessed_at is None

    @pytest.mark.asyncio
    async def test_find_does_not_record_access(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))

        found = await registry.find(invite.token)

        assert found is not None
        assert found.last_accessed_at is None


class TestRedeem:
    """Tests for redeem method."""

    @pytest.mark.asyncio
    async def test_redeem_pending_invite(self, unit_env):
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))

        # Act
        result = await registry.redeem(invite.token, IdentityId("user_ana"), NOW)

        # Assert
        assert result == RedeemResult.OK
        redeemed = await registry.find(invite.token)
        assert redeemed.status == InviteStatus.REDEEMED
        assert redeemed.redeemed_by == "user_ana"
        assert redeemed.redeemed_at == NOW

    @pytest.mark.asyncio
    async def test_second_redeem_conflicts_and_keeps_first(self, unit_env):
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))
        await registry.redeem(invite.token, IdentityId("user_ana"))

        # Act
        result = await registry.redeem(invite.token, IdentityId("user_other"))

        # Assert
        assert result == RedeemResult.CONFLICT
        current = await registry.find(invite.token)
        assert current.redeemed_by == "user_ana"

    @pytest.mark.asyncio
    async def test_concurrent_redeems_have_exactly_one_winner(self, unit_env):
        """Of N concurrent redeems exactly one returns OK."""
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))

        # Act
        results = await asyncio.gather(
            *(
                registry.redeem(invite.token, IdentityId(f"user_{i}"))
                for i in range(20)
            )
        )

        # Assert
        assert results.count(RedeemResult.OK) == 1
        assert results.count(RedeemResult.CONFLICT) == 19
        winner = results.index(RedeemResult.OK)
        current = await registry.find(invite.token)
        assert current.redeemed_by == f"user_{winner}"

    @pytest.mark.asyncio
    async def test_redeem_revoked_invite_conflicts(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))
        await registry.revoke(invite.token)

        result = await registry.redeem(invite.token, IdentityId("user_ana"))

        assert result == RedeemResult.CONFLICT


class TestRevoke:
    """Tests for revoke method."""

    @pytest.mark.asyncio
    async def test_revoke_pending_invite(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))

        result = await registry.revoke(invite.token, NOW)

        assert result == RevokeResult.OK
        revoked = await registry.find(invite.token)
        assert revoked.status == InviteStatus.REVOKED
        assert revoked.revoked_at == NOW

    @pytest.mark.asyncio
    async def test_revoke_redeemed_invite_conflicts(self, unit_env):
        """Redeemed invites stay redeemed."""
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"))
        await registry.redeem(invite.token, IdentityId("user_ana"))

        result = await registry.revoke(invite.token)

        assert result == RevokeResult.CONFLICT
        current = await registry.find(invite.token)
        assert current.status == InviteStatus.REDEEMED

    @pytest.mark.asyncio
    async def test_revoke_unknown_token_conflicts(self, unit_env):
        registry = await unit_env.get(InviteRegistry)

        result = await registry.revoke(InviteToken(root="missing-token"))

        assert result == RevokeResult.CONFLICT


class TestGetState:
    """Tests for get_state method."""

    @pytest.mark.asyncio
    async def test_state_of_pending_invite(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        invite = await registry.issue(Email(root="ana@example.com"), name="Ana")

        state = await registry.get_state(invite.token)

        assert state is not None
        assert state.validation == ValidationResult.READY
        assert state.status == InviteStatus.PENDING
        assert state.name == "Ana"

    @pytest.mark.asyncio
    async def test_state_of_unknown_token(self, unit_env):
        registry = await unit_env.get(InviteRegistry)

        assert await registry.get_state(InviteToken(root="missing-token")) is None


class TestListInvites:
    """Tests for list_invites method."""

    @pytest.mark.asyncio
    async def test_newest_first_with_total(self, unit_env):
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        repo = await unit_env.get(InviteRepository)
        for n in range(3):
            await repo.create(
                make_invite(
                    token=InviteToken(root=f"tok_{n}"),
                    issued_at=NOW + timedelta(hours=n),
                )
            )

        # Act
        page, total = await registry.list_invites(limit=2)

        # Assert
        assert [s.token.root for s in page] == ["tok_2", "tok_1"]
        assert total == 3

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        # Arrange
        registry = await unit_env.get(InviteRegistry)
        pending = await registry.issue(Email(root="ana@example.com"))
        revoked = await registry.issue(Email(root="bea@example.com"))
        await registry.revoke(revoked.token)

        # Act
        page, total = await registry.list_invites(status=InviteStatus.REVOKED)

        # Assert
        assert [s.token for s in page] == [revoked.token]
        assert total == 1
        assert page[0].validation == ValidationResult.REVOKED
        assert pending.token not in [s.token for s in page]

    @pytest.mark.asyncio
    async def test_pending_past_expiry_reads_as_expired(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        repo = await unit_env.get(InviteRepository)
        await repo.create(make_invite(expires_at=NOW))

        page, _ = await registry.list_invites(status=InviteStatus.PENDING)

        assert page[0].status == InviteStatus.PENDING
        assert page[0].validation == ValidationResult.EXPIRED

    @pytest.mark.asyncio
    async def test_listing_does_not_record_access(self, unit_env):
        registry = await unit_env.get(InviteRegistry)
        await registry.issue(Email(root="ana@example.com"))

        page, _ = await registry.list_invites()

        assert page[0].last_accessed_at is None
