"""Invite registry domain service.

Single source of truth for invite validity and the at-most-once
redemption guarantee. Every write to an invite goes through here.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import logfire

from gouache.domain.model.invite import Invite
from gouache.domain.repository import InviteRepository
from gouache.domain.value import (
    Email,
    IdentityId,
    InviteStatus,
    InviteToken,
    RedeemResult,
    RevokeResult,
    ValidationResult,
)

from .base import Service


@dataclass
class InviteState:
    """Read model of an invite for rendering."""

    token: InviteToken
    email: Email
    name: str | None
    status: InviteStatus
    validation: ValidationResult
    issued_at: datetime
    expires_at: datetime | None
    last_accessed_at: datetime | None
    redeemed_at: datetime | None
    redeemed_by: IdentityId | None


class InviteRegistry(Service):
    """Domain service for artist invite lifecycle."""

    def __init__(self, invite_repository: InviteRepository) -> None:
        """Initialize invite registry.

        Args:
            invite_repository: Invite repository
        """
        self.invite_repository = invite_repository

    async def load(self, token: InviteToken) -> Invite | None:
        """Load an invite and record the access.

        The access timestamp is best-effort; failing to write it does not
        fail the load.

        Args:
            token: Invite token

        Returns:
            Invite if found, None otherwise
        """
        with logfire.span("invite_registry.load", token=token.masked):
            invite = await self.invite_repository.find_by_token(token)
            if not invite:
                logfire.warn("Invite not found", token=token.masked)
                return None

            now = datetime.now(timezone.utc)
            try:
                await self.invite_repository.touch_last_accessed(token, now)
                invite = invite.model_copy(update={"last_accessed_at": now})
            except Exception as e:
                logfire.warn(
                    "Failed to record invite access", token=token.masked, error=str(e)
                )

            logfire.info(
                "Invite loaded", token=token.masked, status=invite.status.value
            )
            return invite

    async def find(self, token: InviteToken) -> Invite | None:
        """Read an invite without recording an access."""
        return await self.invite_repository.find_by_token(token)

    @staticmethod
    def validate(invite: Invite, now: datetime) -> ValidationResult:
        """Classify an invite at a point in time.

        Pure. Expiry is decided here, either from a stored EXPIRED status or
        from expires_at having passed.

        Args:
            invite: The invite
            now: Time to evaluate against

        Returns:
            Validation result
        """
        if invite.status == InviteStatus.REDEEMED:
            return ValidationResult.ALREADY_REDEEMED
        if invite.status == InviteStatus.REVOKED:
            return ValidationResult.REVOKED
        if invite.status == InviteStatus.EXPIRED:
            return ValidationResult.EXPIRED
        if invite.expires_at is not None and now >= invite.expires_at:
            return ValidationResult.EXPIRED
        return ValidationResult.READY

    async def redeem(
        self,
        token: InviteToken,
        identity_id: IdentityId,
        now: datetime | None = None,
    ) -> RedeemResult:
        """Redeem an invite for an identity.

        Conditional on the invite still being pending at write time; of
        concurrent callers exactly one gets OK.

        Args:
            token: Invite token
            identity_id: Redeeming identity
            now: Redemption time (defaults to now)

        Returns:
            OK if this call redeemed the invite, CONFLICT otherwise
        """
        now = now or datetime.now(timezone.utc)
        with logfire.span(
            "invite_registry.redeem", token=token.masked, identity_id=identity_id
        ):
            redeemed = await self.invite_repository.redeem_if_pending(
                token, identity_id, now
            )
            if redeemed is None:
                logfire.warn(
                    "Invite redemption conflict",
                    token=token.masked,
                    identity_id=identity_id,
                )
                return RedeemResult.CONFLICT

            logfire.info(
                "Invite redeemed", token=token.masked, identity_id=identity_id
            )
            return RedeemResult.OK

    async def issue(
        self,
        email: Email,
        issued_by: IdentityId | None = None,
        name: str | None = None,
        message: str | None = None,
        expires_in: timedelta | None = None,
    ) -> Invite:
        """Issue a new pending invite bound to an email.

        Args:
            email: Invitee email
            issued_by: Issuing identity
            name: Optional invitee name
            message: Optional personal message
            expires_in: Optional lifetime

        Returns:
            Issued invite
        """
        with logfire.span("invite_registry.issue", issued_by=issued_by):
            now = datetime.now(timezone.utc)
            invite = Invite(
                token=InviteToken(root=secrets.token_urlsafe(24)),
                email=Email(root=email.root.lower()),
                name=name.strip() if name and name.strip() else None,
                message=message.strip() if message and message.strip() else None,
                status=InviteStatus.PENDING,
                issued_at=now,
                issued_by=issued_by,
                expires_at=now + expires_in if expires_in else None,
            )

            saved = await self.invite_repository.create(invite)
            logfire.info(
                "Invite issued",
                token=saved.token.masked,
                issued_by=issued_by,
                expires_at=saved.expires_at,
            )
            return saved

    async def revoke(
        self, token: InviteToken, now: datetime | None = None
    ) -> RevokeResult:
        """Revoke a pending invite.

        Args:
            token: Invite token
            now: Revocation time (defaults to now)

        Returns:
            OK if revoked, CONFLICT if the invite was no longer pending
        """
        now = now or datetime.now(timezone.utc)
        with logfire.span("invite_registry.revoke", token=token.masked):
            revoked = await self.invite_repository.revoke_if_pending(token, now)
            if revoked is None:
                logfire.warn("Invite revocation conflict", token=token.masked)
                return RevokeResult.CONFLICT

            logfire.info("Invite revoked", token=token.masked)
            return RevokeResult.OK

    async def list_invites(
        self,
        status: InviteStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[InviteState], int]:
        """List invites for the admin console, newest first.

        Args:
            status: Optional filter by stored status
            limit: Page size
            offset: Number of invites to skip

        Returns:
            One page of invite states and the total number matching
        """
        with logfire.span("invite_registry.list_invites", status=status):
            invites = await self.invite_repository.find_all(
                status=status, limit=limit, offset=offset
            )
            total = await self.invite_repository.count(status)

        now = datetime.now(timezone.utc)
        return [self._state_of(invite, now) for invite in invites], total

    async def get_state(self, token: InviteToken) -> InviteState | None:
        """Build the invite read model.

        Does not record an access.

        Args:
            token: Invite token

        Returns:
            Invite state if found, None otherwise
        """
        invite = await self.invite_repository.find_by_token(token)
        if not invite:
            return None

        return self._state_of(invite, datetime.now(timezone.utc))

    def _state_of(self, invite: Invite, now: datetime) -> InviteState:
        return InviteState(
            token=invite.token,
            email=invite.email,
            name=invite.name,
            status=invite.status,
            validation=self.validate(invite, now),
            issued_at=invite.issued_at,
            expires_at=invite.expires_at,
            last_accessed_at=invite.last_accessed_at,
            redeemed_at=invite.redeemed_at,
            redeemed_by=invite.redeemed_by,
        )
