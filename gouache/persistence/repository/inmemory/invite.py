"""In-memory invite repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from gouache.domain.model.invite import Invite
from gouache.domain.repository.invite import InviteRepository
from gouache.domain.value import IdentityId, InviteStatus, InviteToken


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Check-and-write operations hold a lock so they behave like the
    conditional UPDATE of the Postgres implementation.
    """

    def __init__(self) -> None:
        self._invites: dict[str, Invite] = {}
        self._lock = asyncio.Lock()

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token."""
        return self._invites.get(token.root)

    async def create(self, invite: Invite) -> Invite:
        """Store a new invite.

        Raises:
            IntegrityError: If the token is already taken
        """
        async with self._lock:
            if invite.token.root in self._invites:
                raise IntegrityError("Duplicate invite token", None, Exception())
            self._invites[invite.token.root] = invite
            return invite

    async def touch_last_accessed(self, token: InviteToken, at: datetime) -> None:
        """Record an access."""
        async with self._lock:
            invite = self._invites.get(token.root)
            if invite:
                self._invites[token.root] = invite.model_copy(
                    update={"last_accessed_at": at}
                )

    async def redeem_if_pending(
        self, token: InviteToken, identity_id: IdentityId, at: datetime
    ) -> Optional[Invite]:
        """Redeem if still pending."""
        async with self._lock:
            invite = self._invites.get(token.root)
            if not invite or invite.status != InviteStatus.PENDING:
                return None
            redeemed = invite.model_copy(
                update={
                    "status": InviteStatus.REDEEMED,
                    "redeemed_at": at,
                    "redeemed_by": identity_id,
                }
            )
            self._invites[token.root] = redeemed
            return redeemed

    async def revoke_if_pending(
        self, token: InviteToken, at: datetime
    ) -> Optional[Invite]:
        """Revoke if still pending."""
        async with self._lock:
            invite = self._invites.get(token.root)
            if not invite or invite.status != InviteStatus.PENDING:
                return None
            revoked = invite.model_copy(
                update={"status": InviteStatus.REVOKED, "revoked_at": at}
            )
            self._invites[token.root] = revoked
            return revoked

    async def find_all(
        self,
        status: Optional[InviteStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """List invites, newest first."""
        invites = [
            invite
            for invite in self._invites.values()
            if status is None or invite.status == status
        ]
        invites.sort(key=lambda invite: invite.issued_at, reverse=True)
        return invites[offset : offset + limit]

    async def count(self, status: Optional[InviteStatus] = None) -> int:
        """Count invites, optionally with one stored status."""
        return len(await self.find_all(status, limit=len(self._invites)))
