"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gouache.domain.model.invite import Invite
from gouache.domain.value import IdentityId, InviteStatus, InviteToken


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> Invite | None:
        """Find an invite by token.

        Args:
            token: The invite token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, invite: Invite) -> Invite:
        """Store a newly issued invite.

        Args:
            invite: The invite to store

        Returns:
            The stored invite

        Raises:
            IntegrityError: If an invite with this token already exists
        """
        pass

    @abstractmethod
    async def touch_last_accessed(self, token: InviteToken, at: datetime) -> None:
        """Record that the invite was opened.

        Args:
            token: The invite token
            at: Access time
        """
        pass

    @abstractmethod
    async def redeem_if_pending(
        self, token: InviteToken, identity_id: IdentityId, at: datetime
    ) -> Invite | None:
        """Mark the invite redeemed, but only if it is still pending.

        Must be a single conditional write: of any number of concurrent
        callers, at most one gets the updated invite back.

        Args:
            token: The invite token
            identity_id: The redeeming identity
            at: Redemption time

        Returns:
            The redeemed invite, or None if it was not pending
        """
        pass

    @abstractmethod
    async def revoke_if_pending(
        self, token: InviteToken, at: datetime
    ) -> Invite | None:
        """Mark the invite revoked, but only if it is still pending.

        Args:
            token: The invite token
            at: Revocation time

        Returns:
            The revoked invite, or None if it was not pending
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: InviteStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """List invites, newest first.

        Args:
            status: Optional filter by stored status
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Matching invites
        """
        pass

    @abstractmethod
    async def count(self, status: InviteStatus | None = None) -> int:
        """Count invites, optionally with one stored status."""
        pass
