"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gouache.domain.model import Invite
from gouache.domain.repository import InviteRepository
from gouache.domain.value import IdentityId, InviteStatus, InviteToken
from gouache.persistence.mappers import invite_to_dict, row_to_invite
from gouache.persistence.tables import artist_invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token.

        Args:
            token: Invite token to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(artist_invites_table).where(
            artist_invites_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def create(self, invite: Invite) -> Invite:
        """Insert a newly issued invite."""
        stmt = insert(artist_invites_table).values(**invite_to_dict(invite))
        await self.session.execute(stmt)
        await self.session.flush()
        return invite

    async def touch_last_accessed(self, token: InviteToken, at: datetime) -> None:
        """Record an access inside a savepoint.

        A failure here rolls back only the savepoint, so the request's
        transaction stays usable.
        """
        async with self.session.begin_nested():
            stmt = (
                update(artist_invites_table)
                .where(artist_invites_table.c.token == token.root)
                .values(last_accessed_at=at)
            )
            await self.session.execute(stmt)

    async def redeem_if_pending(
        self, token: InviteToken, identity_id: IdentityId, at: datetime
    ) -> Optional[Invite]:
        """Redeem with a single conditional UPDATE.

        Concurrent updates on the same row serialize on the row lock; the
        loser re-evaluates the WHERE clause, sees a non-pending status and
        updates nothing.
        """
        with logfire.span("invite_repository.redeem_if_pending"):
            stmt = (
                update(artist_invites_table)
                .where(
                    and_(
                        artist_invites_table.c.token == token.root,
                        artist_invites_table.c.status == InviteStatus.PENDING.value,
                    )
                )
                .values(
                    status=InviteStatus.REDEEMED.value,
                    redeemed_at=at,
                    redeemed_by=identity_id,
                )
                .returning(artist_invites_table)
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
            return row_to_invite(dict(row)) if row else None

    async def revoke_if_pending(
        self, token: InviteToken, at: datetime
    ) -> Optional[Invite]:
        """Revoke with a single conditional UPDATE."""
        stmt = (
            update(artist_invites_table)
            .where(
                and_(
                    artist_invites_table.c.token == token.root,
                    artist_invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .values(status=InviteStatus.REVOKED.value, revoked_at=at)
            .returning(artist_invites_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invite(dict(row)) if row else None

    async def find_all(
        self,
        status: Optional[InviteStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """List invites, newest first, with pagination.

        Args:
            status: Optional filter by stored status
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of matching invites
        """
        stmt = (
            select(artist_invites_table)
            .order_by(artist_invites_table.c.issued_at.desc())
            .limit(limit)
            .offset(offset)
        )

        if status:
            stmt = stmt.where(artist_invites_table.c.status == status.value)

        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]

    async def count(self, status: Optional[InviteStatus] = None) -> int:
        """Count invites, optionally with one stored status."""
        stmt = select(func.count()).select_from(artist_invites_table)

        if status:
            stmt = stmt.where(artist_invites_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return result.scalar() or 0
