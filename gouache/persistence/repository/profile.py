"""PostgreSQL implementation of the profile store."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from gouache.domain.model import Profile
from gouache.domain.repository import ProfileRepository
from gouache.domain.value import IdentityId
from gouache.persistence.mappers import row_to_profile
from gouache.persistence.tables import profiles_table

# Columns a merge may set; anything else in the payload is a caller bug
MERGEABLE_COLUMNS = frozenset(
    c.name
    for c in profiles_table.columns
    if c.name not in ("identity_id", "updated_at")
)


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def load_profile(self, identity_id: IdentityId) -> Optional[Profile]:
        """Load an identity's profile."""
        stmt = select(profiles_table).where(
            profiles_table.c.identity_id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def merge_profile(
        self, identity_id: IdentityId, fields: dict[str, Any]
    ) -> Profile:
        """Upsert profile fields with INSERT ... ON CONFLICT DO UPDATE.

        Runs in a savepoint so a failed write leaves the request's
        transaction usable.

        Raises:
            ValueError: If fields names an unknown column
        """
        unknown = set(fields) - MERGEABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        values = {**fields, "updated_at": datetime.now(timezone.utc)}
        stmt = insert(profiles_table).values(identity_id=identity_id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.identity_id],
            set_=values,
        ).returning(profiles_table)

        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_profile(dict(row))
