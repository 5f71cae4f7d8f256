"""PostgreSQL implementation of ActivationAccount repository.

Unlike the other repositories this one does not join the request's
session. Every call runs in its own short transaction, so a status the
reconciler observes is committed before the watch loop sleeps, and no row
lock is held between polls.
"""

from typing import Optional

from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gouache.domain.model import ActivationAccount
from gouache.domain.repository import ActivationAccountRepository
from gouache.domain.value import AccountId, ActivationStatus, IdentityId
from gouache.persistence.mappers import (
    activation_account_to_dict,
    row_to_activation_account,
)
from gouache.persistence.tables import activation_accounts_table


class PostgresActivationAccountRepository(ActivationAccountRepository):
    """PostgreSQL implementation of ActivationAccountRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for one session per operation
        """
        self.session_factory = session_factory

    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> Optional[ActivationAccount]:
        """Find an identity's account."""
        async with self.session_factory() as session:
            return await self._find_by_identity(session, identity_id)

    async def find_by_account_id(
        self, account_id: AccountId
    ) -> Optional[ActivationAccount]:
        """Find an account by its processor id."""
        stmt = select(activation_accounts_table).where(
            activation_accounts_table.c.account_id == account_id
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_activation_account(dict(row)) if row else None

    async def create_if_absent(
        self, account: ActivationAccount
    ) -> tuple[ActivationAccount, bool]:
        """Insert unless the identity already has an account.

        Uses INSERT ... ON CONFLICT DO NOTHING; on conflict the stored row
        is read back and returned instead. Committed before returning.
        """
        stmt = (
            insert(activation_accounts_table)
            .values(**activation_account_to_dict(account))
            .on_conflict_do_nothing(
                index_elements=[activation_accounts_table.c.identity_id]
            )
            .returning(activation_accounts_table)
        )
        async with self.session_factory.begin() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row:
                return row_to_activation_account(dict(row)), True
            existing = await self._find_by_identity(session, account.identity_id)

        if existing is None:
            raise ValueError(f"No account stored for identity {account.identity_id}")
        return existing, False

    async def update_if_status(
        self, account: ActivationAccount, expected_status: ActivationStatus
    ) -> Optional[ActivationAccount]:
        """Conditional UPDATE on the status the caller read.

        Committed before returning.
        """
        values = activation_account_to_dict(account)
        for key in ("identity_id", "account_id", "created_at"):
            values.pop(key)

        stmt = (
            update(activation_accounts_table)
            .where(
                and_(
                    activation_accounts_table.c.account_id == account.account_id,
                    activation_accounts_table.c.status == expected_status.value,
                )
            )
            .values(**values)
            .returning(activation_accounts_table)
        )
        async with self.session_factory.begin() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_activation_account(dict(row)) if row else None

    @staticmethod
    async def _find_by_identity(
        session: AsyncSession, identity_id: IdentityId
    ) -> Optional[ActivationAccount]:
        stmt = select(activation_accounts_table).where(
            activation_accounts_table.c.identity_id == identity_id
        )
        result = await session.execute(stmt)
        row = result.mappings().first()
        return row_to_activation_account(dict(row)) if row else None
