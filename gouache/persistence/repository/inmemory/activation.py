"""In-memory activation account repository for testing."""

import asyncio
from typing import Optional

from gouache.domain.model.activation import ActivationAccount
from gouache.domain.repository.activation import ActivationAccountRepository
from gouache.domain.value import AccountId, ActivationStatus, IdentityId


class InMemoryActivationAccountRepository(ActivationAccountRepository):
    """In-memory implementation of ActivationAccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[str, ActivationAccount] = {}
        self._lock = asyncio.Lock()
        self.update_calls = 0

    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> Optional[ActivationAccount]:
        """Find an identity's account."""
        return self._accounts.get(identity_id)

    async def find_by_account_id(
        self, account_id: AccountId
    ) -> Optional[ActivationAccount]:
        """Find an account by its processor id."""
        for account in self._accounts.values():
            if account.account_id == account_id:
                return account
        return None

    async def create_if_absent(
        self, account: ActivationAccount
    ) -> tuple[ActivationAccount, bool]:
        """Store unless the identity already has an account."""
        async with self._lock:
            existing = self._accounts.get(account.identity_id)
            if existing:
                return existing, False
            self._accounts[account.identity_id] = account
            return account, True

    async def update_if_status(
        self, account: ActivationAccount, expected_status: ActivationStatus
    ) -> Optional[ActivationAccount]:
        """Overwrite if the stored status is the expected one."""
        async with self._lock:
            current = self._accounts.get(account.identity_id)
            if not current or current.status != expected_status:
                return None
            self.update_calls += 1
            self._accounts[account.identity_id] = account
            return account
