"""Activation account repository interface."""

from abc import ABC, abstractmethod

from gouache.domain.model.activation import ActivationAccount
from gouache.domain.value import AccountId, ActivationStatus, IdentityId


class ActivationAccountRepository(ABC):
    """Repository for ActivationAccount entity."""

    @abstractmethod
    async def find_by_identity(
        self, identity_id: IdentityId
    ) -> ActivationAccount | None:
        """Find the account bound to an identity.

        Args:
            identity_id: The identity

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_account_id(
        self, account_id: AccountId
    ) -> ActivationAccount | None:
        """Find an account by its processor id.

        Args:
            account_id: Processor account id

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_if_absent(
        self, account: ActivationAccount
    ) -> tuple[ActivationAccount, bool]:
        """Store a new account unless the identity already has one.

        Args:
            account: The account to store

        Returns:
            Tuple of (stored account, whether it was created). When the
            identity already had an account, that account is returned.
        """
        pass

    @abstractmethod
    async def update_if_status(
        self, account: ActivationAccount, expected_status: ActivationStatus
    ) -> ActivationAccount | None:
        """Overwrite an account record if its stored status is unchanged.

        Guards against a slower writer moving the status backward.

        Args:
            account: The account to store
            expected_status: Status the caller read before computing the update

        Returns:
            The stored account, or None if the stored status had moved on
        """
        pass
