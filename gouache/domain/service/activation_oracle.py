"""Payment processor contract as seen by the activation reconciler."""

from gouache.domain.value import AccountId, IdentityId
from gouache.domain.value.common import ValueObject


class CreatedAccount(ValueObject):
    """Result of creating a connected account."""

    account_id: AccountId
    onboarding_url: str


class OracleAccountStatus(ValueObject):
    """Observable status of a connected account."""

    charges_enabled: bool
    payouts_enabled: bool
    details_submitted: bool = False
    raw_status: str = ""


class ActivationOracle:
    """Generic payment processor interface.

    Both calls go over the network and may be slow or fail; implementations
    raise OracleUnavailableError when the processor cannot be reached.
    """

    async def create_account(
        self, identity_id: IdentityId, email: str, display_name: str | None
    ) -> CreatedAccount:
        """Create a connected account and its first onboarding link.

        Args:
            identity_id: Identity the account is for
            email: Identity email
            display_name: Optional display name

        Returns:
            Created account id and onboarding URL
        """
        raise NotImplementedError

    async def get_status(self, account_id: AccountId) -> OracleAccountStatus:
        """Fetch the current status of a connected account.

        Args:
            account_id: Processor account id

        Returns:
            Account status
        """
        raise NotImplementedError

    async def create_onboarding_link(self, account_id: AccountId) -> str:
        """Create a fresh onboarding link for an existing account.

        Args:
            account_id: Processor account id

        Returns:
            Onboarding URL
        """
        raise NotImplementedError
