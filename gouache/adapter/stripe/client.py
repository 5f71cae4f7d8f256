"""Stripe Connect client implementation.

Creates Express connected accounts for sellers, issues onboarding links and
reads back account capabilities. Talks to the Stripe REST API directly with
form-encoded requests.
"""

from typing import Any

import httpx
import logfire

from gouache.adapter.error import StripeError, StripeUnavailableError
from gouache.domain.service.activation_oracle import (
    ActivationOracle,
    CreatedAccount,
    OracleAccountStatus,
)
from gouache.domain.value import AccountId, IdentityId


def raw_status_of(account: dict[str, Any]) -> str:
    """Reduce a Stripe account object to a single raw status string.

    "rejected" when Stripe disabled the account with a rejection reason,
    "pending" when details are in but capabilities are still being
    verified, otherwise empty.
    """
    requirements = account.get("requirements") or {}
    disabled_reason = requirements.get("disabled_reason") or ""
    if disabled_reason.startswith("rejected"):
        return "rejected"
    if account.get("details_submitted") and (
        requirements.get("pending_verification") or disabled_reason
    ):
        return "pending"
    return ""


class StripeActivationOracle(ActivationOracle):
    """Base class for Stripe oracles.

    Provides type distinction for dependency injection.
    """

    pass


class RealStripeActivationOracle(StripeActivationOracle):
    """Stripe Connect client over httpx."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        return_url: str,
        refresh_url: str,
        country: str = "US",
        timeout: float = 30.0,
    ) -> None:
        """Initialize Stripe client.

        Args:
            api_key: Stripe secret key
            base_url: Stripe REST endpoint
            return_url: Where Stripe sends the seller after onboarding
            refresh_url: Where Stripe sends the seller when a link expired
            country: Country for new connected accounts
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.return_url = return_url
        self.refresh_url = refresh_url
        self.country = country
        self.timeout = timeout

    async def create_account(
        self, identity_id: IdentityId, email: str, display_name: str | None
    ) -> CreatedAccount:
        """Create an Express account and its first onboarding link.

        The idempotency key is derived from the identity, so a retried
        create (from any process) gets the same account back from Stripe.

        Raises:
            StripeUnavailableError: If Stripe could not be reached
            StripeError: If Stripe rejected the request
        """
        data = {
            "type": "express",
            "country": self.country,
            "email": email,
            "business_type": "individual",
            "capabilities[card_payments][requested]": "true",
            "capabilities[transfers][requested]": "true",
            "metadata[identity_id]": identity_id,
            "metadata[platform]": "gouache",
        }
        if display_name:
            data["business_profile[name]"] = display_name

        account = await self._request(
            "POST",
            "/accounts",
            data=data,
            headers={"Idempotency-Key": f"activation-{identity_id}"},
        )
        account_id = AccountId(account["id"])
        logfire.info(
            "Stripe account created", identity_id=identity_id, account_id=account_id
        )

        onboarding_url = await self.create_onboarding_link(account_id)
        return CreatedAccount(account_id=account_id, onboarding_url=onboarding_url)

    async def get_status(self, account_id: AccountId) -> OracleAccountStatus:
        """Read capability flags of a connected account.

        Raises:
            StripeUnavailableError: If Stripe could not be reached
            StripeError: If Stripe rejected the request
        """
        account = await self._request("GET", f"/accounts/{account_id}")
        return OracleAccountStatus(
            charges_enabled=bool(account.get("charges_enabled")),
            payouts_enabled=bool(account.get("payouts_enabled")),
            details_submitted=bool(account.get("details_submitted")),
            raw_status=raw_status_of(account),
        )

    async def create_onboarding_link(self, account_id: AccountId) -> str:
        """Create an account onboarding link.

        Raises:
            StripeUnavailableError: If Stripe could not be reached
            StripeError: If Stripe rejected the request
        """
        link = await self._request(
            "POST",
            "/account_links",
            data={
                "account": account_id,
                "refresh_url": self.refresh_url,
                "return_url": self.return_url,
                "type": "account_onboarding",
            },
        )
        return link["url"]

    async def _request(
        self,
        method: str,
        path: str,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send one request to Stripe.

        5xx and 429 responses count as unavailability, like network errors.

        Raises:
            StripeUnavailableError: On network errors, 5xx or 429
            StripeError: On any other non-2xx response
        """
        request_headers = {"Authorization": f"Bearer {self.api_key}"}
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    data=data,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            logfire.warn("Stripe HTTP error", method=method, path=path, error=str(e))
            raise StripeUnavailableError(f"Stripe unreachable: {e}") from e

        if response.status_code >= 500 or response.status_code == 429:
            logfire.warn(
                "Stripe temporarily unavailable",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise StripeUnavailableError(
                f"Stripe returned {response.status_code}", response.status_code
            )

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message", "")
            except ValueError:
                message = response.text
            logfire.error(
                "Stripe request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise StripeError(
                f"Stripe request failed: {message or response.status_code}",
                response.status_code,
            )

        return response.json()


class MockStripeActivationOracle(StripeActivationOracle):
    """Scriptable Stripe oracle for testing.

    Accounts start with nothing enabled. Tests set a status, queue a
    sequence of statuses served one per poll, or make polls fail.
    """

    def __init__(self) -> None:
        """Initialize mock oracle without real Stripe configuration."""
        self.accounts_by_identity: dict[str, AccountId] = {}
        self.statuses: dict[str, OracleAccountStatus] = {}
        self.queued: dict[str, list[OracleAccountStatus]] = {}
        self.create_calls = 0
        self.status_calls = 0
        self.link_calls = 0
        self.create_unavailable = False
        self.unavailable_polls = 0

    def set_status(
        self,
        account_id: str,
        charges_enabled: bool,
        payouts_enabled: bool,
        details_submitted: bool = False,
        raw_status: str = "",
    ) -> None:
        """Set what every following poll reports."""
        self.queued.pop(account_id, None)
        self.statuses[account_id] = OracleAccountStatus(
            charges_enabled=charges_enabled,
            payouts_enabled=payouts_enabled,
            details_submitted=details_submitted,
            raw_status=raw_status,
        )

    def queue_statuses(self, account_id: str, *statuses: OracleAccountStatus) -> None:
        """Serve statuses one per poll; the last one sticks."""
        self.queued.setdefault(account_id, []).extend(statuses)

    def fail_next_polls(self, count: int) -> None:
        """Make the next polls raise StripeUnavailableError."""
        self.unavailable_polls = count

    async def create_account(
        self, identity_id: IdentityId, email: str, display_name: str | None
    ) -> CreatedAccount:
        """Create (or, like an idempotency key, re-return) a mock account."""
        self.create_calls += 1
        if self.create_unavailable:
            raise StripeUnavailableError("Stripe unreachable (mock)")

        account_id = self.accounts_by_identity.get(identity_id)
        if account_id is None:
            number = len(self.accounts_by_identity) + 1
            account_id = AccountId(f"acct_mock{number:06d}")
            self.accounts_by_identity[identity_id] = account_id
            self.statuses[account_id] = OracleAccountStatus(
                charges_enabled=False, payouts_enabled=False
            )

        return CreatedAccount(
            account_id=account_id,
            onboarding_url=f"https://connect.stripe.com/setup/e/{account_id}/mock",
        )

    async def get_status(self, account_id: AccountId) -> OracleAccountStatus:
        """Return the scripted status."""
        self.status_calls += 1
        if self.unavailable_polls > 0:
            self.unavailable_polls -= 1
            raise StripeUnavailableError("Stripe unreachable (mock)")

        queue = self.queued.get(account_id)
        if queue:
            self.statuses[account_id] = queue.pop(0)

        if account_id not in self.statuses:
            raise StripeError(f"No such account: {account_id}", 404)
        return self.statuses[account_id]

    async def create_onboarding_link(self, account_id: AccountId) -> str:
        """Return a fresh mock link."""
        self.link_calls += 1
        base = f"https://connect.stripe.com/setup/e/{account_id}/mock"
        return f"{base}?link={self.link_calls}"
