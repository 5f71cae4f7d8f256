"""Tests for the Stripe Connect client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from gouache.adapter.error import StripeError, StripeUnavailableError
from gouache.adapter.stripe.client import (
    MockStripeActivationOracle,
    RealStripeActivationOracle,
    raw_status_of,
)
from gouache.domain.error import OracleUnavailableError
from gouache.domain.service import OracleAccountStatus
from gouache.domain.value import AccountId, IdentityId

REAL_ASYNC_CLIENT = httpx.AsyncClient


def make_oracle() -> RealStripeActivationOracle:
    return RealStripeActivationOracle(
        api_key="sk_test_123",
        base_url="https://stripe.test/v1/",
        return_url="https://gouache.test/settings?tab=payments&success=true",
        refresh_url="https://gouache.test/settings?tab=payments&refresh=true",
    )


def transport_returning(status_code: int, json: dict | None = None, requests=None):
    """Patch target for httpx.AsyncClient answering every request the same way."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, json=json or {})

    def client_factory(**kwargs):
        return REAL_ASYNC_CLIENT(transport=httpx.MockTransport(handler), **kwargs)

    return patch("gouache.adapter.stripe.client.httpx.AsyncClient", client_factory)


class TestRawStatus:
    """Tests for raw_status_of."""

    def test_rejected_account(self):
        account = {"requirements": {"disabled_reason": "rejected.fraud"}}
        assert raw_status_of(account) == "rejected"

    def test_submitted_and_verifying(self):
        account = {
            "details_submitted": True,
            "requirements": {"pending_verification": ["individual.id_number"]},
        }
        assert raw_status_of(account) == "pending"

    def test_submitted_but_disabled_for_review(self):
        account = {
            "details_submitted": True,
            "requirements": {"disabled_reason": "under_review"},
        }
        assert raw_status_of(account) == "pending"

    def test_nothing_submitted(self):
        assert raw_status_of({"requirements": None}) == ""


class TestRealStripeActivationOracle:
    """Tests for RealStripeActivationOracle."""

    @pytest.mark.asyncio
    async def test_get_status_reads_capability_flags(self):
        # Arrange
        oracle = make_oracle()
        requests: list[httpx.Request] = []
        account = {
            "id": "acct_123",
            "charges_enabled": True,
            "payouts_enabled": False,
            "details_submitted": True,
            "requirements": {"pending_verification": ["individual.verification"]},
        }

        # Act
        with transport_returning(200, account, requests):
            status = await oracle.get_status(AccountId("acct_123"))

        # Assert
        assert status.charges_enabled is True
        assert status.payouts_enabled is False
        assert status.details_submitted is True
        assert status.raw_status == "pending"
        assert str(requests[0].url) == "https://stripe.test/v1/accounts/acct_123"
        assert requests[0].headers["Authorization"] == "Bearer sk_test_123"

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        oracle = make_oracle()

        with transport_returning(503):
            with pytest.raises(StripeUnavailableError) as exc_info:
                await oracle.get_status(AccountId("acct_123"))

        assert isinstance(exc_info.value, OracleUnavailableError)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_rate_limit_is_unavailable(self):
        oracle = make_oracle()

        with transport_returning(429):
            with pytest.raises(StripeUnavailableError):
                await oracle.get_status(AccountId("acct_123"))

    @pytest.mark.asyncio
    async def test_client_error_is_not_retryable(self):
        oracle = make_oracle()
        body = {"error": {"message": "No such account: 'acct_404'"}}

        with transport_returning(404, body):
            with pytest.raises(StripeError) as exc_info:
                await oracle.get_status(AccountId("acct_404"))

        assert not isinstance(exc_info.value, OracleUnavailableError)
        assert "No such account" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error_is_unavailable(self):
        oracle = make_oracle()

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        def client_factory(**kwargs):
            return REAL_ASYNC_CLIENT(transport=httpx.MockTransport(handler), **kwargs)

        with patch("gouache.adapter.stripe.client.httpx.AsyncClient", client_factory):
            with pytest.raises(StripeUnavailableError):
                await oracle.get_status(AccountId("acct_123"))

    @pytest.mark.asyncio
    async def test_create_account_uses_identity_idempotency_key(self):
        # Arrange
        oracle = make_oracle()

        with patch.object(oracle, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.side_effect = [
                {"id": "acct_new"},
                {"url": "https://connect.stripe.com/setup/e/acct_new/abc"},
            ]

            # Act
            created = await oracle.create_account(
                IdentityId("user_ana"), "ana@example.com", "Ana Lima"
            )

        # Assert
        assert created.account_id == "acct_new"
        assert created.onboarding_url.endswith("/acct_new/abc")

        create_call, link_call = mock_request.call_args_list
        assert create_call.args == ("POST", "/accounts")
        assert create_call.kwargs["headers"] == {
            "Idempotency-Key": "activation-user_ana"
        }
        assert create_call.kwargs["data"]["type"] == "express"
        assert create_call.kwargs["data"]["metadata[identity_id]"] == "user_ana"
        assert create_call.kwargs["data"]["business_profile[name]"] == "Ana Lima"
        assert link_call.args == ("POST", "/account_links")
        assert link_call.kwargs["data"]["account"] == "acct_new"
        assert link_call.kwargs["data"]["type"] == "account_onboarding"


class TestMockStripeActivationOracle:
    """Tests for the scriptable mock."""

    @pytest.mark.asyncio
    async def test_create_is_idempotent_per_identity(self):
        oracle = MockStripeActivationOracle()

        first = await oracle.create_account(IdentityId("user_1"), "a@example.com", None)
        again = await oracle.create_account(IdentityId("user_1"), "a@example.com", None)
        other = await oracle.create_account(IdentityId("user_2"), "b@example.com", None)

        assert first.account_id == again.account_id
        assert other.account_id != first.account_id
        assert oracle.create_calls == 3

    @pytest.mark.asyncio
    async def test_queued_statuses_served_in_order_last_one_sticks(self):
        # Arrange
        oracle = MockStripeActivationOracle()
        created = await oracle.create_account(
            IdentityId("user_1"), "a@example.com", None
        )
        submitted = OracleAccountStatus(
            charges_enabled=False, payouts_enabled=False, details_submitted=True
        )
        enabled = OracleAccountStatus(charges_enabled=True, payouts_enabled=True)
        oracle.queue_statuses(created.account_id, submitted, enabled)

        # Act
        polls = [await oracle.get_status(created.account_id) for _ in range(3)]

        # Assert
        assert polls == [submitted, enabled, enabled]

    @pytest.mark.asyncio
    async def test_unknown_account(self):
        oracle = MockStripeActivationOracle()

        with pytest.raises(StripeError):
            await oracle.get_status(AccountId("acct_missing"))
