"""Payments infrastructure providers."""

from dishka import Scope, provide

from gouache.adapter.stripe.client import (
    RealStripeActivationOracle,
    StripeActivationOracle,
)
from gouache.config import ActivationSettings
from gouache.util.di.base import ProviderBase


class PaymentsProvider(ProviderBase):
    """Payments component base."""

    __mock_component__ = "payments"


class ProdPaymentsProvider(PaymentsProvider):
    """Production payments provider backed by Stripe Connect."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_stripe_oracle(
        self, activation_settings: ActivationSettings
    ) -> StripeActivationOracle:
        """Provide Stripe oracle.

        Raises:
            ValueError: If the Stripe secret key is not configured
        """
        if not activation_settings.api_key:
            raise ValueError("Stripe API key must be configured")

        return RealStripeActivationOracle(
            api_key=activation_settings.api_key,
            base_url=activation_settings.api_base_url,
            return_url=activation_settings.return_url,
            refresh_url=activation_settings.refresh_url,
            country=activation_settings.default_country,
            timeout=activation_settings.request_timeout,
        )
