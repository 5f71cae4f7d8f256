"""Mock payments providers for testing."""

from dishka import Scope, provide

from gouache.adapter.stripe.client import (
    MockStripeActivationOracle,
    StripeActivationOracle,
)
from gouache.util.di.infrastructure.payments import PaymentsProvider


class MockPaymentsProvider(PaymentsProvider):
    """Mock payments provider using the scriptable Stripe oracle.

    APP scope, so a test can script the oracle it resolves and the services
    built for later requests see the same instance.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_stripe_oracle(self) -> StripeActivationOracle:
        """Provide mock Stripe oracle."""
        return MockStripeActivationOracle()
