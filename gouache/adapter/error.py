"""Adapter layer errors."""

from gouache.domain.error import OracleUnavailableError


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class StripeError(ProviderError):
    """Stripe rejected a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class StripeUnavailableError(StripeError, OracleUnavailableError):
    """Stripe could not be reached or is temporarily failing."""

    pass
