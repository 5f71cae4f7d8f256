"""Identity domain service."""

import logfire

from gouache.domain.error import IdentityPendingError, IdentityUnavailableError
from gouache.domain.value import Identity
from gouache.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class IdentityProvider:
    """Source of the signed-in identity.

    Returns None while the identity is not yet known, for example while the
    sign-in service is still confirming the address.
    """

    async def current_identity(self) -> Identity | None:
        """Return the signed-in identity, or None if not yet known.

        Raises:
            IdentityUnavailableError: If there is no valid sign-in at all
        """
        raise NotImplementedError


class TokenIdentityProvider(IdentityProvider):
    """Identity carried by a sign-in token."""

    def __init__(self, jwt_service: JWTService, token: str) -> None:
        self.jwt_service = jwt_service
        self.token = token

    async def current_identity(self) -> Identity | None:
        try:
            return self.jwt_service.identity_from_token(self.token)
        except JWTError as e:
            raise IdentityUnavailableError("Invalid or expired sign-in") from e


class IdentityService(Service):
    """Resolves the signed-in identity.

    The provider is asked once. An identity that is not yet known is
    reported with a retry hint rather than waited for, so the request never
    sleeps; the client retries.
    """

    def __init__(self, retry_after_seconds: int) -> None:
        """Initialize identity service.

        Args:
            retry_after_seconds: Retry hint for a not-yet-known identity
        """
        self.retry_after_seconds = retry_after_seconds

    async def resolve(self, provider: IdentityProvider) -> Identity:
        """Ask the provider for a resolved identity.

        Args:
            provider: Identity provider to ask

        Returns:
            The resolved identity

        Raises:
            IdentityPendingError: If the identity is not yet known
            IdentityUnavailableError: If there is no valid sign-in
        """
        with logfire.span("identity_service.resolve"):
            identity = await provider.current_identity()
            if identity is None:
                logfire.info(
                    "Identity not yet known", retry_after=self.retry_after_seconds
                )
                raise IdentityPendingError(self.retry_after_seconds)
            return identity
