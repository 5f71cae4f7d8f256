"""JWT token domain service."""

import logfire

from gouache.config import AuthSettings
from gouache.domain.value import Email, Identity, IdentityId
from gouache.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for identity tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def identity_from_token(self, token: str) -> Identity | None:
        """Read the identity a token vouches for.

        Args:
            token: JWT token string

        Returns:
            The identity, or None while the token carries no confirmed email

        Raises:
            JWTError: If the token is invalid, expired or malformed
        """
        payload = self.verify_token(token)
        if not payload.email:
            logfire.info(
                "Token has no confirmed email yet", identity_id=payload.identity_id
            )
            return None

        try:
            email = Email(root=payload.email)
        except ValueError as e:
            raise JWTError("Malformed email claim") from e
        return Identity(
            id=IdentityId(payload.identity_id),
            email=email,
            display_name=payload.display_name,
        )
