"""JWT token utilities.

Identity tokens are issued by the sign-in service and carried in the
``auth_token`` cookie; this service only reads them. A token issued before
the sign-in service has confirmed the address carries no email claim.
"""

from datetime import datetime

import jwt
from pydantic import BaseModel

from gouache.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    identity_id: str
    email: str | None = None  # absent until the address is confirmed
    display_name: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValueError:
        raise JWTError("Malformed token payload")
