"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import logfire
import pytest

from gouache.config import AuthSettings
from gouache.domain.value import Email, Identity, IdentityId

# Keep spans local; nothing is exported from test runs
logfire.configure(send_to_logfire=False, console=False)


def make_identity(
    email: str = "ana@example.com",
    identity_id: str | None = None,
    display_name: str | None = "Ana Lima",
) -> Identity:
    """Helper to build a signed-in identity.

    Args:
        email: Identity email
        identity_id: Identity id (random when omitted)
        display_name: Display name from the auth system

    Returns:
        Identity value object
    """
    return Identity(
        id=IdentityId(identity_id or f"user_{uuid4().hex[:12]}"),
        email=Email(root=email),
        display_name=display_name,
    )


def make_token(
    identity_id: str,
    email: str | None,
    display_name: str | None = None,
    settings: AuthSettings | None = None,
    expires_in: timedelta = timedelta(days=1),
) -> str:
    """Sign a token the way the sign-in service does.

    Args:
        identity_id: Identity id claim
        email: Confirmed email; None for a sign-in still being set up
        display_name: Optional display name claim
        settings: Secret and algorithm (test defaults when omitted)
        expires_in: Lifetime; negative for an already expired token

    Returns:
        Encoded JWT
    """
    settings = settings or AuthSettings()
    payload = {
        "identity_id": identity_id,
        "display_name": display_name,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_cookies(identity: Identity) -> dict[str, str]:
    """Cookies a browser signed in as the identity would send."""
    token = make_token(identity.id, identity.email.root, identity.display_name)
    return {"auth_token": token}


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Run every test with test settings."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("INVITATIONS__ADMIN_EMAILS", '["curator@gouache.art"]')
