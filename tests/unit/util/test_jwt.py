"""Tests for JWT helpers."""

from datetime import timedelta

import pytest

from gouache.config import AuthSettings
from gouache.util.jwt import JWTError, verify_token
from tests.conftest import make_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


def test_reads_payload():
    token = make_token("user_ana", "ana@example.com", "Ana", SETTINGS)

    payload = verify_token(token, SETTINGS)

    assert payload.identity_id == "user_ana"
    assert payload.email == "ana@example.com"
    assert payload.display_name == "Ana"


def test_email_claim_is_optional():
    token = make_token("user_ana", None, settings=SETTINGS)

    payload = verify_token(token, SETTINGS)

    assert payload.email is None


def test_expired_token():
    token = make_token(
        "user_ana",
        "ana@example.com",
        settings=SETTINGS,
        expires_in=timedelta(minutes=-1),
    )

    with pytest.raises(JWTError, match="expired"):
        verify_token(token, SETTINGS)


def test_wrong_secret():
    token = make_token("user_ana", "ana@example.com", settings=SETTINGS)

    with pytest.raises(JWTError):
        verify_token(token, AuthSettings(jwt_secret="other-secret"))
