"""Tests for value objects."""

import pytest

from gouache.domain.value import Email, Handle, InviteToken


class TestEmail:
    """Tests for Email."""

    def test_matches_ignores_case_and_whitespace(self):
        assert Email(root="Ana@Example.com").matches(" ana@example.COM ")

    def test_matches_other_email(self):
        assert not Email(root="ana@example.com").matches(Email(root="bo@example.com"))

    @pytest.mark.parametrize("value", ["", "ana", "ana@", "ana @example.com"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            Email(root=value)


class TestHandle:
    """Tests for Handle."""

    def test_strips_at_sign(self):
        assert Handle(root="@ana.lima").root == "ana.lima"

    @pytest.mark.parametrize("value", ["a", "has space", "x" * 31, "émile"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            Handle(root=value)


def test_invite_token_masked_in_logs():
    token = InviteToken(root="abcdefghijklmnop")

    assert token.masked == "abcdefgh..."
    assert "ijkl" not in token.masked
