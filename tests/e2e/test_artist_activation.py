"""End-to-end tests for invite, onboarding and activation over HTTP."""

import pytest
from fastapi.testclient import TestClient

from gouache.interface.api.app import create_app
from tests.conftest import auth_cookies, make_identity, make_token
from tests.di import build_test_container

CURATOR = make_identity("curator@gouache.art", identity_id="user_curator")


@pytest.fixture
def client():
    """Create test client over a fresh mocked container."""
    app = create_app(container=build_test_container(with_fastapi=True))
    return TestClient(app)


def sign_in(client: TestClient, identity) -> None:
    client.cookies.clear()
    for name, value in auth_cookies(identity).items():
        client.cookies.set(name, value)


def issue_invite(client: TestClient, email: str = "ana@example.com") -> str:
    sign_in(client, CURATOR)
    response = client.post("/invites/", json={"email": email, "name": "Ana"})
    assert response.status_code == 201
    return response.json()["token"]


class TestHealth:
    """Health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == "test"


class TestInvitedArtistActivates:
    """An invited artist goes from invite link to payment activation."""

    def test_full_flow(self, client):
        # Arrange
        token = issue_invite(client)
        artist = make_identity("Ana@Example.com")

        # Act - open the invite link
        state = client.get(f"/invites/{token}")
        assert state.status_code == 200
        assert state.json()["valid"] is True

        # Act - walk the wizard
        sign_in(client, artist)
        started = client.post("/onboarding/sessions", json={"token": token})
        assert started.status_code == 201
        session_id = started.json()["session_id"]
        assert started.json()["state"] == "ready"

        advanced = client.post(
            f"/onboarding/sessions/{session_id}/advance",
            json={"display_name": "Ana Lima", "handle": "analima"},
        )
        assert advanced.status_code == 200
        assert advanced.json()["step"] == "practice-details"

        advanced = client.post(
            f"/onboarding/sessions/{session_id}/advance",
            json={"bio": "Painter", "links": {"website": "https://ana.example"}},
        )
        assert advanced.json()["step"] == "review"

        finalized = client.post(f"/onboarding/sessions/{session_id}/finalize")

        # Assert - onboarding done, invite used
        assert finalized.status_code == 200
        assert finalized.json()["outcome"] == "activated"
        assert finalized.json()["success"] is True
        assert client.get(f"/invites/{token}").json()["status"] == "redeemed"

        # Act - connect payments
        before = client.get("/activation")
        activated = client.post("/activation")
        again = client.post("/activation")
        watched = client.post("/activation/watch", json={"deadline_seconds": 0})

        # Assert - account created once, still in progress at the deadline
        assert before.json()["status"] == "unconnected"
        assert activated.status_code == 200
        assert activated.json()["status"] == "created"
        assert activated.json()["onboarding_url"]
        assert again.json()["account_id"] == activated.json()["account_id"]
        assert watched.status_code == 200
        assert watched.json()["outcome"] == "timed_out"
        assert watched.json()["activation"]["status"] == "incomplete"
        assert watched.json()["activation"]["can_transact"] is False

    def test_restart_resumes_session(self, client):
        token = issue_invite(client)
        sign_in(client, make_identity("ana@example.com", identity_id="user_ana"))
        first = client.post("/onboarding/sessions", json={"token": token}).json()
        client.post(
            f"/onboarding/sessions/{first['session_id']}/advance",
            json={"display_name": "Ana Lima", "handle": "analima"},
        )

        second = client.post("/onboarding/sessions", json={"token": token}).json()

        assert second["session_id"] == first["session_id"]
        assert second["step"] == "practice-details"
        assert second["draft"]["handle"] == "analima"


class TestAdminConsole:
    """Admins track the invites they issued."""

    def test_list_and_filter_invites(self, client):
        # Arrange
        first = issue_invite(client, "ana@example.com")
        second = issue_invite(client, "bea@example.com")
        client.post(f"/invites/{first}/revoke")

        # Act
        everything = client.get("/invites/")
        revoked = client.get("/invites/", params={"status": "revoked"})
        page = client.get("/invites/", params={"limit": 1})

        # Assert
        assert everything.status_code == 200
        assert everything.json()["total"] == 2
        assert {i["token"] for i in everything.json()["invites"]} == {first, second}
        assert [i["token"] for i in revoked.json()["invites"]] == [first]
        assert len(page.json()["invites"]) == 1
        assert page.json()["total"] == 2

    def test_unknown_status_filter(self, client):
        sign_in(client, CURATOR)

        assert client.get("/invites/", params={"status": "lost"}).status_code == 422

    def test_non_admin_cannot_list(self, client):
        sign_in(client, make_identity())

        assert client.get("/invites/").status_code == 403


class TestRejections:
    """Requests the API refuses."""

    def test_not_signed_in(self, client):
        response = client.post("/onboarding/sessions", json={"token": "anything"})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "not_authenticated"

    def test_garbage_cookie(self, client):
        client.cookies.set("auth_token", "not-a-jwt")

        assert client.get("/activation").status_code == 401

    def test_unconfirmed_sign_in_is_asked_to_retry(self, client):
        client.cookies.set("auth_token", make_token("user_new", None))

        response = client.get("/activation")

        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert response.json()["detail"]["code"] == "identity_pending"

    def test_non_admin_cannot_issue(self, client):
        sign_in(client, make_identity())

        response = client.post("/invites/", json={"email": "bo@example.com"})

        assert response.status_code == 403

    def test_malformed_invite_email(self, client):
        sign_in(client, CURATOR)

        response = client.post("/invites/", json={"email": "not-an-email"})

        assert response.status_code == 422

    def test_unknown_invite(self, client):
        assert client.get("/invites/missing-token").status_code == 404

    def test_wrong_email_gets_actionable_message(self, client):
        # Arrange
        token = issue_invite(client, "ana@example.com")
        sign_in(client, make_identity("bo@example.com"))

        # Act
        started = client.post("/onboarding/sessions", json={"token": token})
        session_id = started.json()["session_id"]
        advanced = client.post(
            f"/onboarding/sessions/{session_id}/advance",
            json={"display_name": "Bo", "handle": "bo"},
        )
        finalized = client.post(f"/onboarding/sessions/{session_id}/finalize")

        # Assert
        assert started.status_code == 201
        assert started.json()["state"] == "mismatched"
        assert "ana@example.com" in started.json()["message"]
        assert advanced.status_code == 409
        assert advanced.json()["detail"]["code"] == "email_mismatch"
        assert finalized.status_code == 409
        assert client.get(f"/invites/{token}").json()["status"] == "pending"

    def test_revoked_invite_cannot_start(self, client):
        token = issue_invite(client)
        revoked = client.post(f"/invites/{token}/revoke")
        sign_in(client, make_identity("ana@example.com"))

        response = client.post("/onboarding/sessions", json={"token": token})

        assert revoked.json()["result"] == "ok"
        assert response.status_code == 409
        assert response.json()["detail"]["reason"] == "revoked"

    def test_missing_basics(self, client):
        token = issue_invite(client)
        sign_in(client, make_identity("ana@example.com"))
        session_id = client.post(
            "/onboarding/sessions", json={"token": token}
        ).json()["session_id"]

        response = client.post(
            f"/onboarding/sessions/{session_id}/advance", json={"display_name": "Ana"}
        )

        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == ["handle"]

    def test_other_identity_cannot_read_session(self, client):
        token = issue_invite(client)
        sign_in(client, make_identity("ana@example.com"))
        session_id = client.post(
            "/onboarding/sessions", json={"token": token}
        ).json()["session_id"]
        sign_in(client, make_identity("ana@example.com"))

        response = client.get(f"/onboarding/sessions/{session_id}")

        assert response.status_code == 403

    def test_reconcile_before_activation(self, client):
        sign_in(client, make_identity())

        assert client.post("/activation/reconcile").status_code == 404
