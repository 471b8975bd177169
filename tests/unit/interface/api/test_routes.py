"""HTTP tests for the invitation and user routes against in-memory stores."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from greyn.domain.repository import AccountDirectory
from greyn.domain.value import AccountRole
from greyn.interface.api.app import create_app
from tests.conftest import make_account
from tests.di import build_test_container

ADMIN_HEADERS = {"X-Admin-Id": str(uuid4())}


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


def invite(client, email="invitee@example.com", role="ngo", portal="NGO Portal", **extra):
    return client.post(
        "/admin/invitations",
        json={"email": email, "role": role, "portal": portal, **extra},
        headers=ADMIN_HEADERS,
    )


def token_of(response) -> str:
    return response.json()["invitation_url"].split("token=")[1]


class TestInvitationRoutes:
    """Tests for /admin/invitations and /invitations."""

    def test_health(self, client):
        assert client.get("/health").status_code == 200

    def test_create_and_accept(self, client):
        """Scenario: invite, accept, then a second accept is refused."""
        # Arrange
        created = invite(client)
        assert created.status_code == 201
        token = token_of(created)

        # Act
        accepted = client.post("/invitations/accept", json={"token": token})
        again = client.post("/invitations/accept", json={"token": token})

        # Assert
        assert accepted.status_code == 200
        assert accepted.json()["email"] == "invitee@example.com"
        assert again.status_code == 409
        assert again.json() == {
            "kind": "invalid_state",
            "message": "Invitation has already been accepted",
            "retryable": False,
        }

    def test_duplicate_pending_is_conflict(self, client):
        invite(client, email="dup@example.com")

        response = invite(client, email="DUP@example.com")

        assert response.status_code == 409
        assert response.json()["kind"] == "duplicate_pending_invitation"

    def test_invalid_email_is_bad_request(self, client):
        response = invite(client, email="nope")

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    def test_missing_admin_header_is_rejected(self, client):
        response = client.post(
            "/admin/invitations",
            json={"email": "a@example.com", "role": "ngo", "portal": "NGO Portal"},
        )

        assert response.status_code == 422

    def test_validate_unknown_token(self, client):
        response = client.get("/invitations/unknown-token")

        assert response.status_code == 200
        assert response.json()["valid"] is False
        assert response.json()["message"] == "Invitation not found"

    def test_revoke_then_resend_is_conflict(self, client):
        invitation_id = invite(client).json()["invitation"]["invitation_id"]

        revoked = client.put(
            f"/admin/invitations/{invitation_id}/revoke", headers=ADMIN_HEADERS
        )
        resent = client.put(f"/admin/invitations/{invitation_id}/resend")

        assert revoked.status_code == 200
        assert revoked.json()["invitation"]["status"] == "revoked"
        assert resent.status_code == 409

    def test_resend_counts(self, client):
        invitation_id = invite(client).json()["invitation"]["invitation_id"]

        response = client.put(
            f"/admin/invitations/{invitation_id}/resend",
            json={"days_until_expiry": 3},
        )

        assert response.status_code == 200
        assert response.json()["invitation"]["resend_count"] == 1

    def test_get_unknown_is_not_found(self, client):
        response = client.get(f"/admin/invitations/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_stats_and_export(self, client):
        invite(client, email="a@example.com")
        invite(client, email="b@example.com", role="corporate", portal="Corporate ESG")

        stats = client.get("/admin/invitations/stats").json()
        export = client.get("/admin/invitations/export", params={"role": "corporate"})

        assert stats["total"] == 2
        assert stats["pending"] == 2
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=" in export.headers["content-disposition"]
        lines = export.text.strip().splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("b@example.com,")


class TestUserRoutes:
    """Tests for /admin/users."""

    def test_change_role(self, client, container):
        """Scenario: an investor becomes corporate under a new id."""
        # Arrange
        accounts = client.portal.call(container.get, AccountDirectory)
        investor = make_account(AccountRole.INVESTOR, email="x@example.com", name="X")
        client.portal.call(accounts.get(AccountRole.INVESTOR).create, investor)

        # Act
        response = client.put(
            f"/admin/users/{investor.id}/role",
            json={"role": "corporate"},
            headers=ADMIN_HEADERS,
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["previous_id"] == str(investor.id)
        assert body["user"]["role"] == "corporate"
        assert client.get(f"/admin/users/{investor.id}").status_code == 404
        assert client.get(f"/admin/users/{body['user']['id']}").status_code == 200

    def test_invalid_role_is_bad_request(self, client, container):
        accounts = client.portal.call(container.get, AccountDirectory)
        investor = make_account(AccountRole.INVESTOR)
        client.portal.call(accounts.get(AccountRole.INVESTOR).create, investor)

        response = client.put(
            f"/admin/users/{investor.id}/role",
            json={"role": "wizard"},
            headers=ADMIN_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_role"

    def test_list_and_stats(self, client, container):
        accounts = client.portal.call(container.get, AccountDirectory)
        ngo = make_account(AccountRole.NGO, organization_name="Green Earth")
        client.portal.call(accounts.get(AccountRole.NGO).create, ngo)

        listing = client.get("/admin/users", params={"portal": "NGO Portal"}).json()
        stats = client.get("/admin/users/stats").json()

        assert listing["total"] == 1
        assert listing["users"][0]["display_name"] == "Green Earth"
        assert stats == {"total": 1, "active": 1, "pending": 0, "suspended": 0}
