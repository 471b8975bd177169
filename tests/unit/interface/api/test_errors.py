"""Tests for mapping domain errors to HTTP responses."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from greyn.domain.error import InvitationExpiredError, StoreUnavailableError
from greyn.interface.api.errors import register_error_handlers


def build_client() -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/unavailable")
    async def unavailable():
        raise StoreUnavailableError("invitations.find_by_token", "timeout")

    @app.get("/expired")
    async def expired():
        raise InvitationExpiredError("abc")

    return TestClient(app)


class TestDomainErrorHandler:
    """Tests for domain_error_handler."""

    def test_store_unavailable_is_retryable_503(self):
        response = build_client().get("/unavailable")

        assert response.status_code == 503
        body = response.json()
        assert body["kind"] == "store_unavailable"
        assert body["retryable"] is True

    def test_expired_is_gone(self):
        response = build_client().get("/expired")

        assert response.status_code == 410
        assert response.json()["kind"] == "expired"
        assert response.json()["retryable"] is False
