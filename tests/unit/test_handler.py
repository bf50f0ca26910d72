"""Tests for the webhook receiving endpoint."""

import json
import logging

import pytest
from fastapi.testclient import TestClient

from hook_sentry.main import create_app
from hook_sentry.verification import ConfigurationError, compute_signature

SECRET = "test-webhook-secret"


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch):
    """Set up test environment variables."""
    monkeypatch.setenv("WEBHOOK_SECRET", SECRET)
    monkeypatch.setenv("HMAC_ALGORITHM", "sha256")
    monkeypatch.setenv("HMAC_HEADER", "X-Shopify-Hmac-Sha256")


@pytest.fixture
def client(test_settings):  # noqa: ARG001
    """Create test client with test settings."""
    # Clear the settings cache
    from hook_sentry.config import get_settings

    get_settings.cache_clear()

    app = create_app()
    yield TestClient(app)

    get_settings.cache_clear()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_webhook_accepts_valid_signature(client: TestClient):
    """Test that a correctly signed delivery is accepted."""
    payload = json.dumps({"id": 1, "total_price": "199.00"}).encode()

    response = client.post(
        "/webhook",
        content=payload,
        headers={
            "X-Shopify-Hmac-Sha256": compute_signature(SECRET, payload),
            "X-Shopify-Topic": "orders/create",
            "Content-Type": "application/json",
        },
    )
    assert response.status_code == 200
    assert response.json() == {"status": "accepted", "topic": "orders/create"}


def test_webhook_header_is_case_insensitive(client: TestClient):
    """Test that a lower-case signature header is honoured."""
    payload = b'{"id":1}'

    response = client.post(
        "/webhook",
        content=payload,
        headers={"x-shopify-hmac-sha256": compute_signature(SECRET, payload)},
    )
    assert response.status_code == 200


def test_webhook_rejects_invalid_signature(client: TestClient):
    """Test that webhook rejects invalid signatures."""
    response = client.post(
        "/webhook",
        json={"id": 1},
        headers={"X-Shopify-Hmac-Sha256": "invalid"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid signature"


def test_webhook_rejects_missing_signature(client: TestClient):
    """Test that unsigned deliveries are rejected."""
    response = client.post("/webhook", json={"id": 1})
    assert response.status_code == 401


def test_webhook_rejects_tampered_body(client: TestClient):
    """Test that a body altered after signing is rejected."""
    payload = b'{"id":1,"total_price":"199.00"}'
    signature = compute_signature(SECRET, payload)

    response = client.post(
        "/webhook",
        content=payload.replace(b"199.00", b"1.00"),
        headers={"X-Shopify-Hmac-Sha256": signature},
    )
    assert response.status_code == 401


def test_webhook_signed_non_json_body(client: TestClient):
    """Test that an authentic but non-JSON body is a bad request."""
    payload = b"not json"

    response = client.post(
        "/webhook",
        content=payload,
        headers={"X-Shopify-Hmac-Sha256": compute_signature(SECRET, payload)},
    )
    assert response.status_code == 400


def test_webhook_misconfigured_algorithm(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    """Test that a bad digest setting surfaces as a server error."""
    from hook_sentry.config import get_settings

    monkeypatch.setenv("HMAC_ALGORITHM", "md17")
    get_settings.cache_clear()

    response = client.post(
        "/webhook",
        content=b'{"id":1}',
        headers={"X-Shopify-Hmac-Sha256": "anything"},
    )
    assert response.status_code == 500


def test_webhook_rejection_logged_once(client: TestClient, caplog: pytest.LogCaptureFixture):
    """Test that a rejected delivery produces a single warning."""
    with caplog.at_level(logging.DEBUG):
        response = client.post(
            "/webhook",
            content=b'{"id":1}',
            headers={"X-Shopify-Hmac-Sha256": "invalid"},
        )

    assert response.status_code == 401
    warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert "webhook.rejected" in warnings[0].getMessage()


@pytest.mark.parametrize(
    "env",
    [
        {"HMAC_ALGORITHM": "md17"},
        {"WEBHOOK_SECRET": ""},
    ],
)
def test_startup_fails_on_bad_configuration(
    test_settings,  # noqa: ARG001
    monkeypatch: pytest.MonkeyPatch,
    env: dict[str, str],
):
    """Test that the app refuses to start with unusable verification settings."""
    from hook_sentry.config import get_settings

    for key, value in env.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()

    try:
        with pytest.raises(ConfigurationError):
            with TestClient(create_app()):
                pass
    finally:
        get_settings.cache_clear()


def test_startup_succeeds_with_valid_configuration(client: TestClient):  # noqa: ARG001
    """Test that the lifespan runs with valid settings."""
    with TestClient(create_app()) as started:
        assert started.get("/health").status_code == 200
