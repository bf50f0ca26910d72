"""FastAPI dependency that rejects unsigned or tampered webhooks."""

import logging

from fastapi import HTTPException, Request

from hook_sentry.config import get_settings
from hook_sentry.verification import (
    AuthenticationError,
    ConfigurationError,
    InboundRequest,
    WebhookVerifier,
)

logger = logging.getLogger(__name__)


def get_verifier() -> WebhookVerifier:
    """Build a verifier from the current settings."""
    settings = get_settings()
    return WebhookVerifier(settings.webhook_secret, settings.verification_options())


async def require_valid_signature(request: Request) -> InboundRequest:
    """
    Verify the request signature against the raw body.

    Returns the captured request so the route can parse the same bytes that
    were verified.
    """
    # Read raw body before anything parses it
    inbound = await InboundRequest.from_starlette(request)

    try:
        verifier = get_verifier()
        await verifier.averify(inbound)
    except AuthenticationError as e:
        logger.debug(f"Responding 401 to {e.client_ip}: {e.reason}")
        raise HTTPException(status_code=401, detail="Invalid signature") from e
    except ConfigurationError as e:
        logger.error(f"Webhook verification is misconfigured: {e}")
        raise HTTPException(status_code=500, detail="Webhook verification misconfigured") from e

    return inbound
