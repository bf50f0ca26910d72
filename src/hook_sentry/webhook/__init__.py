"""Webhook receiving endpoints."""

from hook_sentry.webhook.dependencies import get_verifier, require_valid_signature
from hook_sentry.webhook.handler import router

__all__ = ["router", "get_verifier", "require_valid_signature"]
