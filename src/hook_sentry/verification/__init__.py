"""Webhook signature verification."""

from hook_sentry.verification.errors import (
    AuthenticationError,
    ConfigurationError,
    WebhookVerificationError,
)
from hook_sentry.verification.options import DEFAULT_HMAC_HEADER, VerificationOptions
from hook_sentry.verification.request import InboundRequest, VerificationRequest, extract_header
from hook_sentry.verification.result import Outcome, VerificationResult
from hook_sentry.verification.signature import compute_signature, sign_payload
from hook_sentry.verification.verifier import WebhookVerifier, validate_webhook

__all__ = [
    "DEFAULT_HMAC_HEADER",
    "AuthenticationError",
    "ConfigurationError",
    "InboundRequest",
    "Outcome",
    "VerificationOptions",
    "VerificationRequest",
    "VerificationResult",
    "WebhookVerificationError",
    "WebhookVerifier",
    "compute_signature",
    "extract_header",
    "sign_payload",
    "validate_webhook",
]
