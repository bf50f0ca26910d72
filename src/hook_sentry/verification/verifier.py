"""Webhook signature verification."""

import hmac
import logging
from collections.abc import Callable, Mapping
from typing import Any

from hook_sentry.verification.errors import (
    AuthenticationError,
    ConfigurationError,
    WebhookVerificationError,
)
from hook_sentry.verification.options import VerificationOptions
from hook_sentry.verification.request import VerificationRequest, extract_header
from hook_sentry.verification.result import VerificationResult
from hook_sentry.verification.signature import compute_signature

logger = logging.getLogger(__name__)

LogHook = Callable[[str, Mapping[str, Any]], None]


def signatures_match(expected: str, presented: str) -> bool:
    """Constant-time equality of two signature strings."""
    return hmac.compare_digest(expected.encode("utf-8"), presented.encode("utf-8"))


class WebhookVerifier:
    """
    Checks inbound webhook requests against a shared secret.

    The verifier holds no per-request state, so one instance can serve any
    number of concurrent deliveries.
    """

    def __init__(
        self,
        secret: str | bytes,
        options: VerificationOptions | None = None,
        log_hook: LogHook | None = None,
    ) -> None:
        if not secret:
            raise ConfigurationError("Webhook secret must not be empty")
        self._secret = secret
        self.options = options or VerificationOptions()
        self._log_hook = log_hook

    def __repr__(self) -> str:
        return f"{type(self).__name__}(options={self.options!r})"

    def _emit(self, event: str, level: int, **fields: Any) -> None:
        if self._log_hook is not None:
            self._log_hook(event, fields)
        else:
            logger.log(level, "%s %s", event, fields)

    def check(self, request: VerificationRequest) -> VerificationResult:
        """
        Verify a request and return a tagged result.

        Never raises for a bad signature or bad configuration; both are
        reported through the result.
        """
        header_name = self.options.hmac_header
        self._emit("webhook.validating", logging.DEBUG, header=header_name)

        try:
            self._verify(request, header_name)
        except WebhookVerificationError as e:
            result = VerificationResult.from_error(e)
            self._emit(
                "webhook.rejected",
                logging.WARNING,
                reason=getattr(e, "reason", result.outcome.value),
                header=header_name,
                client_ip=request.client_ip,
                user_agent=request.user_agent,
            )
            return result

        self._emit("webhook.verified", logging.DEBUG, header=header_name)
        return VerificationResult.verified()

    def _verify(self, request: VerificationRequest, header_name: str) -> None:
        presented_signature = extract_header(request, header_name)

        expected_signature = compute_signature(
            self._secret,
            request.body,
            algorithm=self.options.algorithm,
            encoding=self.options.encoding,
        )

        if not presented_signature:
            raise AuthenticationError(
                AuthenticationError.MISSING_SIGNATURE,
                client_ip=request.client_ip,
                user_agent=request.user_agent,
            )

        if not signatures_match(expected_signature, presented_signature):
            raise AuthenticationError(
                AuthenticationError.SIGNATURE_MISMATCH,
                client_ip=request.client_ip,
                user_agent=request.user_agent,
            )

    def verify(self, request: VerificationRequest) -> None:
        """
        Verify a request, returning normally when it is authentic.

        Raises:
            AuthenticationError: If the signature is missing or does not match
            ConfigurationError: If the digest, encoding or secret is unusable
        """
        self.check(request).raise_for_outcome()

    async def averify(self, request: VerificationRequest) -> None:
        """Awaitable form of :meth:`verify` for async request pipelines."""
        self.verify(request)


async def validate_webhook(
    request: VerificationRequest,
    secret: str | bytes,
    options: VerificationOptions | None = None,
    log_hook: LogHook | None = None,
) -> None:
    """One-shot verification of a single request."""
    await WebhookVerifier(secret, options, log_hook=log_hook).averify(request)
