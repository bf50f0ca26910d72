"""Errors raised while verifying webhook signatures."""


class WebhookVerificationError(Exception):
    """Base class for webhook verification failures."""


class ConfigurationError(WebhookVerificationError):
    """Raised for an unusable secret, digest algorithm, encoding or header name."""


class AuthenticationError(WebhookVerificationError):
    """
    Raised when the presented signature does not match the computed one.

    Carries the client address and user agent for auditing, never the
    secret or either signature value.
    """

    MISSING_SIGNATURE = "missing_signature"
    SIGNATURE_MISMATCH = "signature_mismatch"

    def __init__(
        self,
        reason: str,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.reason = reason
        self.client_ip = client_ip
        self.user_agent = user_agent
        super().__init__(
            f"Webhook signature rejected ({reason}), {client_ip or '-'} : {user_agent or '-'}"
        )
