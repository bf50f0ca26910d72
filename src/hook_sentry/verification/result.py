"""Tagged outcome of a verification attempt."""

from dataclasses import dataclass
from enum import Enum

from hook_sentry.verification.errors import (
    AuthenticationError,
    ConfigurationError,
    WebhookVerificationError,
)


class Outcome(str, Enum):
    VERIFIED = "verified"
    CONFIGURATION_ERROR = "configuration_error"
    AUTHENTICATION_ERROR = "authentication_error"


@dataclass(frozen=True)
class VerificationResult:
    """
    Result of checking one request.

    Callers can branch on ``outcome`` (or use ``match``) instead of catching
    exceptions. ``error`` is set for every outcome except ``VERIFIED``.
    """

    outcome: Outcome
    error: WebhookVerificationError | None = None

    @classmethod
    def verified(cls) -> "VerificationResult":
        return cls(Outcome.VERIFIED)

    @classmethod
    def from_error(cls, error: WebhookVerificationError) -> "VerificationResult":
        if isinstance(error, AuthenticationError):
            return cls(Outcome.AUTHENTICATION_ERROR, error)
        if isinstance(error, ConfigurationError):
            return cls(Outcome.CONFIGURATION_ERROR, error)
        raise TypeError(f"Unsupported verification error: {type(error).__name__}")

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.VERIFIED

    def raise_for_outcome(self) -> None:
        """Raise the carried error unless the request was verified."""
        if self.error is not None:
            raise self.error
