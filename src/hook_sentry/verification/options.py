"""Verification options: digest, body encoding and signature header."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hook_sentry.verification.errors import ConfigurationError
from hook_sentry.verification.signature import (
    DEFAULT_ALGORITHM,
    DEFAULT_ENCODING,
    resolve_algorithm,
    resolve_encoding,
)

DEFAULT_HMAC_HEADER = "X-Shopify-Hmac-Sha256"


class VerificationOptions(BaseModel):
    """
    Immutable set of verification parameters.

    Validated once when built, so a bad digest name or encoding fails at
    startup rather than on the first delivery.
    """

    model_config = ConfigDict(frozen=True)

    algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        description="hashlib digest used for the HMAC",
    )
    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Text encoding applied to text bodies before hashing",
    )
    hmac_header: str = Field(
        default=DEFAULT_HMAC_HEADER,
        description="Request header carrying the sender's signature",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, data: object) -> object:
        # ConfigurationError is not a ValueError, so pydantic lets it propagate.
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if isinstance(values.get("algorithm"), str):
            values["algorithm"] = resolve_algorithm(values["algorithm"])
        if isinstance(values.get("encoding"), str):
            values["encoding"] = resolve_encoding(values["encoding"])
        header = values.get("hmac_header")
        if isinstance(header, str):
            if not header.strip():
                raise ConfigurationError("Signature header name must not be blank")
            values["hmac_header"] = header.strip()
        return values
