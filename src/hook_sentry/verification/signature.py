"""HMAC signature computation over raw webhook bodies."""

import base64
import codecs
import hashlib
import hmac

from hook_sentry.verification.errors import ConfigurationError

DEFAULT_ALGORITHM = "sha256"
DEFAULT_ENCODING = "utf-8"

RawBody = bytes | bytearray | memoryview | str


def resolve_algorithm(algorithm: str) -> str:
    """
    Normalise a digest name and check that hashlib can provide it.

    Raises:
        ConfigurationError: If the digest is unknown or has no fixed size
    """
    name = algorithm.strip().lower()
    if not name or name.startswith("shake_"):
        raise ConfigurationError(f"Unsupported HMAC algorithm: {algorithm!r}")
    try:
        hashlib.new(name)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Unsupported HMAC algorithm: {algorithm!r}") from e
    return name


def resolve_encoding(encoding: str) -> str:
    """Return the canonical codec name, or raise ConfigurationError."""
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise ConfigurationError(f"Unknown body encoding: {encoding!r}") from e


def _secret_bytes(secret: str | bytes) -> bytes:
    key = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
    if not key:
        raise ConfigurationError("Webhook secret must not be empty")
    return key


def compute_signature(
    secret: str | bytes,
    raw_body: RawBody,
    algorithm: str = DEFAULT_ALGORITHM,
    encoding: str = DEFAULT_ENCODING,
) -> str:
    """
    Compute the base64-encoded HMAC of a webhook body.

    Args:
        secret: Shared secret; text secrets are keyed as UTF-8
        raw_body: The body exactly as received. Bytes are hashed unchanged,
            text is encoded with ``encoding`` first
        algorithm: hashlib digest name, e.g. ``sha256``
        encoding: Text encoding applied to a ``str`` body

    Returns:
        The digest as base64 text

    Raises:
        ConfigurationError: For an empty secret, unknown digest or encoding
    """
    digest_name = resolve_algorithm(algorithm)
    codec = resolve_encoding(encoding)
    key = _secret_bytes(secret)

    if isinstance(raw_body, str):
        try:
            message = raw_body.encode(codec)
        except UnicodeEncodeError as e:
            raise ConfigurationError(f"Body cannot be encoded as {codec}") from e
    else:
        message = bytes(raw_body)

    digest = hmac.new(key, message, digest_name).digest()
    return base64.b64encode(digest).decode("ascii")


# Name used by senders and tooling producing signatures for outgoing payloads.
sign_payload = compute_signature
