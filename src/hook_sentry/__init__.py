"""hook-sentry - HMAC signature verification for inbound webhooks."""

__version__ = "0.1.0"
