"""Configuration management using Pydantic settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hook_sentry.verification import DEFAULT_HMAC_HEADER, VerificationOptions


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Required settings
    webhook_secret: str = Field(
        ...,
        description="Shared secret used to sign webhook payloads",
    )

    # Verification settings
    hmac_algorithm: str = Field(
        default="sha256",
        description="Digest used for the HMAC signature",
    )
    body_encoding: str = Field(
        default="utf-8",
        description="Text encoding of webhook bodies",
    )
    hmac_header: str = Field(
        default=DEFAULT_HMAC_HEADER,
        description="Header carrying the sender's signature",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    def verification_options(self) -> VerificationOptions:
        """Build validated verification options from these settings."""
        return VerificationOptions(
            algorithm=self.hmac_algorithm,
            encoding=self.body_encoding,
            hmac_header=self.hmac_header,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
