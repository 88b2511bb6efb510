# Settings — environment / .env driven configuration for the CLI and API.
# Created: 2026-10-19

from __future__ import annotations

import logging
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from tokensign.errors import InvalidKey
from tokensign.signer import DEFAULT_DIGEST, DEFAULT_SEPARATOR, Signer

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """tokensign settings, read from ``TOKENSIGN_*`` variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENSIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: SecretStr | None = Field(default=None, description="Shared HMAC secret")
    digest: str = Field(default=DEFAULT_DIGEST, description="HMAC hash algorithm")
    separator: str = Field(default=DEFAULT_SEPARATOR, description="Token field separator")
    max_age_seconds: float = Field(
        default=0,
        ge=0,
        le=1e12,
        description="Default token lifetime in seconds; 0 disables expiry",
    )
    api_token: SecretStr | None = Field(
        default=None, description="Bearer token required to sign through the HTTP API"
    )
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8899, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    @property
    def max_age(self) -> timedelta:
        return timedelta(seconds=self.max_age_seconds)

    def build_signer(self, key: str | bytes | None = None) -> Signer:
        """Create a new Signer from these settings.

        *key* overrides ``secret_key``. Raises InvalidKey when neither is set.
        """
        if key is None:
            if self.secret_key is None:
                raise InvalidKey("No secret key configured (set TOKENSIGN_SECRET_KEY)")
            key = self.secret_key.get_secret_value()
        logger.debug("Building signer (digest=%s)", self.digest)
        return Signer(key, digest=self.digest, separator=self.separator)


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, loaded once."""
    return Settings()
