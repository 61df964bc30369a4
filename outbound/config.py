"""
Centralized Configuration
Client settings for the EmailBison and HQ master data APIs.
"""

import logging
from dataclasses import dataclass

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

EMAILBISON_DEFAULT_BASE_URL = "https://app.outboundsolutions.com"
HQ_DATA_DEFAULT_BASE_URL = "https://api.revenueinfra.com"

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_MAX_RETRIES = 3

PRODUCTION = "production"


class ConfigurationError(RuntimeError):
    """Raised when a client cannot be built from the supplied configuration.

    This is a setup defect, not a runtime API failure, so it is kept outside the
    EmailBisonError hierarchy.
    """


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for an authenticated EmailBison client."""

    api_key: str
    base_url: str = EMAILBISON_DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES
    debug: bool = False


@dataclass(frozen=True)
class HQClientConfig:
    """Configuration for the unauthenticated HQ master data client."""

    base_url: str = HQ_DATA_DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug: bool = False


# =============================================================================
# Typed Configuration (Pydantic Settings)
# =============================================================================


class EmailBisonSettings(BaseSettings):
    """EmailBison client configuration loaded from the environment.

    Attributes:
        api_key: Bearer token (``EMAILBISON_API_KEY``). Required.
        base_url: API root (``EMAILBISON_BASE_URL``). Defaults to production.
        timeout_ms: Per-attempt timeout in milliseconds.
        max_retries: Attempt budget for retryable failures.
        debug: Request logging. When unset, on for non-production environments.
        environment: Deployment environment (``EMAILBISON_ENV`` or ``APP_ENV``).
    """

    api_key: str = ""
    base_url: str | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES
    debug: bool | None = None
    environment: str = Field(
        default=PRODUCTION,
        validation_alias=AliasChoices("EMAILBISON_ENV", "APP_ENV"),
    )

    model_config = {
        "env_prefix": "EMAILBISON_",
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def debug_enabled(self) -> bool:
        if self.debug is not None:
            return self.debug
        return self.environment.lower() != PRODUCTION

    def to_client_config(self) -> ClientConfig:
        """Build a ClientConfig, failing loudly when the API key is absent.

        Raises:
            ConfigurationError: If ``EMAILBISON_API_KEY`` is not set.
        """
        if not self.api_key:
            raise ConfigurationError(
                "EMAILBISON_API_KEY environment variable is not set. "
                "Export it or add it to your .env file."
            )
        return ClientConfig(
            api_key=self.api_key,
            base_url=self.base_url or EMAILBISON_DEFAULT_BASE_URL,
            timeout_ms=self.timeout_ms,
            max_retries=self.max_retries,
            debug=self.debug_enabled,
        )


class HQDataSettings(BaseSettings):
    """HQ master data client configuration loaded from the environment."""

    base_url: str = Field(
        default=HQ_DATA_DEFAULT_BASE_URL,
        validation_alias=AliasChoices("HQ_DATA_API_URL", "HQ_DATA_BASE_URL"),
    )
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug: bool | None = None
    environment: str = Field(
        default=PRODUCTION,
        validation_alias=AliasChoices("HQ_DATA_ENV", "APP_ENV"),
    )

    model_config = {
        "env_prefix": "HQ_DATA_",
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def to_client_config(self) -> HQClientConfig:
        debug = self.debug if self.debug is not None else self.environment.lower() != PRODUCTION
        return HQClientConfig(
            base_url=self.base_url or HQ_DATA_DEFAULT_BASE_URL,
            timeout_ms=self.timeout_ms,
            debug=debug,
        )
