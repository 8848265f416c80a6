import logging
import sys
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from anthropic_api.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.anthropic.com/v1/"
ANTHROPIC_VERSION = "2023-06-01"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None):
    """Opt-in logging for scripts built on this client.

    Sends records to stdout and sets the anthropic_api loggers to level
    (INFO by default). Importing the package never configures logging.
    """
    level = (level or "INFO").upper()
    logging.getLogger("anthropic_api").setLevel(level)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def normalize_base_url(value: Optional[str]) -> str:
    """Return the API origin with a guaranteed trailing slash.

    An empty value falls back to DEFAULT_BASE_URL.
    """
    if not value:
        return DEFAULT_BASE_URL
    if not value.endswith("/"):
        value += "/"
    return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ANTHROPIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials (ANTHROPIC_API_KEY / ANTHROPIC_BASE_URL)
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL

    # Request timeout in seconds; None blocks indefinitely on a stalled connection
    timeout: Optional[float] = None

    log_level: str = "INFO"


class Credentials(BaseModel):
    """API key and base URL for an Anthropic-compatible API."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize(cls, value: Optional[str]) -> str:
        return normalize_base_url(value)

    def __repr__(self) -> str:
        return f"Credentials(api_key='***', base_url={self.base_url!r})"

    __str__ = __repr__

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        """Build credentials from loaded settings. Raises if no API key is set."""
        if not settings.api_key:
            logger.error("ANTHROPIC_API_KEY environment variable is required")
            raise ConfigurationError("ANTHROPIC_API_KEY is not set")
        return cls(api_key=settings.api_key, base_url=settings.base_url)

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read ANTHROPIC_API_KEY and ANTHROPIC_BASE_URL from the environment (or .env)."""
        return cls.from_settings(Settings())
