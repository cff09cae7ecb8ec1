"""Environment configuration for the MDM database bootstrap.

Values come from the process environment or a `.env` file at the repository
root. Malformed values never raise: they fall back to the defaults below, so a
misconfigured job still starts and keeps trying the default target.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, ClassVar, Dict
from urllib.parse import quote_plus
import os
import re

DEFAULT_DATABASE = "mdm-patient-management"
DEFAULT_RETRY_SECONDS = 5

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TRUTHY = ("true", "1", "yes")


def parse_int_prefix(value) -> Optional[int]:
    """Parse the leading integer of `value` ("7s" -> 7), None when there is none."""
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _positive_int_or(default):
    def coerce(value):
        parsed = parse_int_prefix(value)
        return parsed if parsed is not None and parsed > 0 else default
    return coerce


def _flag(value) -> bool:
    return str(value or "").strip().lower() in _TRUTHY


class Settings(BaseSettings):
    MDM_API_MONGODB_HOST: str = "localhost"
    MDM_API_MONGODB_PORT: int = 27017
    MDM_API_MONGODB_USERNAME: str = ""
    MDM_API_MONGODB_PASSWORD: str = ""
    MDM_API_MONGODB_DATABASE: str = DEFAULT_DATABASE
    MDM_API_MONGODB_TIMEOUT_SECONDS: int = 10
    MDM_API_MONGODB_UNIQUE_IDS: bool = False
    RETRY_CONNECTION_SECONDS: int = DEFAULT_RETRY_SECONDS
    # unset means retry forever
    RETRY_CONNECTION_MAX_ATTEMPTS: Optional[int] = None
    RETRY_CONNECTION_BACKOFF: float = 1.0
    RETRY_CONNECTION_MAX_SECONDS: int = 300
    MDM_INIT_STRICT_SEED: bool = False

    env_path: ClassVar[str] = os.path.join(os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), ".env")
    model_config = SettingsConfigDict(env_file=env_path, extra="ignore")

    @field_validator("MDM_API_MONGODB_HOST", mode="before")
    @classmethod
    def _host(cls, value):
        return value or "localhost"

    @field_validator("MDM_API_MONGODB_DATABASE", mode="before")
    @classmethod
    def _database(cls, value):
        return value or DEFAULT_DATABASE

    @field_validator("MDM_API_MONGODB_PORT", mode="before")
    @classmethod
    def _port(cls, value):
        return _positive_int_or(27017)(value)

    @field_validator("MDM_API_MONGODB_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def _timeout(cls, value):
        return _positive_int_or(10)(value)

    @field_validator("RETRY_CONNECTION_SECONDS", mode="before")
    @classmethod
    def _retry_seconds(cls, value):
        return _positive_int_or(DEFAULT_RETRY_SECONDS)(value)

    @field_validator("RETRY_CONNECTION_MAX_SECONDS", mode="before")
    @classmethod
    def _retry_max_seconds(cls, value):
        return _positive_int_or(300)(value)

    @field_validator("RETRY_CONNECTION_MAX_ATTEMPTS", mode="before")
    @classmethod
    def _max_attempts(cls, value):
        return _positive_int_or(None)(value)

    @field_validator("RETRY_CONNECTION_BACKOFF", mode="before")
    @classmethod
    def _backoff(cls, value):
        try:
            backoff = float(value)
        except (TypeError, ValueError):
            return 1.0
        # a shrinking delay would turn the loop into a busy wait
        return backoff if backoff >= 1.0 else 1.0

    @field_validator("MDM_API_MONGODB_UNIQUE_IDS", "MDM_INIT_STRICT_SEED", mode="before")
    @classmethod
    def _flags(cls, value):
        return _flag(value)

    def connection_uri(self) -> str:
        """MongoDB URI for the configured server, credentials URL-escaped."""
        address = f"{self.MDM_API_MONGODB_HOST}:{self.MDM_API_MONGODB_PORT}"
        if not self.MDM_API_MONGODB_USERNAME:
            return f"mongodb://{address}"
        user = quote_plus(self.MDM_API_MONGODB_USERNAME)
        password = quote_plus(self.MDM_API_MONGODB_PASSWORD)
        return f"mongodb://{user}:{password}@{address}"

    def describe(self) -> Dict[str, object]:
        """Resolved values with the password masked, for printing."""
        values = self.model_dump()
        if values["MDM_API_MONGODB_PASSWORD"]:
            values["MDM_API_MONGODB_PASSWORD"] = "***"
        return values


def load_settings(**overrides) -> Settings:
    settings = Settings()
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings
