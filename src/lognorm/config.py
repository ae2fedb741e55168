"""Configuration via pydantic-settings, read from LOGNORM_* env vars or .env."""
from __future__ import annotations

from datetime import tzinfo

from dateutil import tz
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lognorm.core.exceptions import ConfigurationError
from lognorm.core.security import MAX_LINE_LENGTH

__all__ = ["Settings", "settings", "resolve_timezone"]


class Settings(BaseSettings):
    """lognorm configuration."""

    model_config = SettingsConfigDict(env_prefix="LOGNORM_", env_file=".env", extra="ignore")

    pulse_timezone: str = Field(
        default="UTC",
        description="Time zone of the PulseSecure appliance clock (its time= field has no offset)",
    )
    max_line_length: int = Field(
        default=MAX_LINE_LENGTH, gt=0, description="Longest accepted line in bytes"
    )
    default_output: str = Field(
        default="table", description="CLI output format (table|json|csv|compact)"
    )


def resolve_timezone(name: str) -> tzinfo:
    """Turn a zone name into a tzinfo, raising ConfigurationError if unknown."""
    zone = tz.gettz(name)
    if zone is None:
        raise ConfigurationError(f"Unknown time zone: {name!r}", config_key="pulse_timezone")
    return zone


settings = Settings()
