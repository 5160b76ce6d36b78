"""Manifest configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (BUNDLE_MANIFEST_* prefix)
2. .env file in current directory
3. Default values

Settings are frozen; components receive them explicitly rather than
reading the cached global.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path  # noqa: TC003 - Pydantic requires runtime access

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FILENAME = "webpack-assets.json"


class ManifestSettings(BaseSettings):
    """Configuration for manifest generation.

    Environment variables are prefixed with BUNDLE_MANIFEST_.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLE_MANIFEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Output location
    path: Path = Path()
    filename: str = DEFAULT_FILENAME

    # Output behaviour
    update: bool = False
    pretty_print: bool = False
    multi_compiler: bool = False
    include_other: bool = False

    log_level: str = "WARNING"

    @property
    def destination(self) -> Path:
        """Full path of the manifest file."""
        return self.path / self.filename

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Validate filename is a bare file name."""
        if not v or v in {".", ".."} or "/" in v or "\\" in v:
            msg = f"Invalid filename: {v!r}. Use 'path' for the directory."
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_config() -> ManifestSettings:
    """Get the global configuration.

    Configuration is cached after first load.

    Returns:
        ManifestSettings instance.
    """
    return ManifestSettings()


def clear_config_cache() -> None:
    """Clear the configuration cache (for testing)."""
    get_config.cache_clear()
