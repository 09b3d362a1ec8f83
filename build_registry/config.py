"""Runtime settings for build registry bookkeeping.

Values come from BUILD_REGISTRY_* environment variables or a local .env
file. Arguments passed to Bucket and Iteration factories take precedence.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for buckets, iterations and registry calls."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_REGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    build_fingerprint: str | None = Field(
        default=None,
        description="Fingerprint identifying the iteration being built",
    )
    bucket_slug: str | None = Field(
        default=None,
        description="Default bucket name for build metadata",
    )
    registry_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for registry collaborator calls",
    )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Dump settings as indented JSON.

    Args:
        settings: Settings to dump; loaded from the environment when omitted.

    Returns:
        JSON document with one key per setting.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
