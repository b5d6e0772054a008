"""
Centralized Configuration for app package ingestion

Provides pydantic-based configuration with:
- Environment variable loading (.env support)
- Type validation
- Default values matching the app package layout

Usage:
    from appingest.core.config import get_config

    config = get_config()
    print(config.host_api_version)
    print(config.manifest_name)
"""

from typing import List, Optional

import semantic_version
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """
    Central configuration for the ingestion pipeline

    All settings can be overridden via environment variables with APPINGEST_ prefix.
    For example: APPINGEST_HOST_API_VERSION, APPINGEST_MAX_ARCHIVE_BYTES, etc.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APPINGEST_",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Host Compatibility
    # ============================================

    host_api_version: str = Field(
        default="1.0.0",
        description="Published host API version checked against requiredApiVersion",
    )

    # ============================================
    # Package Layout
    # ============================================

    manifest_name: str = Field(
        default="app.json",
        description="Fixed name of the manifest entry at the archive root",
    )

    source_extension: str = Field(
        default=".ts",
        description="Extension of source files handed to the compiler",
    )

    i18n_directory: str = Field(
        default="i18n/",
        description="Reserved directory holding <language>.json files",
    )

    allowed_icon_extensions: List[str] = Field(
        default_factory=lambda: [".png", ".jpg", ".jpeg", ".gif"],
        description="Icon file extensions accepted for embedding",
    )

    # ============================================
    # Security Limits
    # ============================================

    max_archive_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Maximum decoded archive size (50MB)",
    )

    max_manifest_bytes: int = Field(
        default=100 * 1024,
        gt=0,
        description="Maximum manifest size (100KB)",
    )

    @field_validator("host_api_version")
    @classmethod
    def validate_host_api_version(cls, v: str) -> str:
        """Host version must be a plain semantic version"""
        if not semantic_version.validate(v):
            raise ValueError(f"host_api_version must be a semantic version (e.g. '1.4.0'), got {v!r}")
        return v

    @field_validator("i18n_directory")
    @classmethod
    def validate_i18n_directory(cls, v: str) -> str:
        """Ensure a single trailing slash so prefix matching is exact"""
        v = v.strip().strip("/")
        if not v:
            raise ValueError("i18n_directory cannot be empty")
        return f"{v}/"

    @field_validator("allowed_icon_extensions")
    @classmethod
    def validate_icon_extensions(cls, v: List[str]) -> List[str]:
        """Lower-case and dot-prefix icon extensions"""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


# Global config instance
_config: Optional[IngestionSettings] = None


def get_config(force_reload: bool = False) -> IngestionSettings:
    """
    Get the global configuration instance

    Args:
        force_reload: Force reload configuration from environment

    Returns:
        IngestionSettings instance
    """
    global _config

    if _config is None or force_reload:
        _config = IngestionSettings()

    return _config


def reset_config() -> None:
    """Drop the cached configuration (used by tests)"""
    global _config
    _config = None
