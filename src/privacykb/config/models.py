"""Configuration models for the knowledge base service.

This module contains all configuration-related Pydantic models used throughout the application.
"""

import re

from pydantic import BaseModel, Field, field_validator

LANGUAGE_TAG_PATTERN = re.compile(r"^[a-z-]+$", re.IGNORECASE)


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "privacykb"})


class KnowledgeBaseConfig(BaseModel):
    """Configuration settings for the knowledge base query service."""

    # Version tracking
    config_version: str = "1.0.0"

    site_name: str = "Privacy Knowledge Base"

    # Localization
    default_language: str = "en"  # Used when the client states no usable preference
    fallback_language: str = "en"  # Tried after every preferred language

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("default_language", "fallback_language")
    @classmethod
    def validate_language_tag(cls, v: str) -> str:
        """Validate and normalize a language tag."""
        if not LANGUAGE_TAG_PATTERN.match(v):
            raise ValueError(
                f"Invalid language tag '{v}'. Must contain only letters and hyphens."
            )
        return v.lower()
