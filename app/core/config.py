"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports two modes:
    - DEVELOPMENT: Uses the mock transcription service (no API keys needed)
    - PRODUCTION: Uses ElevenLabs speech-to-text

The ENV_MODE variable controls which transcription provider is instantiated,
enabling seamless switching between local testing and production deployment.

Usage:
    from app.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Use mock transcription
    else:
        # Call ElevenLabs

Author: Khalil Bannouri
Version: 3.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing with the mock transcription service
        PRODUCTION: Live environment with ElevenLabs
        STAGING: Pre-production testing with ElevenLabs
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Sensitive values (API keys) should NEVER be committed to version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging, including matcher traces

        # Speech-to-text
        elevenlabs_api_key: ElevenLabs API key
        elevenlabs_base_url: REST base URL for batch transcription
        elevenlabs_stream_url: WebSocket URL for realtime transcription
        stt_model_id: Model used for batch transcription
        stt_realtime_model_id: Model used for realtime transcription
        max_keyterms: Upper bound on keyterms sent to the provider
        entity_detection: Comma-separated entity types to request

        # Voice ordering
        auto_confirm_threshold: Confidence above which draft items start confirmed
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Voice Order Service",
        description="Application display name"
    )
    app_version: str = Field(
        default="3.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8001,
        description="API server port"
    )

    # ==========================================================================
    # ELEVENLABS SPEECH-TO-TEXT
    # ==========================================================================

    elevenlabs_api_key: Optional[str] = Field(
        default=None,
        description="ElevenLabs API key (xi-api-key header)"
    )
    elevenlabs_base_url: str = Field(
        default="https://api.elevenlabs.io",
        description="ElevenLabs REST API base URL"
    )
    elevenlabs_stream_url: str = Field(
        default="wss://api.elevenlabs.io/v1/speech-to-text/stream",
        description="ElevenLabs realtime WebSocket URL"
    )
    stt_model_id: str = Field(
        default="scribe_v2",
        description="Batch speech-to-text model"
    )
    stt_realtime_model_id: str = Field(
        default="scribe_v2_realtime",
        description="Realtime speech-to-text model"
    )
    stt_language_code: str = Field(
        default="en",
        description="Language code for realtime transcription"
    )
    stt_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for transcription requests"
    )
    max_keyterms: int = Field(
        default=100,
        description="Maximum keyterms forwarded to the provider"
    )
    entity_detection: str = Field(
        default="cardinal,ordinal,money",
        description="Comma-separated entity types requested from the provider"
    )

    # ==========================================================================
    # VOICE ORDERING
    # ==========================================================================

    auto_confirm_threshold: float = Field(
        default=0.8,
        description="Draft items with confidence above this start confirmed"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def use_real_services(self) -> bool:
        """Check if real external services should be used."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)

    @property
    def entity_detection_list(self) -> list[str]:
        """Get requested entity types as a list."""
        return [t.strip() for t in self.entity_detection.split(",") if t.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that all required production settings are configured.

        Returns:
            List of missing configuration keys (empty if all present)
        """
        missing = []

        if self.use_real_services and not self.elevenlabs_api_key:
            missing.append("ELEVENLABS_API_KEY")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured root logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("app")

