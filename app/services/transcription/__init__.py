"""
Transcription Service Factory

Provides a single entry point for obtaining a speech-to-text service.
Automatically selects Mock or ElevenLabs based on ENV_MODE configuration.

Usage:
    from app.services.transcription import get_transcription_service

    service = get_transcription_service()
    result = await service.transcribe(audio_bytes, keyterms=menu_names)

Author: Khalil Bannouri
Version: 3.0.0
"""

import logging
from functools import lru_cache

from app.core.config import get_settings
from app.services.transcription.base import (
    BaseTranscriptionService,
    TranscriptionResult,
)
from app.services.transcription.elevenlabs import (
    ElevenLabsTranscriptionService,
    normalize_entity,
)
from app.services.transcription.mock import MockTranscriptionService

logger = logging.getLogger(__name__)


@lru_cache()
def get_transcription_service() -> BaseTranscriptionService:
    """
    Get the configured transcription service instance.

    Factory function that returns either MockTranscriptionService or
    ElevenLabsTranscriptionService based on the ENV_MODE configuration.

    Returns:
        BaseTranscriptionService: Configured transcription service

    Raises:
        ValueError: If production mode but ElevenLabs API key not configured
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Transcription Service: Using MockTranscriptionService (development mode)")
        return MockTranscriptionService()
    else:
        logger.info(
            f"Transcription Service: Using ElevenLabsTranscriptionService "
            f"({settings.env_mode.value} mode)"
        )
        return ElevenLabsTranscriptionService()


def reset_transcription_service() -> None:
    """
    Clear the cached transcription service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_transcription_service.cache_clear()
    logger.debug("Transcription service cache cleared")


__all__ = [
    "get_transcription_service",
    "reset_transcription_service",
    "BaseTranscriptionService",
    "TranscriptionResult",
    "MockTranscriptionService",
    "ElevenLabsTranscriptionService",
    "normalize_entity",
]
