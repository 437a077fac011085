"""
Shared pytest configuration.

Pins the environment to development mode with no provider credentials so
no test talks to a real speech-to-text service.
"""

import os

os.environ["ENV_MODE"] = "development"
os.environ.pop("ELEVENLABS_API_KEY", None)

import pytest

from app.core.config import get_settings
from app.services.transcription import reset_transcription_service


@pytest.fixture
def fresh_config():
    """Reload settings and the transcription service around a test."""
    get_settings.cache_clear()
    reset_transcription_service()
    yield
    get_settings.cache_clear()
    reset_transcription_service()
