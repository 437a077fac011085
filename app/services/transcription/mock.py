"""
Mock Transcription Service Implementation

Simulates the speech-to-text provider without making real API calls.
Used in development mode (ENV_MODE=development) for local testing.

Behavior:
    - Treats the "audio" payload as UTF-8 text and returns it verbatim
    - Tags digit runs and number words (one..ten) as cardinal entities
    - Optional simulated latency

This lets the voice ordering flow run end to end with plain text:
    echo -n "two pepperoni pizzas" | base64

Author: Khalil Bannouri
Version: 3.0.0
"""

import asyncio
import logging
import re
from datetime import datetime
from typing import Sequence

from app.services.matching import RecognizedEntity
from app.services.transcription.base import (
    BaseTranscriptionService,
    TranscriptionResult,
)

logger = logging.getLogger(__name__)

_CARDINAL_PATTERN = re.compile(
    r"\b(?:\d+|one|two|three|four|five|six|seven|eight|nine|ten)\b",
    re.IGNORECASE,
)


class MockTranscriptionService(BaseTranscriptionService):
    """
    Mock implementation of the transcription service.

    Attributes:
        latency: Simulated response time in seconds

    Example:
        >>> service = MockTranscriptionService()
        >>> result = await service.transcribe(b"two garlic breads")
        >>> result.entities[0].text
        'two'
    """

    def __init__(self, latency: float = 0.0):
        """
        Initialize the mock transcription service.

        Args:
            latency: Simulated response time in seconds (default: none)
        """
        self.latency = latency
        logger.info(f"MockTranscriptionService initialized (latency={latency}s)")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    def _detect_cardinals(self, transcript: str) -> list[RecognizedEntity]:
        return [
            RecognizedEntity(
                text=match.group(0),
                type="cardinal",
                start_char=match.start(),
                end_char=match.end(),
            )
            for match in _CARDINAL_PATTERN.finditer(transcript)
        ]

    async def transcribe(
        self,
        audio: bytes,
        keyterms: Sequence[str] = (),
        mime_type: str = "audio/webm",
    ) -> TranscriptionResult:
        """Return the payload text as the transcript (mock implementation)."""
        start_time = datetime.now()

        if self.latency:
            await asyncio.sleep(self.latency)

        transcript = audio.decode("utf-8", errors="replace").strip()
        entities = self._detect_cardinals(transcript)

        logger.debug(f"Mock: Transcribed {len(audio)} bytes - {transcript!r}")

        return TranscriptionResult(
            success=True,
            transcript=transcript,
            entities=entities,
            response_time_ms=(datetime.now() - start_time).total_seconds() * 1000,
        )

    async def health_check(self) -> bool:
        """Mock health check always returns True."""
        logger.debug("Mock: Transcription health check passed")
        return True
