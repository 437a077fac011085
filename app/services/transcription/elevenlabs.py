"""
ElevenLabs Transcription Service Implementation

Production implementation using the ElevenLabs speech-to-text API.
Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - ELEVENLABS_API_KEY must be set in environment

Request:
    POST {base_url}/v1/speech-to-text (multipart)
        file, model_id, tag_audio_events,
        keyterms[] (repeated, max 100), entity_detection[] (repeated)

API Documentation:
    https://elevenlabs.io/docs/api-reference/speech-to-text

Author: Khalil Bannouri
Version: 3.0.0
"""

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

import httpx

from app.core.config import get_settings
from app.services.matching import RecognizedEntity
from app.services.transcription.base import (
    BaseTranscriptionService,
    TranscriptionResult,
)

logger = logging.getLogger(__name__)


def normalize_entity(raw: dict[str, Any]) -> RecognizedEntity:
    """
    Convert a provider entity object into a RecognizedEntity.

    The API has used both snake_case and camelCase field names, and
    older responses carry the label under "type".

    Args:
        raw: Entity object from the API response

    Returns:
        RecognizedEntity: Normalized entity (missing offsets become 0)
    """
    return RecognizedEntity(
        text=raw.get("text") or "",
        type=raw.get("entity_type") or raw.get("entityType") or raw.get("type") or "",
        start_char=raw.get("start_char") or raw.get("startChar") or 0,
        end_char=raw.get("end_char") or raw.get("endChar") or 0,
    )


class ElevenLabsTranscriptionService(BaseTranscriptionService):
    """
    Production ElevenLabs speech-to-text implementation.

    Configuration:
        Requires ELEVENLABS_API_KEY environment variable.

    Example:
        >>> service = ElevenLabsTranscriptionService()
        >>> result = await service.transcribe(
        ...     audio=webm_bytes,
        ...     keyterms=["Caesar Salad", "Tiramisu"],
        ... )
        >>> print(result.transcript)
        'one caesar salad and two tiramisu'
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the ElevenLabs client configuration.

        Args:
            api_key: Overrides ELEVENLABS_API_KEY
            transport: Custom httpx transport (used by tests)

        Raises:
            ValueError: If no API key is configured
        """
        settings = get_settings()

        self._api_key = api_key or settings.elevenlabs_api_key
        if not self._api_key:
            raise ValueError(
                "ELEVENLABS_API_KEY is required for production mode. "
                "Set it in your .env file or environment variables."
            )

        self._base_url = settings.elevenlabs_base_url.rstrip("/")
        self._model_id = settings.stt_model_id
        self._timeout = settings.stt_timeout_seconds
        self._max_keyterms = settings.max_keyterms
        self._entity_types = settings.entity_detection_list
        self._transport = transport

        logger.info(f"ElevenLabsTranscriptionService initialized (model={self._model_id})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "elevenlabs"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={"xi-api-key": self._api_key},
            timeout=self._timeout,
            transport=self._transport,
        )

    def _build_form(self, keyterms: Sequence[str]) -> dict[str, Any]:
        return {
            "model_id": self._model_id,
            "tag_audio_events": "true",
            "keyterms[]": list(keyterms[:self._max_keyterms]),
            "entity_detection[]": list(self._entity_types),
        }

    async def transcribe(
        self,
        audio: bytes,
        keyterms: Sequence[str] = (),
        mime_type: str = "audio/webm",
    ) -> TranscriptionResult:
        """
        Transcribe audio with ElevenLabs.

        Makes a multipart speech-to-text call and normalizes the
        returned entity spans.
        """
        start_time = datetime.now()

        logger.debug(
            f"ElevenLabs: Transcribing {len(audio)} bytes "
            f"({mime_type}, {min(len(keyterms), self._max_keyterms)} keyterms)"
        )

        try:
            async with self._client() as client:
                response = await client.post(
                    "/v1/speech-to-text",
                    data=self._build_form(keyterms),
                    files={"file": ("recording.webm", audio, mime_type)},
                )
                response.raise_for_status()
                payload = response.json()

            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

            transcript = payload.get("text") or ""
            entities = [normalize_entity(raw) for raw in payload.get("entities") or []]

            logger.info(f"ElevenLabs: Transcript received ({len(transcript)} chars)")
            logger.debug(f"ElevenLabs: Transcript={transcript!r} entities={entities}")

            return TranscriptionResult(
                success=True,
                transcript=transcript,
                entities=entities,
                response_time_ms=elapsed_ms,
            )

        except httpx.HTTPStatusError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"ElevenLabs: API error - {e.response.status_code} {e.response.text}")

            return TranscriptionResult(
                success=False,
                error_message=f"API Error: {e.response.status_code} - {e.response.text}",
                error_code="api_error",
                response_time_ms=elapsed_ms,
            )

        except httpx.TimeoutException:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error("ElevenLabs: API timeout")

            return TranscriptionResult(
                success=False,
                error_message="Transcription timed out. Please try again.",
                error_code="timeout",
                response_time_ms=elapsed_ms,
            )

        except httpx.TransportError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"ElevenLabs: Transport error - {e}")

            return TranscriptionResult(
                success=False,
                error_message="Unable to reach transcription service",
                error_code="transport_error",
                response_time_ms=elapsed_ms,
            )

        except ValueError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"ElevenLabs: Invalid response body - {e}")

            return TranscriptionResult(
                success=False,
                error_message="Transcription service returned an invalid response",
                error_code="invalid_response",
                response_time_ms=elapsed_ms,
            )

    async def health_check(self) -> bool:
        """
        Verify ElevenLabs API connectivity.

        Lists available models to verify credentials and connectivity.
        """
        try:
            async with self._client() as client:
                response = await client.get("/v1/models")
            if response.status_code == 200:
                logger.debug("ElevenLabs: Health check passed")
                return True
            logger.warning(f"ElevenLabs: Health check returned {response.status_code}")
            return False

        except httpx.HTTPError as e:
            logger.error(f"ElevenLabs: Health check failed - {e}")
            return False
