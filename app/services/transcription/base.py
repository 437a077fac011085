"""
Transcription Service Abstract Base Class

Defines the interface contract for all speech-to-text implementations.
Both MockTranscriptionService and ElevenLabsTranscriptionService must
implement these methods.

Providers hand back already-normalized RecognizedEntity values; any
provider-specific field naming is resolved inside the provider.

Author: Khalil Bannouri
Version: 3.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from app.services.matching import RecognizedEntity


@dataclass
class TranscriptionResult:
    """
    Standardized result from a transcription request.

    Attributes:
        success: Whether the provider returned a transcript
        transcript: Final transcript text
        entities: Entities recognised in the transcript
        error_message: Error description if transcription failed
        error_code: Machine-readable error code
        response_time_ms: Provider response time
    """
    success: bool
    transcript: str = ""
    entities: list[RecognizedEntity] = field(default_factory=list)
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    response_time_ms: float = 0.0


class BaseTranscriptionService(ABC):
    """
    Abstract base class for speech-to-text services.

    Example:
        >>> service = get_transcription_service()
        >>> result = await service.transcribe(
        ...     audio=audio_bytes,
        ...     keyterms=["Pepperoni Pizza", "Garlic Bread"],
        ... )
        >>> if result.success:
        ...     print(result.transcript)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the transcription provider.

        Returns:
            str: Provider name (e.g., "mock", "elevenlabs")
        """
        pass

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        keyterms: Sequence[str] = (),
        mime_type: str = "audio/webm",
    ) -> TranscriptionResult:
        """
        Transcribe a recorded utterance.

        Failures are reported in the result, not raised.

        Args:
            audio: Raw audio bytes
            keyterms: Menu item names used to bias recognition
            mime_type: MIME type of the audio

        Returns:
            TranscriptionResult: Transcript and recognised entities
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the transcription provider.

        Returns:
            bool: True if service is operational
        """
        pass
