"""
FastAPI Application Entry Point

Voice Order Service - Hybrid Architecture
Supports both a mock transcription provider (development) and
ElevenLabs speech-to-text (production).

Endpoints:
    - POST /api/transcribe: Transcribe recorded audio and match menu items
    - POST /api/transcribe-stream: Realtime transcription connection details
    - POST /api/match: Match menu items in an existing transcript
    - POST /api/orders/draft: Reconcile matched items with the menu
    - GET /health: System health check

Author: Khalil Bannouri
Version: 3.0.0
"""

import base64
import binascii
import logging
from datetime import datetime
from typing import Any, Optional
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Depends
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings, setup_logging
from app.schemas import (
    DraftItemSchema,
    DraftOrderRequest,
    DraftOrderResponse,
    EntitySpan,
    HealthResponse,
    MatchRequest,
    MatchResponse,
    OrderLineSchema,
    ParsedOrderItem,
    StreamConfigRequest,
    StreamConfigResponse,
    TranscriptionRequest,
    TranscriptionResponse,
)
from app.services.matching import ItemMatcher, logging_tracer
from app.services.ordering import build_draft_items, confirmed_order_lines, draft_subtotal
from app.services.transcription import BaseTranscriptionService, get_transcription_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

# Traces appear when debug logging is on
matcher = ItemMatcher(tracer=logging_tracer(logging.getLogger("app.services.matching")))

NOT_CONFIGURED = "ElevenLabs API key not configured"


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    service = provide_transcription_service()
    if service is not None:
        logger.info(f"✅ Transcription Service: {service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Application ready!")

    yield

    logger.info("Shutting down...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Voice ordering backend: speech-to-text, transcript item matching "
        "and draft order review."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def provide_transcription_service() -> Optional[BaseTranscriptionService]:
    """
    Resolve the transcription service, or None when it is not configured.
    """
    try:
        return get_transcription_service()
    except ValueError as e:
        logger.error(f"Transcription service unavailable: {e}")
        return None


def transcription_error(status_code: int, message: str) -> JSONResponse:
    """Failed TranscriptionResponse with an HTTP status."""
    body = TranscriptionResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🎙️ Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    service: Optional[BaseTranscriptionService] = Depends(provide_transcription_service),
) -> HealthResponse:
    """Verify the transcription provider is reachable."""
    if service is None:
        transcription_status = "not configured"
    elif await service.health_check():
        transcription_status = "healthy"
    else:
        transcription_status = "unhealthy"

    return HealthResponse(
        status="operational" if transcription_status == "healthy" else "degraded",
        environment=settings.env_mode.value,
        transcription_service=transcription_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# VOICE ORDERING ENDPOINTS
# =============================================================================

@app.post(
    "/api/transcribe",
    response_model=TranscriptionResponse,
    responses={400: {"model": TranscriptionResponse}, 500: {"model": TranscriptionResponse}},
    tags=["Voice"],
    summary="Transcribe Order Audio",
)
async def transcribe(
    request: TranscriptionRequest,
    service: Optional[BaseTranscriptionService] = Depends(provide_transcription_service),
) -> Any:
    """
    Transcribe a recorded order and match menu items in it.

    The keyterms (normally the menu's item names) bias recognition and
    are the candidate list for matching.
    """
    if not request.audio_base64:
        return transcription_error(400, "No audio data provided")

    try:
        audio = base64.b64decode(request.audio_base64, validate=True)
    except (binascii.Error, ValueError):
        return transcription_error(400, "Invalid audio data")

    if service is None:
        return transcription_error(500, NOT_CONFIGURED)

    logger.info(
        f"Transcribing {len(audio)} bytes ({request.mime_type}) "
        f"with {len(request.keyterms)} keyterms"
    )

    try:
        result = await service.transcribe(audio, request.keyterms, request.mime_type)
        if not result.success:
            return transcription_error(500, result.error_message or "Transcription failed")

        matches = matcher.match(result.transcript, request.keyterms, result.entities)
        logger.info(f"Matched {len(matches)} items in transcript")

        return TranscriptionResponse(
            success=True,
            transcript=result.transcript,
            parsed_items=[ParsedOrderItem.from_match(m) for m in matches],
            entities=[EntitySpan.from_entity(e) for e in result.entities],
        )

    except Exception as e:
        logger.exception(f"Transcription error: {e}")
        return transcription_error(500, str(e) or "Unknown error occurred")


@app.post(
    "/api/transcribe-stream",
    response_model=StreamConfigResponse,
    responses={500: {"model": StreamConfigResponse}},
    tags=["Voice"],
    summary="Realtime Transcription Config",
)
async def transcribe_stream(request: StreamConfigRequest) -> Any:
    """
    Return the WebSocket URL and credentials for client-side streaming.

    In production, prefer a short-lived signed token over the raw key.
    """
    if not settings.elevenlabs_api_key:
        body = StreamConfigResponse(success=False, error=NOT_CONFIGURED)
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))

    ws_url = httpx.URL(
        settings.elevenlabs_stream_url,
        params={
            "model_id": settings.stt_realtime_model_id,
            "language_code": settings.stt_language_code,
        },
    )

    return StreamConfigResponse(
        success=True,
        ws_url=str(ws_url),
        api_key=settings.elevenlabs_api_key,
        keyterms=request.keyterms[:settings.max_keyterms],
    )


@app.post(
    "/api/match",
    response_model=MatchResponse,
    tags=["Voice"],
    summary="Match Items in Transcript",
)
async def match_transcript(request: MatchRequest) -> MatchResponse:
    """
    Match menu items in a transcript produced elsewhere.

    An empty entity list makes every quantity come from the text
    preceding each item.
    """
    entities = [span.to_entity() for span in request.entities]
    matches = matcher.match(request.transcript, request.keyterms, entities)

    return MatchResponse(parsed_items=[ParsedOrderItem.from_match(m) for m in matches])


@app.post(
    "/api/orders/draft",
    response_model=DraftOrderResponse,
    tags=["Orders"],
    summary="Build Draft Order",
)
async def draft_order(request: DraftOrderRequest) -> DraftOrderResponse:
    """
    Pair matched items with menu items for customer review.

    Items are pre-confirmed when their confidence exceeds the threshold.
    """
    threshold = request.auto_confirm_threshold
    if threshold is None:
        threshold = settings.auto_confirm_threshold

    drafts = build_draft_items(
        [item.to_match() for item in request.parsed_items],
        [item.to_menu_item() for item in request.menu_items],
        auto_confirm_threshold=threshold,
    )

    return DraftOrderResponse(
        items=[DraftItemSchema.from_draft(d) for d in drafts],
        confirmed_lines=[OrderLineSchema.from_line(line) for line in confirmed_order_lines(drafts)],
        subtotal=draft_subtotal(drafts),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
