"""
Tests for the transcription services.

The ElevenLabs adapter is exercised against httpx.MockTransport, so no
network access is needed.
"""

import asyncio
import json

import httpx
import pytest

from app.services.matching import RecognizedEntity
from app.services.transcription import (
    ElevenLabsTranscriptionService,
    MockTranscriptionService,
    get_transcription_service,
    normalize_entity,
)


def run(coro):
    return asyncio.run(coro)


def elevenlabs(handler):
    return ElevenLabsTranscriptionService(
        api_key="xi-test",
        transport=httpx.MockTransport(handler),
    )


class TestNormalizeEntity:
    """Provider field-name variants collapse into RecognizedEntity."""

    def test_snake_case(self):
        raw = {"text": "two", "entity_type": "cardinal", "start_char": 4, "end_char": 7}
        assert normalize_entity(raw) == RecognizedEntity("two", "cardinal", 4, 7)

    def test_camel_case(self):
        raw = {"text": "3", "entityType": "cardinal", "startChar": 1, "endChar": 2}
        assert normalize_entity(raw) == RecognizedEntity("3", "cardinal", 1, 2)

    def test_legacy_type_and_missing_offsets(self):
        raw = {"text": "$5", "type": "money"}
        assert normalize_entity(raw) == RecognizedEntity("$5", "money", 0, 0)


class TestMockTranscription:

    def test_echoes_text_and_tags_cardinals(self):
        result = run(MockTranscriptionService().transcribe(b"two garlic breads and 3 cokes"))

        assert result.success
        assert result.transcript == "two garlic breads and 3 cokes"
        assert result.entities == [
            RecognizedEntity("two", "cardinal", 0, 3),
            RecognizedEntity("3", "cardinal", 22, 23),
        ]

    def test_health_check(self):
        assert run(MockTranscriptionService().health_check()) is True


class TestElevenLabsTranscription:

    def test_request_and_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["key"] = request.headers.get("xi-api-key")
            seen["body"] = request.content
            return httpx.Response(200, json={
                "text": "two tiramisu",
                "entities": [
                    {"text": "two", "entity_type": "cardinal", "start_char": 0, "end_char": 3},
                ],
            })

        result = run(elevenlabs(handler).transcribe(b"RIFF", ["Tiramisu", "Coke"], "audio/webm"))

        assert result.success
        assert result.transcript == "two tiramisu"
        assert result.entities == [RecognizedEntity("two", "cardinal", 0, 3)]

        assert seen["path"] == "/v1/speech-to-text"
        assert seen["key"] == "xi-test"
        body = seen["body"]
        assert b'name="model_id"' in body and b"scribe_v2" in body
        assert body.count(b'name="keyterms[]"') == 2
        assert body.count(b'name="entity_detection[]"') == 3
        assert b'filename="recording.webm"' in body

    def test_keyterms_truncated(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            return httpx.Response(200, json={"text": ""})

        keyterms = [f"Item {i}" for i in range(150)]
        result = run(elevenlabs(handler).transcribe(b"x", keyterms))

        assert result.success
        assert result.entities == []
        assert seen["body"].count(b'name="keyterms[]"') == 100

    def test_http_error(self):
        def handler(request):
            return httpx.Response(401, text="invalid api key")

        result = run(elevenlabs(handler).transcribe(b"x"))

        assert not result.success
        assert result.error_code == "api_error"
        assert result.error_message == "API Error: 401 - invalid api key"

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = run(elevenlabs(handler).transcribe(b"x"))
        assert result.error_code == "timeout"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = run(elevenlabs(handler).transcribe(b"x"))
        assert result.error_code == "transport_error"

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"})

        result = run(elevenlabs(handler).transcribe(b"x"))
        assert result.error_code == "invalid_response"

    @pytest.mark.parametrize("status,healthy", [(200, True), (503, False)])
    def test_health_check(self, status, healthy):
        def handler(request):
            assert request.url.path == "/v1/models"
            return httpx.Response(status, json=[])

        assert run(elevenlabs(handler).health_check()) is healthy

    def test_requires_api_key(self, fresh_config):
        with pytest.raises(ValueError, match="ELEVENLABS_API_KEY"):
            ElevenLabsTranscriptionService()


class TestFactory:

    def test_development_uses_mock(self, fresh_config):
        assert get_transcription_service().provider_name == "mock"

    def test_production_without_key_fails(self, fresh_config, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "production")
        with pytest.raises(ValueError):
            get_transcription_service()

    def test_production_uses_elevenlabs(self, fresh_config, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "production")
        monkeypatch.setenv("ELEVENLABS_API_KEY", "xi-test")
        assert get_transcription_service().provider_name == "elevenlabs"
