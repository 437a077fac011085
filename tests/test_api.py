"""
Tests for the HTTP API.

The transcription dependency is overridden per test, so no provider
credentials or network access are needed.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from app import main
from app.main import app, provide_transcription_service
from app.services.transcription import (
    BaseTranscriptionService,
    MockTranscriptionService,
    TranscriptionResult,
)


class FailingTranscriptionService(BaseTranscriptionService):
    """Provider stub that always reports an upstream failure."""

    @property
    def provider_name(self) -> str:
        return "failing"

    async def transcribe(self, audio, keyterms=(), mime_type="audio/webm"):
        return TranscriptionResult(
            success=False,
            error_message="API Error: 401 - invalid api key",
            error_code="api_error",
        )

    async def health_check(self) -> bool:
        return False


def encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_service():
    def install(service):
        app.dependency_overrides[provide_transcription_service] = lambda: service
    return install


class TestTranscribe:

    def test_transcribes_and_matches(self, client, use_service):
        use_service(MockTranscriptionService())

        response = client.post("/api/transcribe", json={
            "audioBase64": encode("two pepperoni pizzas no onions"),
            "keyterms": ["Pepperoni Pizza", "Coke"],
            "mimeType": "audio/webm",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["transcript"] == "two pepperoni pizzas no onions"
        assert data["parsedItems"] == [{
            "itemName": "Pepperoni Pizza",
            "quantity": 2,
            "modifiers": ["no onions"],
            "confidence": 0.7,
        }]
        assert data["entities"] == [
            {"text": "two", "type": "cardinal", "startChar": 0, "endChar": 3},
        ]

    def test_missing_audio(self, client, use_service):
        use_service(MockTranscriptionService())

        response = client.post("/api/transcribe", json={"keyterms": ["Coke"]})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"] == "No audio data provided"
        assert response.json()["parsedItems"] == []

    def test_invalid_audio(self, client, use_service):
        use_service(MockTranscriptionService())

        response = client.post("/api/transcribe", json={"audioBase64": "not base64!!"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid audio data"

    def test_not_configured(self, client, use_service):
        use_service(None)

        response = client.post("/api/transcribe", json={"audioBase64": encode("a coke")})

        assert response.status_code == 500
        assert response.json()["error"] == "ElevenLabs API key not configured"

    def test_provider_failure(self, client, use_service):
        use_service(FailingTranscriptionService())

        response = client.post("/api/transcribe", json={"audioBase64": encode("a coke")})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "transcript": "",
            "parsedItems": [],
            "entities": [],
            "error": "API Error: 401 - invalid api key",
        }


class TestTranscribeStream:

    def test_not_configured(self, client, monkeypatch):
        monkeypatch.setattr(main.settings, "elevenlabs_api_key", None)

        response = client.post("/api/transcribe-stream", json={})

        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_returns_connection_details(self, client, monkeypatch):
        monkeypatch.setattr(main.settings, "elevenlabs_api_key", "xi-test")

        keyterms = [f"Item {i}" for i in range(120)]
        response = client.post("/api/transcribe-stream", json={"keyterms": keyterms})

        assert response.status_code == 200
        data = response.json()
        assert data["wsUrl"] == (
            "wss://api.elevenlabs.io/v1/speech-to-text/stream"
            "?model_id=scribe_v2_realtime&language_code=en"
        )
        assert data["apiKey"] == "xi-test"
        assert data["keyterms"] == keyterms[:100]


class TestMatch:

    def test_entities_drive_quantity(self, client):
        response = client.post("/api/match", json={
            "transcript": "ABCDE two pizzas",
            "keyterms": ["pizzas", "Coke"],
            "entities": [{"text": "two", "type": "cardinal", "startChar": 6, "endChar": 9}],
        })

        assert response.status_code == 200
        assert response.json()["parsedItems"] == [
            {"itemName": "pizzas", "quantity": 2, "modifiers": [], "confidence": 0.95},
        ]

    def test_zero_quantity_reported_as_one(self, client):
        response = client.post("/api/match", json={
            "transcript": "0 pizzas",
            "keyterms": ["pizzas"],
        })

        assert response.status_code == 200
        assert response.json()["parsedItems"][0]["quantity"] == 1

    def test_no_entities(self, client):
        response = client.post("/api/match", json={
            "transcript": "I'll have a pepperoni pizza",
            "keyterms": ["Pizza", "Pepperoni Pizza"],
        })

        names = [item["itemName"] for item in response.json()["parsedItems"]]
        assert names == ["Pepperoni Pizza", "Pizza"]

    def test_transcript_required(self, client):
        response = client.post("/api/match", json={"keyterms": ["Coke"]})
        assert response.status_code == 422


class TestDraftOrder:

    def test_draft(self, client):
        response = client.post("/api/orders/draft", json={
            "parsedItems": [
                {"itemName": "pepperoni pizza", "quantity": 2, "modifiers": ["no onions"], "confidence": 0.95},
                {"itemName": "Coke", "quantity": 1, "modifiers": [], "confidence": 0.7},
                {"itemName": "Unknown", "quantity": 1, "modifiers": [], "confidence": 0.95},
            ],
            "menuItems": [
                {"id": "p1", "name": "Pepperoni Pizza", "price": 16.99},
                {"id": "c1", "name": "Coke", "price": 2.99},
            ],
        })

        assert response.status_code == 200
        data = response.json()
        assert [item["menuItem"]["id"] for item in data["items"]] == ["p1", "c1"]
        assert [item["isConfirmed"] for item in data["items"]] == [True, False]
        assert data["items"][0]["notes"] == "no onions"
        assert data["items"][1]["notes"] is None
        assert len(data["confirmedLines"]) == 1
        assert data["confirmedLines"][0]["quantity"] == 2
        assert data["subtotal"] == pytest.approx(36.97)

    def test_threshold_override(self, client):
        response = client.post("/api/orders/draft", json={
            "parsedItems": [{"itemName": "Coke", "quantity": 1, "confidence": 0.7}],
            "menuItems": [{"id": "c1", "name": "Coke", "price": 2.99}],
            "autoConfirmThreshold": 0.5,
        })

        assert response.json()["items"][0]["isConfirmed"] is True


class TestSystem:

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/health"

    def test_health_with_mock(self, client, use_service):
        use_service(MockTranscriptionService())

        data = client.get("/health").json()

        assert data["status"] == "operational"
        assert data["transcription_service"] == "healthy"

    def test_health_not_configured(self, client, use_service):
        use_service(None)

        data = client.get("/health").json()

        assert data["status"] == "degraded"
        assert data["transcription_service"] == "not configured"
