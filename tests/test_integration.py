"""
Integration tests for the page routes.
Runs the full application in mock mode against a temporary storage directory.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from medclause.api.deps import get_analysis_service
from medclause.config import settings
from medclause.main import app
from medclause.services import AnalysisService


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "local_storage_path", str(tmp_path / "data"))
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def _activities(client):
    return [entry["text"] for entry in client.get("/").json()["recent_activities"]]


class TestAppShell:
    """Dashboard, layout, health and unknown routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_route(self, client):
        response = client.get("/no-such-page")
        assert response.status_code == 404
        assert response.json() == {"detail": "Page not found", "path": "/no-such-page"}

    def test_dashboard_for_new_user(self, client):
        data = client.get("/").json()
        assert data["recent_activities"] == []
        assert data["profile_complete"] is False
        assert data["call_to_action"]["label"] == "Complete Your Profile"
        assert len(data["features"]) == 6
        assert client.get("/layout").json()["user"]["has_profile"] is False

    def test_sidebar_toggle(self, client):
        assert client.get("/layout").json()["sidebar_open"] is True
        assert client.post("/layout/sidebar").json() == {"sidebar_open": False}
        assert client.get("/layout").json()["sidebar_open"] is False


class TestMedicationAnalyzer:
    """Medication analysis end to end."""

    def test_analyze_records_activity(self, client):
        response = client.post("/medication-analyzer/analyze", json={"medication_name": "Aspirin"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "result"
        assert data["result"].startswith("Aspirin")
        assert _activities(client) == ["Analyzed medication: Aspirin"]

    def test_blank_name_rejected(self, client):
        response = client.post("/medication-analyzer/analyze", json={"medication_name": "  "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a medication name."
        assert _activities(client) == []

    def test_concise(self, client):
        response = client.post(
            "/medication-analyzer/analyze", json={"medication_name": "Aspirin", "concise": True}
        )
        assert response.json()["result"].endswith("... [truncated for brevity]")

    def test_export(self, client):
        assert client.get("/medication-analyzer/export").status_code == 404

        client.post("/medication-analyzer/analyze", json={"medication_name": "Aspirin"})
        response = client.get("/medication-analyzer/export")

        assert response.status_code == 200
        assert 'filename="medication-analysis.txt"' in response.headers["content-disposition"]
        assert response.text.startswith("Aspirin")

    def test_leaving_page_discards_result(self, client):
        client.post("/medication-analyzer/analyze", json={"medication_name": "Aspirin"})
        client.get("/chat-assistant")

        view = client.get("/medication-analyzer").json()
        assert view["status"] == "idle"
        assert view["result"] is None

    def test_prescription_upload(self, client):
        response = client.post(
            "/medication-analyzer/prescription",
            files={"image": ("rx.jpg", b"\xff\xd8\xff\xe0", "image/jpeg")},
        )
        assert response.status_code == 200
        assert _activities(client) == ["Analyzed prescription image: rx.jpg"]

    def test_adapter_failure(self, client):
        provider = MagicMock()
        provider.generate = AsyncMock(side_effect=RuntimeError("503 from upstream"))
        app.dependency_overrides[get_analysis_service] = lambda: AnalysisService(provider=provider)

        response = client.post("/medication-analyzer/analyze", json={"medication_name": "Aspirin"})

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to analyze medication. Please try again."
        view = client.get("/medication-analyzer").json()
        assert view["status"] == "idle"
        assert view["notification"]["variant"] == "destructive"
        assert _activities(client) == []


class TestImageAndReports:
    """File upload pages."""

    def test_image_analysis(self, client):
        response = client.post(
            "/image-analysis/analyze",
            files={"image": ("chest.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            data={"prompt": "Look for fractures"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "result"
        assert _activities(client) == ["Analyzed medical image: chest.png"]

    def test_image_missing(self, client):
        response = client.post("/image-analysis/analyze", data={"prompt": ""})
        assert response.status_code == 400

    def test_image_unsupported_type(self, client):
        response = client.post(
            "/image-analysis/analyze",
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400
        assert "Unsupported file type" in response.json()["detail"]

    def test_health_report_pdf(self, client):
        response = client.post(
            "/health-reports/analyze",
            files={"report": ("labs.pdf", b"%PDF-1.4", "application/pdf")},
        )
        assert response.status_code == 200
        assert _activities(client) == ["Analyzed health report: labs.pdf"]


class TestChatAndPlanner:
    """Text pages."""

    def test_chat_transcript(self, client):
        view = client.get("/chat-assistant").json()
        assert len(view["page"]["result"]) == 1

        question = "What are the early warning signs of a stroke in older adults?"
        response = client.post("/chat-assistant/message", json={"message": question})

        transcript = response.json()["result"]
        assert [message["role"] for message in transcript] == ["assistant", "user", "assistant"]
        assert transcript[1]["content"] == question
        assert _activities(client) == [f"Asked medical assistant: {question[:50]}..."]

    def test_chat_blank_message(self, client):
        response = client.post("/chat-assistant/message", json={"message": ""})
        assert response.status_code == 400

    def test_treatment_plan_requires_symptoms(self, client):
        response = client.post(
            "/treatment-planner/generate", json={"patient_info": "45 y/o male", "symptoms": ""}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please describe the symptoms."

    def test_treatment_plan(self, client):
        symptoms = "persistent dry cough and mild fever for a week"
        response = client.post(
            "/treatment-planner/generate",
            json={"patient_info": "45 y/o male", "symptoms": symptoms},
        )
        assert response.status_code == 200
        assert _activities(client) == [f"Generated treatment plan for symptoms: {symptoms[:30]}..."]


class TestVideoResources:
    """Video search, recommendations and summaries."""

    def test_recommend_without_activity(self, client):
        response = client.post("/video-resources/recommend")
        assert response.status_code == 400

    def test_search_then_summarize(self, client):
        assert client.post("/video-resources/search", json={"query": ""}).status_code == 400

        videos = client.post("/video-resources/search", json={"query": "asthma"}).json()["result"]["videos"]
        assert len(videos) == 3

        response = client.post(
            "/video-resources/summarize",
            json={"video_id": videos[0]["id"], "title": videos[0]["title"]},
        )
        result = response.json()["result"]
        assert result["selected"]["id"] == videos[0]["id"]
        assert len(result["videos"]) == 3
        assert result["summary"]

        assert _activities(client) == [
            f"Watched medical video: {videos[0]['title']}",
            "Searched for medical videos: asthma",
        ]
        assert client.get("/video-resources/export").status_code == 200

    def test_recommend_after_activity(self, client):
        client.post("/medication-analyzer/analyze", json={"medication_name": "Metformin"})
        response = client.post("/video-resources/recommend")
        assert response.status_code == 200
        assert len(response.json()["result"]["videos"]) == 3


class TestProfileAndSettings:
    """Profile form and settings."""

    def test_profile_update(self, client):
        response = client.put("/profile", json={"name": "Alice", "age": "34", "allergies": "penicillin"})

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["age"] == 34
        assert profile["allergies"] == ["penicillin"]
        assert response.json()["profile_complete"] is True

        client.put("/profile", json={"gender": "female"})
        data = client.get("/profile").json()
        assert data["profile"]["name"] == "Alice"
        assert data["form"]["age"] == "34"
        assert _activities(client)[0] == "Updated profile fields: gender"
        assert client.get("/layout").json()["user"] == {
            "name": "Alice", "profile_image": None, "has_profile": True,
        }

    def test_profile_invalid_age(self, client):
        response = client.put("/profile", json={"age": "thirty-four"})
        assert response.status_code == 400
        assert "age" in response.json()["detail"]

    def test_theme_toggle(self, client):
        assert client.get("/settings").json()["theme"] == "light"
        assert client.post("/settings/theme").json()["theme"] == "dark"
        assert client.get("/layout").json()["theme"] == "dark"

    def test_ai_model(self, client):
        assert client.put("/settings/ai-model", json={"model": "made-up-model"}).status_code == 400
        response = client.put("/settings/ai-model", json={"model": "gemini-1.5-pro"})
        assert response.status_code == 200
        assert client.get("/settings").json()["ai_model"] == "gemini-1.5-pro"

    def test_ai_model_from_another_provider_rejected(self, client, monkeypatch):
        from medclause.config import settings
        monkeypatch.setattr(settings, "llm_provider", "gemini")
        monkeypatch.setattr(settings, "llm_model", None)

        offered = client.get("/settings").json()["available_models"]
        assert "gpt-4o" not in offered
        assert "gemini-2.0-flash" in offered

        response = client.put("/settings/ai-model", json={"model": "gpt-4o"})
        assert response.status_code == 400
        assert "gpt-4o" in response.json()["detail"]
        assert client.get("/settings").json()["ai_model"] == "gemini-2.0-flash"

    def test_reset(self, client):
        client.put("/profile", json={"name": "Alice", "age": "34"})
        response = client.post("/settings/reset")

        assert response.json()["reload"] is True
        assert client.get("/profile").json()["profile"]["name"] is None
        assert _activities(client) == []


class TestSpeech:
    """Speech routes without an engine configured."""

    def test_status(self, client):
        data = client.get("/speech/status").json()
        assert data["supported"] is False
        assert data["speaking"] is False

    def test_speak_unsupported(self, client):
        response = client.post("/speech/speak", json={"text": "Hello"})
        assert response.status_code == 503
        assert response.json()["detail"]["title"] == "Not Supported"

    def test_audio_missing(self, client):
        assert client.get("/speech/audio").status_code == 404
