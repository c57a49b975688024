import httpx

from resume_ai.config import get_settings
from resume_ai.services.mock_data import CHAT_ERROR_MESSAGE, WELCOME_MESSAGE_WITH_KEY, WELCOME_MESSAGE_WITHOUT_KEY

from conftest import make_docx, make_pdf, openai_resume_handler, prompt_text

OPENAI_KEY = "sk-test-12345678"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def upload(client, filename="cv.pdf", data=None, content_type="application/pdf", job_description=None):
    form = {"jobDescription": job_description} if job_description is not None else {}
    return client.post(
        "/api/resumes/analyze",
        files={"file": (filename, data if data is not None else make_pdf("Ada Lovelace"), content_type)},
        data=form,
    )


def configure_openai(client):
    response = client.put("/api/config", json={"openaiApiKey": OPENAI_KEY})
    assert response.status_code == 200
    return response


# ============================================================================
# Service
# ============================================================================

def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"


def test_api_responses_are_not_cached(client):
    response = client.get("/api/config")
    assert response.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert "Cache-Control" not in client.get("/health").headers


# ============================================================================
# Configuration
# ============================================================================

def test_config_defaults_to_environment(client):
    body = client.get("/api/config").json()

    assert body["source"] == "environment"
    assert body["hasAiKey"] is False
    assert body["activeProvider"] is None
    assert body["configured"] == []


def test_config_requires_an_ai_key(client):
    response = client.put("/api/config", json={"resumeParserApiKey": "affinda-key"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please provide at least one AI API key (Gemini, OpenAI, or Anthropic)"
    assert client.get("/api/config").json()["source"] == "environment"


def test_config_save_masks_keys_and_picks_provider(client):
    response = client.put("/api/config", json={"geminiApiKey": "AIza-gemini-key", "openaiApiKey": OPENAI_KEY})
    body = response.json()

    assert body["source"] == "stored"
    assert body["activeProvider"] == "openai"
    assert body["hasAiKey"] is True
    assert body["keys"]["openaiApiKey"] == "sk-t********5678"
    assert body["keys"]["anthropicApiKey"] is None
    assert sorted(body["configured"]) == ["gemini_api_key", "openai_api_key"]

    # saving replaces rather than merges
    body = client.put("/api/config", json={"anthropicApiKey": "sk-ant-abcdefgh"}).json()
    assert body["activeProvider"] == "anthropic"
    assert body["configured"] == ["anthropic_api_key"]


def test_config_reset_returns_to_environment(client):
    configure_openai(client)

    body = client.delete("/api/config").json()

    assert body["source"] == "environment"
    assert body["hasAiKey"] is False


# ============================================================================
# Resumes
# ============================================================================

def test_upload_rejects_unsupported_file(client):
    response = upload(client, filename="notes.txt", data=b"hello", content_type="text/plain")
    assert response.status_code == 400


def test_upload_rejects_empty_file(client):
    response = upload(client, data=b"")
    assert response.status_code == 400
    assert response.json()["detail"] == "Uploaded file is empty"


def test_upload_rejects_oversized_file(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "max_upload_mb", 1)

    response = upload(client, data=b"%" * (1024 * 1024 + 1))

    assert response.status_code == 413
    assert response.json()["detail"] == "File size must be less than 1MB"
    assert client.get("/api/resumes").json() == []


def test_upload_at_size_limit_is_accepted(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "max_upload_mb", 1)

    assert upload(client, data=b"%" * (1024 * 1024)).status_code == 201


def test_upload_without_key_serves_sample_analysis(client):
    response = upload(client, filename="mine.docx", data=make_docx("Me"), content_type=DOCX_TYPE)

    assert response.status_code == 201
    body = response.json()
    assert body["source"] == "mock"
    assert body["fallbackReason"] == "No AI API key configured"
    assert body["fileName"] == "john_doe_resume.pdf"
    assert body["content"] == "Mock resume content..."
    assert body["parsedData"]["personalInfo"]["name"] == "John Doe"
    assert body["analysis"]["atsScore"] == 78


def test_upload_with_ai(client, use_http_handler):
    requests = []
    configure_openai(client)
    use_http_handler(openai_resume_handler(requests))

    response = upload(client, filename="ada.pdf", job_description="Python engineer")

    assert response.status_code == 201
    body = response.json()
    assert body["source"] == "ai"
    assert body["provider"] == "openai"
    assert body["jobDescription"] == "Python engineer"
    assert body["parsedData"]["personalInfo"]["name"] == "Ada Lovelace"
    assert body["analysis"]["atsScore"] == 74
    assert body["analysis"]["skillsAnalysis"]["trending"][0]["name"] == "Python"
    assert requests[0].headers["Authorization"] == f"Bearer {OPENAI_KEY}"


def test_upload_falls_back_when_provider_fails(client, use_http_handler):
    configure_openai(client)
    use_http_handler(lambda r: httpx.Response(500, json={"error": {"message": "The server had an error"}}))

    response = upload(client)

    assert response.status_code == 201
    body = response.json()
    assert body["source"] == "mock"
    assert body["fallbackReason"] == "OpenAI API error: The server had an error"


def test_resume_views(client):
    resume_id = upload(client).json()["id"]

    listed = client.get("/api/resumes").json()
    assert [item["id"] for item in listed] == [resume_id]
    assert listed[0]["atsScore"] == 78
    assert listed[0]["overallScore"] == 82

    assert client.get(f"/api/resumes/{resume_id}").json()["fileName"] == "john_doe_resume.pdf"

    ats = client.get(f"/api/resumes/{resume_id}/ats").json()
    assert ats["atsScore"] == 78
    assert [s["id"] for s in ats["suggestions"]] == [str(n) for n in range(1, len(ats["suggestions"]) + 1)]

    skills = client.get(f"/api/resumes/{resume_id}/skills").json()
    assert {"technical", "soft", "trending", "missing"} <= set(skills["skillsAnalysis"])
    assert skills["skillGaps"]


def test_delete_resume(client):
    resume_id = upload(client).json()["id"]

    assert client.delete(f"/api/resumes/{resume_id}").status_code == 204
    assert client.delete(f"/api/resumes/{resume_id}").status_code == 404
    assert client.get(f"/api/resumes/{resume_id}").status_code == 404
    assert client.get(f"/api/resumes/{resume_id}/ats").status_code == 404
    assert client.get("/api/resumes").json() == []


# ============================================================================
# Chat
# ============================================================================

def test_chat_without_key_uses_canned_replies(client):
    response = client.post("/api/chat", json={"message": "How do I prepare for an interview?"})

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "assistant"
    assert body["content"].startswith("Excellent! Interview preparation is crucial.")

    history = client.get("/api/chat/history").json()
    assert [m["type"] for m in history] == ["assistant", "user", "assistant"]
    assert history[0]["content"] == WELCOME_MESSAGE_WITHOUT_KEY
    assert history[1]["content"] == "How do I prepare for an interview?"


def test_chat_rejects_blank_message(client):
    assert client.post("/api/chat", json={"message": "   "}).status_code == 400


def test_chat_unknown_resume(client):
    assert client.post("/api/chat", json={"message": "hi", "resumeId": 999}).status_code == 404


def test_chat_with_ai_about_a_resume(client, use_http_handler):
    requests = []
    configure_openai(client)
    use_http_handler(openai_resume_handler(requests))
    resume_id = upload(client).json()["id"]

    response = client.post("/api/chat", json={"message": "What should I focus on?", "resumeId": resume_id})

    assert response.json()["content"] == "Focus on Kubernetes next."
    chat_prompt = prompt_text(requests[-1])
    assert "User Context" in chat_prompt
    assert "Ada Lovelace" in chat_prompt

    history = client.get("/api/chat/history", params={"resumeId": resume_id}).json()
    assert history[0]["content"] == WELCOME_MESSAGE_WITH_KEY
    assert [m["content"] for m in history[1:]] == ["What should I focus on?", "Focus on Kubernetes next."]
    # resume-less conversation is separate
    assert len(client.get("/api/chat/history").json()) == 1


def test_chat_provider_failure_apologises(client, use_http_handler):
    configure_openai(client)
    use_http_handler(lambda r: httpx.Response(401, json={"error": {"message": "Invalid key"}}))

    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 200
    assert response.json()["content"] == CHAT_ERROR_MESSAGE


def test_clear_history(client):
    client.post("/api/chat", json={"message": "career path?"})

    assert client.delete("/api/chat/history").json() == {"deleted": 2}
    assert len(client.get("/api/chat/history").json()) == 1


def test_quick_suggestions(client):
    suggestions = client.get("/api/chat/suggestions").json()
    assert suggestions[0] == {"text": "How can I improve my resume?", "category": "Resume"}
