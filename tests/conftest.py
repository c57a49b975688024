import io
import json
import os
import tempfile
from types import SimpleNamespace

# Settings are read once at import time; point them at a scratch database and
# blank out provider keys before anything from resume_ai is imported.
_db_dir = tempfile.mkdtemp(prefix="resume_ai_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
for _key in (
    "OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY",
    "RESUME_PARSER_API_KEY", "SKILLS_API_KEY", "JOB_MARKET_API_KEY",
):
    os.environ[_key] = ""

import fitz  # noqa: E402
import httpx  # noqa: E402
import pytest  # noqa: E402
from docx import Document  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from resume_ai import models  # noqa: E402,F401
from resume_ai.database import Base, async_session_maker, engine  # noqa: E402
from resume_ai.dependencies import get_http_client  # noqa: E402
from resume_ai.main import app  # noqa: E402
from resume_ai.services.ai_client import AIService  # noqa: E402


PARSED_RESUME = {
    "personalInfo": {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "location": "London, UK",
        "linkedin": None,
        "github": "github.com/ada",
    },
    "summary": "Analyst and programmer.",
    "experience": [
        {
            "company": "Analytical Engines Ltd",
            "position": "Lead Programmer",
            "duration": "1842 - 1843",
            "description": ["Wrote the first published algorithm"],
            "technologies": ["Difference Engine"],
        }
    ],
    "education": [{"institution": "Home tutoring", "degree": "Mathematics", "year": "1835", "gpa": None}],
    "skills": ["Python", "Mathematics"],
    "certifications": None,
}

SKILLS_ASSESSMENT = {
    "technicalSkills": [
        {"name": "Python", "level": "Advanced", "category": "Programming", "demand": 92},
        {"name": "SQL", "level": "intermediate", "category": "Data", "demand": 80},
    ],
    "softSkills": ["Communication", "Leadership"],
    "missingSkills": [{"name": "Kubernetes", "importance": 70, "marketDemand": 88, "category": "DevOps"}],
    "atsScore": 74,
    "suggestions": [
        {"category": "keywords", "severity": "high", "title": "Add keywords", "description": "Mention SQL", "impact": 20},
        {"category": "formatting", "severity": "low", "title": "Fix headers", "description": "Standard names", "impact": 5},
    ],
    "overallScore": 81,
    "skillGaps": [
        {
            "skill": "Kubernetes",
            "category": "DevOps",
            "importance": 70,
            "marketDemand": 88,
            "difficulty": "Hard",
            "timeToLearn": "3 months",
        }
    ],
}


# ============================================================================
# File builders
# ============================================================================

def make_pdf(text: str) -> bytes:
    document = fitz.open()
    page = document.new_page()
    page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


def make_docx(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


# ============================================================================
# Provider stubs
# ============================================================================

def openai_envelope(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def anthropic_envelope(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def prompt_text(request: httpx.Request) -> str:
    """All prompt text carried by an outbound OpenAI or Anthropic request."""
    body = json.loads(request.content)
    return "\n".join(message["content"] for message in body["messages"])


def openai_resume_handler(requests: list):
    """OpenAI stub answering resume-parse and skills-analysis prompts."""
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        text = prompt_text(request)
        if "Parse the following resume" in text:
            payload = PARSED_RESUME
        elif "skills assessment" in text:
            payload = SKILLS_ASSESSMENT
        else:
            return httpx.Response(200, json=openai_envelope("Focus on Kubernetes next."))
        return httpx.Response(200, json=openai_envelope(json.dumps(payload)))
    return handler


def mock_http_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
async def reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def db():
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_http_handler():
    """Route the app's outbound provider calls through a stub handler."""
    def install(handler):
        app.dependency_overrides[get_http_client] = lambda: mock_http_client(handler)
    yield install
    app.dependency_overrides.pop(get_http_client, None)


class FakeGeminiModels:
    """Stands in for genai.Client().aio.models, recording each generate_content call."""

    def __init__(self):
        self.calls = []
        self.reply = ""
        self.error = None

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append(SimpleNamespace(model=model, contents=contents, config=config))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


@pytest.fixture
def gemini_stub(monkeypatch):
    models = FakeGeminiModels()
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    monkeypatch.setattr(AIService, "_gemini_client", lambda self: client)
    return models
