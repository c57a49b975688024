"""
AI Service - one client for the three supported LLM providers.

Whichever provider key is configured is used (OpenAI first, then Anthropic,
then Gemini). Each provider has its own request body and response envelope;
callers only see prompt in, text (or parsed JSON) out.
"""
import json
import logging
import re
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..config import Settings, get_settings
from ..schemas.config import APIConfig
from .prompts import (
    ADVISOR_PREAMBLE,
    ANALYSIS_SYSTEM_PROMPT,
    GENERATION_PARAMS,
    build_chat_system_prompt,
    build_resume_parse_prompt,
    build_skills_analysis_prompt,
)

logger = logging.getLogger(__name__)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"


class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"

    @property
    def display_name(self) -> str:
        return {"openai": "OpenAI", "anthropic": "Anthropic", "gemini": "Gemini"}[self.value]


# Order matters: the first provider with a key wins
PROVIDER_PRECEDENCE = (Provider.OPENAI, Provider.ANTHROPIC, Provider.GEMINI)

_KEY_FIELDS = {
    Provider.OPENAI: "openai_api_key",
    Provider.ANTHROPIC: "anthropic_api_key",
    Provider.GEMINI: "gemini_api_key",
}


# ============================================================================
# Errors
# ============================================================================

class AIServiceError(Exception):
    """Base class for anything that goes wrong talking to a provider."""


class AINotConfiguredError(AIServiceError):
    pass


class AIProviderError(AIServiceError):
    def __init__(self, message: str, provider: Optional[Provider] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class AIResponseFormatError(AIServiceError):
    """Provider answered, but not in the expected envelope or not with JSON."""


# ============================================================================
# Helpers
# ============================================================================

def select_provider(config: APIConfig) -> Optional[Provider]:
    """Return the provider to use for this config, or None if no AI key is set."""
    for provider in PROVIDER_PRECEDENCE:
        if getattr(config, _KEY_FIELDS[provider]):
            return provider
    return None


_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_payload(text: str, source: str = "AI provider") -> Dict[str, Any]:
    """
    Pull a JSON object out of model output.

    Tries the raw text, then the text without Markdown code fences, then the
    widest {...} span. Raises AIResponseFormatError if none parse to an object.
    """
    text = (text or "").strip()
    candidates = [text, _CODE_FENCE.sub("", text).strip()]
    match = _JSON_OBJECT.search(text)
    if match:
        candidates.append(match.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise AIResponseFormatError(f"Invalid JSON response from {source}")


def _error_detail(response: httpx.Response) -> str:
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or response.reason_phrase or f"HTTP {response.status_code}"


# Gemini SDK clients keep their own connection pool; one per (key, timeout)
_genai_clients: Dict[Tuple[str, int], genai.Client] = {}


def get_genai_client(api_key: str, timeout_ms: int) -> genai.Client:
    """Get or create the shared Gemini client for this key."""
    client = _genai_clients.get((api_key, timeout_ms))
    if client is None:
        client = genai.Client(
            api_key=api_key,
            http_options=genai_types.HttpOptions(timeout=timeout_ms),
        )
        _genai_clients[(api_key, timeout_ms)] = client
    return client


async def close_genai_clients() -> None:
    """Close every cached Gemini client. Called on app shutdown."""
    clients = list(_genai_clients.values())
    _genai_clients.clear()
    for client in clients:
        await client.aio.aclose()


# ============================================================================
# Client
# ============================================================================

class AIService:
    """
    Thin wrapper over the OpenAI and Anthropic REST APIs and the Gemini SDK.

    Pass http_client to reuse a connection pool for the REST providers (or to
    stub the transport in tests); otherwise a short-lived client is opened per
    request.
    """

    def __init__(
        self,
        config: APIConfig,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.settings = settings or get_settings()
        self._http_client = http_client

    @property
    def provider(self) -> Optional[Provider]:
        return select_provider(self.config)

    def _require_provider(self) -> Provider:
        provider = self.provider
        if provider is None:
            raise AINotConfiguredError("No AI API key configured")
        return provider

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def call_ai(self, prompt: str) -> str:
        """Send an analysis prompt to the active provider and return its text."""
        provider = self._require_provider()
        logger.debug(f"Analysis request via {provider.display_name} ({len(prompt)} chars)")

        if provider is Provider.OPENAI:
            return await self._call_openai(ANALYSIS_SYSTEM_PROMPT, prompt, "analysis")
        if provider is Provider.ANTHROPIC:
            return await self._call_anthropic(f"{ADVISOR_PREAMBLE} {prompt}", "analysis")
        return await self._call_gemini(f"{ANALYSIS_SYSTEM_PROMPT}\n\n{prompt}", "analysis")

    async def chat(self, message: str, context: Optional[Any] = None) -> str:
        """Career-advisor reply to a single user message, with optional resume context."""
        provider = self._require_provider()
        system_prompt = build_chat_system_prompt(context)

        if provider is Provider.OPENAI:
            return await self._call_openai(system_prompt, message, "chat")

        combined = f"{system_prompt}\n\nUser: {message}"
        if provider is Provider.ANTHROPIC:
            return await self._call_anthropic(combined, "chat")
        return await self._call_gemini(combined, "chat")

    async def parse_resume_text(self, resume_text: str) -> Dict[str, Any]:
        response_text = await self.call_ai(build_resume_parse_prompt(resume_text))
        return extract_json_payload(response_text, f"{self.provider.display_name} API")

    async def analyze_skills(self, resume_text: str, job_description: Optional[str] = None) -> Dict[str, Any]:
        if not self.config.has_ai_key:
            raise AINotConfiguredError("AI API key not configured")

        response_text = await self.call_ai(build_skills_analysis_prompt(resume_text, job_description))
        return extract_json_payload(response_text, f"{self.provider.display_name} API")

    # ------------------------------------------------------------------
    # Provider wire formats
    # ------------------------------------------------------------------

    async def _call_openai(self, system_prompt: str, user_prompt: str, task: str) -> str:
        body = {
            "model": self.settings.openai_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **GENERATION_PARAMS["openai"][task],
        }
        headers = {"Authorization": f"Bearer {self.config.openai_api_key}"}
        data = await self._post(Provider.OPENAI, OPENAI_URL, headers=headers, body=body)

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise AIResponseFormatError("Unexpected OpenAI API response shape") from e

    async def _call_anthropic(self, content: str, task: str) -> str:
        body = {
            "model": self.settings.anthropic_model,
            "messages": [{"role": "user", "content": content}],
            **GENERATION_PARAMS["anthropic"][task],
        }
        headers = {
            "x-api-key": self.config.anthropic_api_key,
            "anthropic-version": self.settings.anthropic_version,
        }
        data = await self._post(Provider.ANTHROPIC, ANTHROPIC_URL, headers=headers, body=body)

        try:
            return data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise AIResponseFormatError("Unexpected Anthropic API response shape") from e

    def _gemini_client(self) -> genai.Client:
        return get_genai_client(self.config.gemini_api_key, int(self.settings.ai_request_timeout * 1000))

    async def _call_gemini(self, text: str, task: str) -> str:
        client = self._gemini_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.settings.gemini_model,
                contents=text,
                config=genai_types.GenerateContentConfig(**GENERATION_PARAMS["gemini"][task]),
            )
        except genai_errors.APIError as e:
            raise AIProviderError(
                f"Gemini API error: {e.message or e.status or e.code}",
                provider=Provider.GEMINI,
                status_code=e.code,
            ) from e
        except httpx.RequestError as e:
            raise AIProviderError(
                f"Gemini API error: {e.__class__.__name__}: {e}",
                provider=Provider.GEMINI,
            ) from e

        if not response.text:
            raise AIResponseFormatError("Unexpected Gemini API response shape")
        return response.text

    async def _post(
        self,
        provider: Provider,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
    ) -> Dict[str, Any]:
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, headers=headers, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.settings.ai_request_timeout) as client:
                    response = await client.post(url, headers=headers, json=body)
        except httpx.RequestError as e:
            raise AIProviderError(
                f"{provider.display_name} API error: {e.__class__.__name__}: {e}",
                provider=provider,
            ) from e

        if response.is_error:
            raise AIProviderError(
                f"{provider.display_name} API error: {_error_detail(response)}",
                provider=provider,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise AIResponseFormatError(f"{provider.display_name} API returned a non-JSON body") from e


def create_ai_service(config: APIConfig, http_client: Optional[httpx.AsyncClient] = None) -> AIService:
    return AIService(config, http_client=http_client)
