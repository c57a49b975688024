from typing import List, Literal, Optional
from pydantic import field_validator

from .base import CamelModel, optional_text


class APIConfig(CamelModel):
    """API keys that drive provider selection. Blank keys count as unset."""
    resume_parser_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    skills_api_key: Optional[str] = None
    job_market_api_key: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        return optional_text(v)

    @property
    def has_ai_key(self) -> bool:
        return bool(self.openai_api_key or self.anthropic_api_key or self.gemini_api_key)


class APIConfigStatus(CamelModel):
    """What GET /api/config returns: masked keys, never the secrets."""
    keys: APIConfig
    configured: List[str]
    has_ai_key: bool
    active_provider: Optional[str] = None
    source: Literal["stored", "environment"]
