from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    app_name: str = "ResumeAI Advisor API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database - supports both SQLite (local) and PostgreSQL (production)
    database_url: str = "sqlite+aiosqlite:///./resume_ai.db"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:5173,http://localhost:5174"

    # AI providers - any one key enables real analysis.
    # Precedence when several are set: OpenAI, Anthropic, Gemini
    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-sonnet-20240229"
    anthropic_version: str = "2023-06-01"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Structured resume parser (Affinda, optional)
    resume_parser_api_key: str = ""
    resume_parser_url: str = "https://api.affinda.com/v3/documents"

    # Reserved for enrichment services; stored but not called yet
    skills_api_key: str = ""
    job_market_api_key: str = ""

    # Outbound HTTP
    ai_request_timeout: float = 60.0

    # Uploads
    max_upload_mb: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"
        # Make field names case-insensitive for environment variables
        case_sensitive = False

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    return Settings()
