from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base


class StoredAPIConfig(Base):
    """Saved API keys. A single row (id=1) replaces the environment defaults once saved."""
    __tablename__ = "api_configs"

    id = Column(Integer, primary_key=True)
    resume_parser_api_key = Column(String(255), nullable=True)
    openai_api_key = Column(String(255), nullable=True)
    anthropic_api_key = Column(String(255), nullable=True)
    gemini_api_key = Column(String(255), nullable=True)
    skills_api_key = Column(String(255), nullable=True)
    job_market_api_key = Column(String(255), nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
