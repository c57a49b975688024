"""
Resume models - one row per uploaded and analyzed resume.
"""
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, Date, JSON, Enum as SQLEnum
from ..database import Base


class AnalysisSource(str, enum.Enum):
    """Where the stored analysis came from."""
    AI = "ai"
    MOCK = "mock"


class Resume(Base):
    """
    An uploaded resume with its parsed data and analysis.

    parsed_data and analysis hold the camelCase payloads served to the
    dashboards, so they are returned as stored.
    """
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)

    # File info
    file_name = Column(String(255), nullable=False)
    upload_date = Column(Date, nullable=False)
    content = Column(Text, nullable=False, default="")
    job_description = Column(Text, nullable=True)

    # Analysis payloads
    parsed_data = Column(JSON, nullable=False)
    analysis = Column(JSON, nullable=False)

    # Provenance
    source = Column(SQLEnum(AnalysisSource), default=AnalysisSource.AI, nullable=False)
    provider = Column(String(50), nullable=True)
    fallback_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
