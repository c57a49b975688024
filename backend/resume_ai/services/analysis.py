"""
Resume analysis pipeline: extract text, parse, assess skills, shape the
dashboard payloads and persist. Any failure past file validation falls back
to the sample resume so the dashboards always have something to show.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx
from pydantic import ValidationError
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Resume, AnalysisSource, ChatMessage
from ..schemas.config import APIConfig
from ..schemas.resume import (
    ATSReport,
    ParsedResumeData,
    Resource,
    ResumeAnalysis,
    ResumeResponse,
    ResumeSummary,
    Skill,
    SkillGap,
    SkillsAnalysis,
    SkillsAssessment,
    SkillsReport,
)
from .affinda import ResumeParserAPIError, parse_with_affinda
from .ai_client import AIServiceError, create_ai_service
from .mock_data import MOCK_CONTENT, MOCK_FILE_NAME, mock_analysis, mock_parsed_data
from .text_extraction import UnsupportedFileTypeError, extract_text_from_file, is_supported_upload

logger = logging.getLogger(__name__)

NO_KEY_REASON = "No AI API key configured"
TRENDING_DEMAND_THRESHOLD = 85


# ============================================================================
# Shaping
# ============================================================================

def default_learning_resource(gap: SkillGap) -> Resource:
    """The single suggested resource attached to every model-reported skill gap."""
    return Resource(
        id="1",
        title=f"Learn {gap.skill}",
        type="course",
        provider="Online Platform",
        rating=4.5,
        duration=gap.time_to_learn,
        cost="Paid",
        url="#",
        description=f"Comprehensive {gap.skill} course",
    )


def build_analysis(assessment: SkillsAssessment) -> ResumeAnalysis:
    """Turn the model's skills assessment into the dashboard analysis."""
    technical = [skill.model_copy(update={"in_resume": True}) for skill in assessment.technical_skills]
    soft = [
        Skill(name=name, level="Intermediate", category="Soft Skills", demand=70, in_resume=True)
        for name in assessment.soft_skills
    ]
    missing = [
        Skill(
            name=skill.name,
            level="Beginner",
            category=skill.category,
            demand=skill.market_demand,
            in_resume=False,
        )
        for skill in assessment.missing_skills
    ]
    trending = [skill for skill in technical if skill.demand > TRENDING_DEMAND_THRESHOLD]

    skill_gaps = [
        gap.model_copy(update={"resources": [default_learning_resource(gap)]})
        for gap in assessment.skill_gaps
    ]

    return ResumeAnalysis(
        ats_score=assessment.ats_score,
        skills_analysis=SkillsAnalysis(technical=technical, soft=soft, trending=trending, missing=missing),
        suggestions=assessment.suggestions,
        skill_gaps=skill_gaps,
        overall_score=assessment.overall_score,
    )


# ============================================================================
# Pipeline
# ============================================================================

async def _store(
    db: AsyncSession,
    *,
    file_name: str,
    content: str,
    job_description: Optional[str],
    parsed_data: dict,
    analysis: dict,
    source: AnalysisSource,
    provider: Optional[str] = None,
    fallback_reason: Optional[str] = None,
) -> Resume:
    resume = Resume(
        file_name=file_name,
        upload_date=datetime.now(timezone.utc).date(),
        content=content,
        job_description=job_description,
        parsed_data=parsed_data,
        analysis=analysis,
        source=source,
        provider=provider,
        fallback_reason=fallback_reason,
    )
    db.add(resume)
    await db.flush()
    return resume


async def _store_mock(db: AsyncSession, job_description: Optional[str], reason: str) -> Resume:
    """Store the sample resume as-is, recording why it was served."""
    return await _store(
        db,
        file_name=MOCK_FILE_NAME,
        content=MOCK_CONTENT,
        job_description=job_description,
        parsed_data=mock_parsed_data(),
        analysis=mock_analysis(),
        source=AnalysisSource.MOCK,
        fallback_reason=reason,
    )


async def analyze_resume(
    db: AsyncSession,
    *,
    file_name: str,
    content_type: Optional[str],
    data: bytes,
    config: APIConfig,
    job_description: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Resume:
    """
    Analyze an uploaded resume and persist the result.

    Args:
        db: Database session
        file_name: Original upload name
        content_type: Upload MIME type
        data: Raw file bytes
        config: Effective API configuration (decides provider / mock)
        job_description: Optional target job description
        http_client: Optional shared client for provider calls

    Returns:
        The stored Resume row. source is MOCK when no AI key is configured
        or when any step failed, with fallback_reason saying why.

    Raises:
        UnsupportedFileTypeError: for files that are neither PDF nor DOCX
    """
    if not is_supported_upload(file_name, content_type):
        raise UnsupportedFileTypeError("Unsupported file type")

    job_description = (job_description or "").strip() or None

    if not config.has_ai_key:
        logger.info(f"No AI key configured, serving sample analysis for {file_name}")
        return await _store_mock(db, job_description, NO_KEY_REASON)

    ai_service = create_ai_service(config, http_client=http_client)
    try:
        resume_text = extract_text_from_file(file_name, content_type, data)

        if config.resume_parser_api_key:
            raw_parsed = await parse_with_affinda(
                config.resume_parser_api_key, file_name, content_type, data, http_client=http_client
            )
        else:
            raw_parsed = await ai_service.parse_resume_text(resume_text)
        parsed = ParsedResumeData.model_validate(raw_parsed)

        raw_assessment = await ai_service.analyze_skills(resume_text, job_description)
        analysis = build_analysis(SkillsAssessment.model_validate(raw_assessment))
    except (AIServiceError, ResumeParserAPIError, ValidationError) as e:
        logger.warning(f"Resume analysis failed for {file_name}, using sample data: {e}")
        return await _store_mock(db, job_description, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error analyzing {file_name}, using sample data")
        return await _store_mock(db, job_description, f"{type(e).__name__}: {e}")

    provider = ai_service.provider
    resume = await _store(
        db,
        file_name=file_name,
        content=resume_text,
        job_description=job_description,
        parsed_data=parsed.model_dump(by_alias=True),
        analysis=analysis.model_dump(by_alias=True),
        source=AnalysisSource.AI,
        provider=provider.value,
    )
    logger.info(
        f"Analyzed {file_name} via {provider.display_name}: "
        f"ATS {analysis.ats_score}, overall {analysis.overall_score}, {len(analysis.skill_gaps)} gaps"
    )
    return resume


# ============================================================================
# Queries
# ============================================================================

async def list_resumes(db: AsyncSession) -> List[Resume]:
    result = await db.execute(select(Resume).order_by(Resume.created_at.desc(), Resume.id.desc()))
    return list(result.scalars().all())


async def get_resume(db: AsyncSession, resume_id: int) -> Optional[Resume]:
    result = await db.execute(select(Resume).where(Resume.id == resume_id))
    return result.scalar_one_or_none()


async def delete_resume(db: AsyncSession, resume_id: int) -> bool:
    resume = await get_resume(db, resume_id)
    if resume is None:
        return False
    # SQLite does not enforce ON DELETE CASCADE unless asked to
    await db.execute(delete(ChatMessage).where(ChatMessage.resume_id == resume_id))
    await db.delete(resume)
    await db.flush()
    return True


def to_response(resume: Resume) -> ResumeResponse:
    return ResumeResponse.model_validate(resume)


def to_summary(resume: Resume) -> ResumeSummary:
    analysis = resume.analysis or {}
    return ResumeSummary(
        id=resume.id,
        file_name=resume.file_name,
        upload_date=resume.upload_date,
        source=resume.source,
        provider=resume.provider,
        ats_score=analysis.get("atsScore", 0),
        overall_score=analysis.get("overallScore", 0),
    )


def ats_report(resume: Resume) -> ATSReport:
    analysis = ResumeAnalysis.model_validate(resume.analysis)
    return ATSReport(ats_score=analysis.ats_score, suggestions=analysis.suggestions)


def skills_report(resume: Resume) -> SkillsReport:
    analysis = ResumeAnalysis.model_validate(resume.analysis)
    return SkillsReport(skills_analysis=analysis.skills_analysis, skill_gaps=analysis.skill_gaps)
