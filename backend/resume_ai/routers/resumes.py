"""
Resumes Router - upload and analysis, plus the dashboard views of a stored analysis
"""
from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_db
from ..dependencies import get_api_config, get_http_client
from ..models import Resume
from ..schemas.config import APIConfig
from ..schemas.resume import ATSReport, ResumeResponse, ResumeSummary, SkillsReport
from ..services.analysis import (
    analyze_resume,
    ats_report,
    delete_resume,
    get_resume,
    list_resumes,
    skills_report,
    to_response,
    to_summary,
)
from ..services.text_extraction import UnsupportedFileTypeError, is_supported_upload

router = APIRouter(prefix="/api/resumes", tags=["Resumes"])
settings = get_settings()


async def get_resume_or_404(resume_id: int, db: AsyncSession = Depends(get_db)) -> Resume:
    resume = await get_resume(db, resume_id)
    if resume is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resume not found"
        )
    return resume


@router.post("/analyze", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def upload_and_analyze(
    file: UploadFile = File(...),
    job_description: Optional[str] = Form(None, alias="jobDescription"),
    db: AsyncSession = Depends(get_db),
    config: APIConfig = Depends(get_api_config),
    http_client: Optional[httpx.AsyncClient] = Depends(get_http_client),
):
    """
    Upload a PDF or DOCX resume (and optionally a target job description)
    and run the analysis.

    Provider failures do not fail the request: the response then carries the
    sample analysis with source "mock" and the reason in fallbackReason.
    """
    filename = file.filename or "resume"
    if not is_supported_upload(filename, file.content_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF and Word (.docx) files are supported"
        )

    data = await file.read()
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty"
        )
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size must be less than {settings.max_upload_mb}MB"
        )

    try:
        resume = await analyze_resume(
            db,
            file_name=filename,
            content_type=file.content_type,
            data=data,
            config=config,
            job_description=job_description,
            http_client=http_client,
        )
    except UnsupportedFileTypeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return to_response(resume)


@router.get("", response_model=List[ResumeSummary])
async def list_all(db: AsyncSession = Depends(get_db)):
    """Previously analyzed resumes, newest first."""
    return [to_summary(resume) for resume in await list_resumes(db)]


@router.get("/{resume_id}", response_model=ResumeResponse)
async def get_one(resume: Resume = Depends(get_resume_or_404)):
    return to_response(resume)


@router.get("/{resume_id}/ats", response_model=ATSReport)
async def get_ats_report(resume: Resume = Depends(get_resume_or_404)):
    """ATS score and improvement suggestions."""
    return ats_report(resume)


@router.get("/{resume_id}/skills", response_model=SkillsReport)
async def get_skills_report(resume: Resume = Depends(get_resume_or_404)):
    """Skill breakdown and skill gaps with learning resources."""
    return skills_report(resume)


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove(resume_id: int, db: AsyncSession = Depends(get_db)):
    if not await delete_resume(db, resume_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resume not found"
        )
