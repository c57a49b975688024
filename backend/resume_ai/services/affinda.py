"""
Affinda resume parser - structured parsing when a parser API key is configured.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


class ResumeParserAPIError(Exception):
    pass


def _safe_get(obj, *keys, default=None):
    """Safely traverse nested dict/object."""
    for key in keys:
        if isinstance(obj, dict):
            obj = obj.get(key)
        else:
            return default
        if obj is None:
            return default
    return obj if obj is not None else default


def _text(value) -> Optional[str]:
    """Affinda wraps many values as {"raw": ..., "parsed": ...}; prefer the raw text."""
    if isinstance(value, dict):
        value = value.get("raw") or value.get("formatted") or value.get("parsed")
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value).strip() or None


def _duration(dates: Dict[str, Any]) -> str:
    start = _text(_safe_get(dates, "startDate")) or ""
    if _safe_get(dates, "isCurrent"):
        end = "Present"
    else:
        end = _text(_safe_get(dates, "endDate")) or ""
    if start and end:
        return f"{start} - {end}"
    return start or end


def _links(data: Dict[str, Any]) -> List[str]:
    links = [_text(url) for url in data.get("websites") or []]
    if data.get("linkedin"):
        links.append(_text(data["linkedin"]))
    return [link for link in links if link]


def normalize_affinda_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map an Affinda resume document onto the ParsedResumeData shape.

    Missing sections come back empty rather than raising; the result is
    validated by ParsedResumeData afterwards.
    """
    data = (document.get("data") if isinstance(document, dict) else None) or {}
    links = _links(data)

    personal_info = {
        "name": _text(data.get("name")),
        "email": _text(data.get("emails")),
        "phone": _text(data.get("phoneNumbers")),
        "location": _text(_safe_get(data, "location", "formatted")) or _text(data.get("location")),
        "linkedin": next((link for link in links if "linkedin.com" in link), None),
        "github": next((link for link in links if "github.com" in link), None),
    }

    experience = []
    for job in data.get("workExperience") or []:
        description = _text(job.get("jobDescription")) or ""
        experience.append({
            "company": _text(job.get("organization")) or "",
            "position": _text(job.get("jobTitle")) or "",
            "duration": _duration(job.get("dates") or {}),
            "description": [line.strip() for line in description.splitlines() if line.strip()],
            "technologies": [],
        })

    education = []
    for entry in data.get("education") or []:
        education.append({
            "institution": _text(entry.get("organization")) or "",
            "degree": _text(_safe_get(entry, "accreditation", "education")) or "",
            "year": _text(_safe_get(entry, "dates", "completionDate")) or "",
            "gpa": _text(_safe_get(entry, "grade", "raw")),
        })

    skills = [
        _text(skill.get("name")) if isinstance(skill, dict) else _text(skill)
        for skill in data.get("skills") or []
    ]
    certifications = [_text(cert) for cert in data.get("certifications") or []]

    return {
        "personalInfo": personal_info,
        "summary": _text(data.get("summary")),
        "experience": experience,
        "education": education,
        "skills": [skill for skill in skills if skill],
        "certifications": [cert for cert in certifications if cert],
    }


async def parse_with_affinda(
    api_key: str,
    filename: str,
    content_type: Optional[str],
    data: bytes,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """Upload the resume file to Affinda and return normalized parsed data."""
    settings = settings or get_settings()
    files = {"file": (filename, data, content_type or "application/octet-stream")}
    headers = {"Authorization": f"Bearer {api_key}"}

    try:
        if http_client is not None:
            response = await http_client.post(settings.resume_parser_url, headers=headers, files=files)
        else:
            async with httpx.AsyncClient(timeout=settings.ai_request_timeout) as client:
                response = await client.post(settings.resume_parser_url, headers=headers, files=files)
    except httpx.RequestError as e:
        raise ResumeParserAPIError(f"Resume parsing failed: {e}") from e

    if response.is_error:
        raise ResumeParserAPIError(f"Resume parsing failed: {response.reason_phrase}")

    try:
        document = response.json()
    except ValueError as e:
        raise ResumeParserAPIError("Resume parsing failed: response was not JSON") from e

    logger.info(f"Affinda parsed {filename}")
    return normalize_affinda_document(document)
