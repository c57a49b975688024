import httpx
import pytest

from resume_ai.schemas.resume import ParsedResumeData
from resume_ai.services.affinda import ResumeParserAPIError, normalize_affinda_document, parse_with_affinda

from conftest import mock_http_client


AFFINDA_DOCUMENT = {
    "data": {
        "name": {"raw": "Grace Hopper", "first": "Grace", "last": "Hopper"},
        "emails": ["grace@navy.mil"],
        "phoneNumbers": ["+1 555 0100"],
        "location": {"formatted": "Arlington, VA", "city": "Arlington"},
        "websites": ["https://github.com/ghopper"],
        "linkedin": "https://www.linkedin.com/in/ghopper",
        "summary": "Computer scientist.",
        "workExperience": [
            {
                "organization": "US Navy",
                "jobTitle": "Rear Admiral",
                "dates": {"startDate": "1943-12-01", "endDate": None, "isCurrent": True},
                "jobDescription": "Led COBOL standardisation\n\n  Popularised the term 'debugging'  ",
            }
        ],
        "education": [
            {
                "organization": "Yale University",
                "accreditation": {"education": "PhD Mathematics"},
                "dates": {"completionDate": "1934"},
                "grade": None,
            }
        ],
        "skills": [{"name": "COBOL"}, {"name": ""}, "FLOW-MATIC"],
        "certifications": [],
    }
}


def test_normalize_maps_affinda_fields():
    result = normalize_affinda_document(AFFINDA_DOCUMENT)

    assert result["personalInfo"] == {
        "name": "Grace Hopper",
        "email": "grace@navy.mil",
        "phone": "+1 555 0100",
        "location": "Arlington, VA",
        "linkedin": "https://www.linkedin.com/in/ghopper",
        "github": "https://github.com/ghopper",
    }
    assert result["summary"] == "Computer scientist."
    assert result["experience"] == [{
        "company": "US Navy",
        "position": "Rear Admiral",
        "duration": "1943-12-01 - Present",
        "description": ["Led COBOL standardisation", "Popularised the term 'debugging'"],
        "technologies": [],
    }]
    assert result["education"][0]["degree"] == "PhD Mathematics"
    assert result["education"][0]["year"] == "1934"
    assert result["education"][0]["gpa"] is None
    assert result["skills"] == ["COBOL", "FLOW-MATIC"]
    assert result["certifications"] == []


def test_normalized_document_validates():
    parsed = ParsedResumeData.model_validate(normalize_affinda_document(AFFINDA_DOCUMENT))
    assert parsed.experience[0].id == "1"
    assert parsed.personal_info.github == "https://github.com/ghopper"


@pytest.mark.parametrize("document", [{}, {"data": None}, None, []])
def test_normalize_empty_document(document):
    result = normalize_affinda_document(document)
    assert result["personalInfo"]["name"] is None
    assert result["experience"] == []
    assert result["skills"] == []


async def test_parse_with_affinda_error_status():
    http = mock_http_client(lambda r: httpx.Response(401, json={"detail": "bad key"}))

    with pytest.raises(ResumeParserAPIError, match="Resume parsing failed: Unauthorized"):
        await parse_with_affinda("bad", "cv.pdf", "application/pdf", b"%PDF", http_client=http)


async def test_parse_with_affinda_uploads_file():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=AFFINDA_DOCUMENT)

    result = await parse_with_affinda(
        "key", "grace.pdf", "application/pdf", b"%PDF-1.4 data", http_client=mock_http_client(handler)
    )

    assert result["personalInfo"]["name"] == "Grace Hopper"
    request = requests[0]
    assert str(request.url) == "https://api.affinda.com/v3/documents"
    assert request.headers["Authorization"] == "Bearer key"
    assert b'filename="grace.pdf"' in request.content
