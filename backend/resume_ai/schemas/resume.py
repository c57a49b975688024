"""
Resume, parsed data and analysis schemas.

These double as validators for model output: providers return loosely typed
JSON, so scores are clamped, enum-like strings coerced and nulls turned into
empty lists rather than rejected.
"""
from datetime import date
from typing import List, Literal, Optional
from pydantic import Field, field_validator, model_validator

from ..models.resume import AnalysisSource
from .base import CamelModel, clamp_score, coerce_choice, none_to_list, optional_text

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")
SUGGESTION_CATEGORIES = ("formatting", "keywords", "structure", "content")
SEVERITIES = ("low", "medium", "high")
DIFFICULTIES = ("Easy", "Medium", "Hard")
RESOURCE_TYPES = ("course", "certification", "book", "tutorial", "practice")
COSTS = ("Free", "Paid", "Premium")


def _assign_ids(items) -> None:
    for index, item in enumerate(items, start=1):
        if not item.id:
            item.id = str(index)


# ============================================================================
# Parsed resume
# ============================================================================

class PersonalInfo(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _text(cls, v):
        return optional_text(v)


class WorkExperience(CamelModel):
    id: str = ""
    company: str = ""
    position: str = ""
    duration: str = ""
    description: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)

    @field_validator("company", "position", "duration", mode="before")
    @classmethod
    def _blank_if_null(cls, v):
        return "" if v is None else str(v)

    @field_validator("description", "technologies", mode="before")
    @classmethod
    def _as_list(cls, v):
        return none_to_list(v)


class Education(CamelModel):
    id: str = ""
    institution: str = ""
    degree: str = ""
    year: str = ""
    gpa: Optional[str] = None

    @field_validator("institution", "degree", "year", mode="before")
    @classmethod
    def _blank_if_null(cls, v):
        return "" if v is None else str(v)

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa_text(cls, v):
        return optional_text(v)


class ParsedResumeData(CamelModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: Optional[str] = None
    experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    @field_validator("personal_info", mode="before")
    @classmethod
    def _personal_info(cls, v):
        return v or {}

    @field_validator("experience", "education", "skills", "certifications", mode="before")
    @classmethod
    def _as_list(cls, v):
        return none_to_list(v)

    @model_validator(mode="after")
    def _number_entries(self):
        _assign_ids(self.experience)
        _assign_ids(self.education)
        return self


# ============================================================================
# Analysis
# ============================================================================

class Skill(CamelModel):
    name: str
    level: Literal["Beginner", "Intermediate", "Advanced", "Expert"] = "Intermediate"
    category: str = "General"
    demand: int = 0
    in_resume: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, v):
        return coerce_choice(v, SKILL_LEVELS, "Intermediate")

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return optional_text(v) or "General"

    @field_validator("demand", mode="before")
    @classmethod
    def _demand(cls, v):
        return clamp_score(v)


class ATSSuggestion(CamelModel):
    id: str = ""
    category: Literal["formatting", "keywords", "structure", "content"] = "content"
    severity: Literal["low", "medium", "high"] = "medium"
    title: str
    description: str = ""
    impact: int = 0

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return coerce_choice(v, SUGGESTION_CATEGORIES, "content")

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v):
        return coerce_choice(v, SEVERITIES, "medium")

    @field_validator("impact", mode="before")
    @classmethod
    def _impact(cls, v):
        return clamp_score(v)


class Resource(CamelModel):
    id: str = ""
    title: str
    type: Literal["course", "certification", "book", "tutorial", "practice"] = "course"
    provider: str = ""
    rating: float = 0.0
    duration: str = ""
    cost: Literal["Free", "Paid", "Premium"] = "Paid"
    url: str = "#"
    description: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v):
        return coerce_choice(v, RESOURCE_TYPES, "course")

    @field_validator("cost", mode="before")
    @classmethod
    def _cost(cls, v):
        return coerce_choice(v, COSTS, "Paid")


class SkillGap(CamelModel):
    skill: str
    category: str = "General"
    importance: int = 0
    market_demand: int = 0
    difficulty: Literal["Easy", "Medium", "Hard"] = "Medium"
    time_to_learn: str = ""
    resources: List[Resource] = Field(default_factory=list)

    @field_validator("importance", "market_demand", mode="before")
    @classmethod
    def _score(cls, v):
        return clamp_score(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _difficulty(cls, v):
        return coerce_choice(v, DIFFICULTIES, "Medium")

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return optional_text(v) or "General"

    @field_validator("time_to_learn", mode="before")
    @classmethod
    def _time(cls, v):
        return "" if v is None else str(v)

    @field_validator("resources", mode="before")
    @classmethod
    def _as_list(cls, v):
        return none_to_list(v)


class SkillsAnalysis(CamelModel):
    technical: List[Skill] = Field(default_factory=list)
    soft: List[Skill] = Field(default_factory=list)
    trending: List[Skill] = Field(default_factory=list)
    missing: List[Skill] = Field(default_factory=list)


class ResumeAnalysis(CamelModel):
    ats_score: int = 0
    skills_analysis: SkillsAnalysis = Field(default_factory=SkillsAnalysis)
    suggestions: List[ATSSuggestion] = Field(default_factory=list)
    skill_gaps: List[SkillGap] = Field(default_factory=list)
    overall_score: int = 0

    @field_validator("ats_score", "overall_score", mode="before")
    @classmethod
    def _score(cls, v):
        return clamp_score(v)

    @model_validator(mode="after")
    def _number_entries(self):
        _assign_ids(self.suggestions)
        return self


# ============================================================================
# Raw skills assessment returned by the model
# ============================================================================

class MissingSkill(CamelModel):
    name: str
    importance: int = 0
    market_demand: int = 0
    category: str = "General"

    @field_validator("importance", "market_demand", mode="before")
    @classmethod
    def _score(cls, v):
        return clamp_score(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v):
        return optional_text(v) or "General"


class SkillsAssessment(CamelModel):
    """Shape requested from the model by the skills-analysis prompt."""
    technical_skills: List[Skill] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)
    missing_skills: List[MissingSkill] = Field(default_factory=list)
    ats_score: int = 0
    suggestions: List[ATSSuggestion] = Field(default_factory=list)
    overall_score: int = 0
    skill_gaps: List[SkillGap] = Field(default_factory=list)

    @field_validator(
        "technical_skills", "missing_skills", "suggestions", "skill_gaps",
        mode="before",
    )
    @classmethod
    def _as_list(cls, v):
        return none_to_list(v)

    @field_validator("soft_skills", mode="before")
    @classmethod
    def _soft_skill_names(cls, v):
        # Models sometimes return soft skills as objects rather than strings
        return [item.get("name", "") if isinstance(item, dict) else item for item in none_to_list(v)]

    @field_validator("soft_skills", mode="after")
    @classmethod
    def _drop_blank(cls, v):
        return [name.strip() for name in v if name.strip()]

    @field_validator("ats_score", "overall_score", mode="before")
    @classmethod
    def _score(cls, v):
        return clamp_score(v)


# ============================================================================
# API responses
# ============================================================================

class ResumeResponse(CamelModel):
    id: int
    file_name: str
    upload_date: date
    content: str = ""
    job_description: Optional[str] = None
    parsed_data: ParsedResumeData
    analysis: ResumeAnalysis
    source: AnalysisSource
    provider: Optional[str] = None
    fallback_reason: Optional[str] = None


class ResumeSummary(CamelModel):
    id: int
    file_name: str
    upload_date: date
    source: AnalysisSource
    provider: Optional[str] = None
    ats_score: int
    overall_score: int


class ATSReport(CamelModel):
    ats_score: int
    suggestions: List[ATSSuggestion]


class SkillsReport(CamelModel):
    skills_analysis: SkillsAnalysis
    skill_gaps: List[SkillGap]
