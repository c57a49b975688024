"""
Prompt templates and per-provider generation parameters.
"""
import json
from typing import Any, Optional

ADVISOR_PREAMBLE = "You are an expert career advisor and resume analyst."

ANALYSIS_SYSTEM_PROMPT = (
    f"{ADVISOR_PREAMBLE} Provide detailed, actionable insights for resume improvement "
    "and career development. Always respond with valid JSON."
)

RESUME_PARSE_PROMPT = """
Parse the following resume text and extract structured information:

{resume_text}

Please provide a JSON response with the following structure:
{{
  "personalInfo": {{
    "name": "Full Name",
    "email": "email@example.com",
    "phone": "phone number",
    "location": "city, state",
    "linkedin": "linkedin url",
    "github": "github url"
  }},
  "summary": "Professional summary",
  "experience": [
    {{
      "company": "Company Name",
      "position": "Job Title",
      "duration": "Start - End",
      "description": ["bullet point 1", "bullet point 2"],
      "technologies": ["tech1", "tech2"]
    }}
  ],
  "education": [
    {{
      "institution": "School Name",
      "degree": "Degree Type",
      "year": "Graduation Year",
      "gpa": "GPA if mentioned"
    }}
  ],
  "skills": ["skill1", "skill2", "skill3"],
  "certifications": ["cert1", "cert2"]
}}

Extract only information that is clearly present in the resume. Use null for missing fields.
"""

SKILLS_ANALYSIS_PROMPT = """
Analyze the following resume and provide a detailed skills assessment:

Resume Content:
{resume_text}

{job_description_block}
Please provide a JSON response with:
{{
  "technicalSkills": [{{"name": "skill", "level": "Beginner|Intermediate|Advanced|Expert", "category": "category", "demand": 1-100}}],
  "softSkills": ["skill1", "skill2"],
  "missingSkills": [{{"name": "skill", "importance": 1-100, "marketDemand": 1-100, "category": "category"}}],
  "atsScore": 1-100,
  "suggestions": [{{"category": "keywords|formatting|structure|content", "severity": "low|medium|high", "title": "title", "description": "description", "impact": 1-30}}],
  "overallScore": 1-100,
  "skillGaps": [{{"skill": "skill name", "category": "category", "importance": 1-100, "marketDemand": 1-100, "difficulty": "Easy|Medium|Hard", "timeToLearn": "time estimate"}}]
}}
"""

CHAT_SYSTEM_PROMPT = """You are an expert career advisor and resume consultant. You help professionals improve their careers through:
- Resume optimization and ATS compatibility
- Skill gap analysis and learning recommendations
- Career path guidance and growth strategies
- Interview preparation and salary negotiation
- Industry insights and market trends

{context_block}

Provide helpful, actionable advice in a conversational tone. Be specific and practical."""


# Generation parameters, keyed by provider then task
GENERATION_PARAMS = {
    "openai": {
        "analysis": {"temperature": 0.3, "max_tokens": 3000},
        "chat": {"temperature": 0.8, "max_tokens": 1000},
    },
    "anthropic": {
        "analysis": {"max_tokens": 3000},
        "chat": {"max_tokens": 1000},
    },
    "gemini": {
        "analysis": {"temperature": 0.7, "top_k": 40, "top_p": 0.95, "max_output_tokens": 2048},
        "chat": {"temperature": 0.8, "top_k": 40, "top_p": 0.95, "max_output_tokens": 1024},
    },
}


def build_resume_parse_prompt(resume_text: str) -> str:
    return RESUME_PARSE_PROMPT.format(resume_text=resume_text)


def build_skills_analysis_prompt(resume_text: str, job_description: Optional[str] = None) -> str:
    job_description_block = ""
    if job_description and job_description.strip():
        job_description_block = f"Target Job Description:\n{job_description.strip()}\n"
    return SKILLS_ANALYSIS_PROMPT.format(
        resume_text=resume_text,
        job_description_block=job_description_block,
    )


def build_chat_system_prompt(context: Optional[Any] = None) -> str:
    context_block = ""
    if context:
        context_block = f"User Context: {json.dumps(context, default=str)}"
    return CHAT_SYSTEM_PROMPT.format(context_block=context_block)
