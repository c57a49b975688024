"""
Static sample data served when no AI provider is configured or a call fails.

Payloads are camelCase, exactly as the dashboards consume them.
"""
import copy
from typing import Any, Dict, List

MOCK_SKILLS: List[Dict[str, Any]] = [
    {"name": "React", "level": "Advanced", "category": "Frontend", "demand": 95, "inResume": True},
    {"name": "TypeScript", "level": "Intermediate", "category": "Programming", "demand": 90, "inResume": True},
    {"name": "Node.js", "level": "Intermediate", "category": "Backend", "demand": 85, "inResume": True},
    {"name": "Python", "level": "Beginner", "category": "Programming", "demand": 88, "inResume": False},
    {"name": "AWS", "level": "Beginner", "category": "Cloud", "demand": 92, "inResume": False},
    {"name": "Docker", "level": "Intermediate", "category": "DevOps", "demand": 80, "inResume": True},
    {"name": "GraphQL", "level": "Beginner", "category": "API", "demand": 75, "inResume": False},
    {"name": "MongoDB", "level": "Intermediate", "category": "Database", "demand": 70, "inResume": True},
]

MOCK_SKILL_GAPS: List[Dict[str, Any]] = [
    {
        "skill": "Python",
        "category": "Programming",
        "importance": 95,
        "marketDemand": 88,
        "difficulty": "Medium",
        "timeToLearn": "2-3 months",
        "resources": [
            {
                "id": "1",
                "title": "Complete Python Bootcamp",
                "type": "course",
                "provider": "Udemy",
                "rating": 4.8,
                "duration": "40 hours",
                "cost": "Paid",
                "url": "#",
                "description": "Comprehensive Python course from basics to advanced topics",
            },
            {
                "id": "2",
                "title": "Python for Everybody",
                "type": "course",
                "provider": "Coursera",
                "rating": 4.7,
                "duration": "30 hours",
                "cost": "Free",
                "url": "#",
                "description": "University of Michigan Python specialization",
            },
        ],
    },
    {
        "skill": "AWS",
        "category": "Cloud",
        "importance": 90,
        "marketDemand": 92,
        "difficulty": "Hard",
        "timeToLearn": "3-4 months",
        "resources": [
            {
                "id": "3",
                "title": "AWS Solutions Architect",
                "type": "certification",
                "provider": "AWS",
                "rating": 4.9,
                "duration": "60 hours",
                "cost": "Premium",
                "url": "#",
                "description": "Official AWS certification preparation",
            },
        ],
    },
    {
        "skill": "Machine Learning",
        "category": "AI/ML",
        "importance": 85,
        "marketDemand": 95,
        "difficulty": "Hard",
        "timeToLearn": "4-6 months",
        "resources": [
            {
                "id": "4",
                "title": "Machine Learning Specialization",
                "type": "course",
                "provider": "Coursera",
                "rating": 4.9,
                "duration": "80 hours",
                "cost": "Paid",
                "url": "#",
                "description": "Stanford University ML course by Andrew Ng",
            },
        ],
    },
]

MOCK_ATS_SUGGESTIONS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "category": "keywords",
        "severity": "high",
        "title": "Add Industry Keywords",
        "description": 'Include more relevant industry keywords like "agile", "scrum", "CI/CD"',
        "impact": 25,
    },
    {
        "id": "2",
        "category": "formatting",
        "severity": "medium",
        "title": "Improve Section Headers",
        "description": 'Use standard section headers like "Work Experience" instead of "Professional Journey"',
        "impact": 15,
    },
    {
        "id": "3",
        "category": "structure",
        "severity": "low",
        "title": "Quantify Achievements",
        "description": 'Add more numerical metrics to demonstrate impact (e.g., "Improved performance by 30%")',
        "impact": 20,
    },
]

MOCK_FILE_NAME = "john_doe_resume.pdf"
MOCK_CONTENT = "Mock resume content..."

MOCK_PARSED_DATA: Dict[str, Any] = {
    "personalInfo": {
        "name": "John Doe",
        "email": "john.doe@email.com",
        "phone": "+1 (555) 123-4567",
        "location": "San Francisco, CA",
        "linkedin": "linkedin.com/in/johndoe",
        "github": "github.com/johndoe",
    },
    "summary": "Experienced full-stack developer with 5+ years of experience building scalable web applications.",
    "experience": [
        {
            "id": "1",
            "company": "Tech Innovations Inc.",
            "position": "Senior Full Stack Developer",
            "duration": "2022 - Present",
            "description": [
                "Led development of customer-facing web applications serving 100k+ users",
                "Implemented CI/CD pipelines reducing deployment time by 60%",
                "Mentored junior developers and conducted code reviews",
            ],
            "technologies": ["React", "Node.js", "TypeScript", "MongoDB"],
        },
        {
            "id": "2",
            "company": "StartupXYZ",
            "position": "Full Stack Developer",
            "duration": "2020 - 2022",
            "description": [
                "Built and maintained RESTful APIs handling 1M+ requests daily",
                "Collaborated with design team to implement responsive UI components",
                "Optimized database queries improving application performance by 40%",
            ],
            "technologies": ["React", "Express.js", "PostgreSQL", "Docker"],
        },
    ],
    "education": [
        {
            "id": "1",
            "institution": "University of California, Berkeley",
            "degree": "Bachelor of Science in Computer Science",
            "year": "2020",
            "gpa": "3.8",
        },
    ],
    "skills": ["React", "TypeScript", "Node.js", "Docker", "MongoDB", "Git", "Agile"],
    "certifications": ["AWS Cloud Practitioner", "Certified Scrum Master"],
}

MOCK_ANALYSIS: Dict[str, Any] = {
    "atsScore": 78,
    "skillsAnalysis": {
        "technical": [s for s in MOCK_SKILLS if s["inResume"]],
        "soft": [],
        "trending": [s for s in MOCK_SKILLS if s["demand"] > 85],
        "missing": [s for s in MOCK_SKILLS if not s["inResume"]],
    },
    "suggestions": MOCK_ATS_SUGGESTIONS,
    "skillGaps": MOCK_SKILL_GAPS,
    "overallScore": 82,
}


def mock_parsed_data() -> Dict[str, Any]:
    return copy.deepcopy(MOCK_PARSED_DATA)


def mock_analysis() -> Dict[str, Any]:
    return copy.deepcopy(MOCK_ANALYSIS)


# ============================================================================
# Chat
# ============================================================================

WELCOME_MESSAGE_WITH_KEY = (
    "Hello! I'm your AI career advisor. I can help you with resume optimization, career planning, "
    "skill development, and job search strategies. What would you like to know?"
)

WELCOME_MESSAGE_WITHOUT_KEY = (
    "Hello! I'm your career advisor. No AI provider is configured yet, so I'll answer from a set of "
    "prepared guides on resume optimization, career planning, skill development, and job search "
    "strategies. What would you like to know?"
)

CHAT_ERROR_MESSAGE = (
    "I apologize, but I encountered an error processing your request. "
    "Please check your API configuration or try again later."
)

QUICK_SUGGESTIONS = [
    {"text": "How can I improve my resume?", "category": "Resume"},
    {"text": "What skills should I learn next?", "category": "Skills"},
    {"text": "How to prepare for interviews?", "category": "Interview"},
]

# (keywords, reply) - first entry with a keyword contained in the message wins
CANNED_REPLIES = [
    (
        ("resume", "cv"),
        "Based on your resume analysis, I recommend focusing on these key areas:\n\n"
        "1. **Keywords**: Add more industry-specific keywords like 'agile', 'CI/CD', and 'microservices'\n"
        "2. **Quantify achievements**: Include metrics like '30% performance improvement' or 'managed team of 5'\n"
        "3. **ATS optimization**: Use standard section headers and avoid complex formatting\n\n"
        "Your current ATS score is 78/100. With these improvements, you could reach 90+!",
    ),
    (
        ("skill", "learn"),
        "Great question! Based on your current skills and market trends, I recommend prioritizing:\n\n"
        "**High Priority:**\n"
        "• Python - High demand (88%) and complements your existing skills\n"
        "• AWS - Cloud skills are essential (92% market demand)\n"
        "• Machine Learning - Growing field with excellent career prospects\n\n"
        "**Time Investment:**\n"
        "• Python: 2-3 months (Medium difficulty)\n"
        "• AWS: 3-4 months (Hard difficulty)\n"
        "• ML: 4-6 months (Hard difficulty)\n\n"
        "Would you like me to create a personalized learning path for any of these?",
    ),
    (
        ("interview", "prepare"),
        "Excellent! Interview preparation is crucial. Here's a comprehensive approach:\n\n"
        "**Technical Interview Prep:**\n"
        "• Review your resume projects in detail\n"
        "• Practice coding problems on LeetCode/HackerRank\n"
        "• Prepare system design scenarios\n\n"
        "**Behavioral Questions:**\n"
        "• Use the STAR method (Situation, Task, Action, Result)\n"
        "• Prepare stories about challenges, leadership, and growth\n"
        "• Research the company culture and values\n\n"
        "**Questions to Ask:**\n"
        "• Team structure and collaboration\n"
        "• Growth opportunities and career paths\n"
        "• Technical challenges and architecture\n\n"
        "Would you like me to help you practice specific types of questions?",
    ),
    (
        ("salary", "negotiate"),
        "Salary negotiation is an important skill! Here's how to approach it:\n\n"
        "**Research Phase:**\n"
        "• Use Glassdoor, PayScale, and levels.fyi for market data\n"
        "• Consider location, experience, and company size\n"
        "• Factor in total compensation (base + equity + benefits)\n\n"
        "**Negotiation Strategy:**\n"
        "• Wait for the offer before discussing salary\n"
        "• Present your case with data and achievements\n"
        "• Be flexible - consider non-salary benefits\n"
        "• Stay professional and positive\n\n"
        "**Your Market Position:**\n"
        "With your current skills (React, TypeScript, Node.js), you're in a strong position. "
        "Adding Python and AWS could increase your market value by 15-25%.\n\n"
        "Need help preparing your negotiation talking points?",
    ),
    (
        ("career", "path", "growth"),
        "Let's map out your career trajectory! Based on your profile:\n\n"
        "**Current Position:** Senior Full Stack Developer\n"
        "**Experience:** 5+ years\n"
        "**Strengths:** React, TypeScript, Node.js\n\n"
        "**Potential Career Paths:**\n\n"
        "1. **Technical Leadership**\n"
        "   • Tech Lead → Engineering Manager → Director\n"
        "   • Focus: Team management, architecture decisions\n"
        "   • Timeline: 2-3 years to Tech Lead\n\n"
        "2. **Technical Specialist**\n"
        "   • Senior → Staff → Principal Engineer\n"
        "   • Focus: Deep technical expertise, system design\n"
        "   • Timeline: 3-5 years to Staff level\n\n"
        "3. **Product Engineering**\n"
        "   • Full Stack → Product Engineer → Head of Product Engineering\n"
        "   • Focus: User-centric development, product strategy\n"
        "   • Timeline: 2-4 years transition\n\n"
        "What resonates most with your interests and goals?",
    ),
]

DEFAULT_CANNED_REPLY = (
    "I'd be happy to help you with that! I can assist with:\n\n"
    "• **Resume optimization** - ATS scoring, keyword suggestions, formatting\n"
    "• **Skill development** - Gap analysis, learning paths, certifications\n"
    "• **Career planning** - Growth strategies, role transitions, market insights\n"
    "• **Interview preparation** - Technical and behavioral question practice\n"
    "• **Salary negotiation** - Market research, negotiation strategies\n\n"
    "What specific area would you like to explore further?"
)


def canned_reply(message: str) -> str:
    """Keyword-routed reply used when no AI provider is configured."""
    lowered = message.lower()
    for keywords, reply in CANNED_REPLIES:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return DEFAULT_CANNED_REPLY
