from .resume import Resume, AnalysisSource
from .api_config import StoredAPIConfig
from .chat import ChatMessage, ChatRole

__all__ = [
    "Resume", "AnalysisSource",
    "StoredAPIConfig",
    "ChatMessage", "ChatRole",
]
