from .config import router as config_router
from .resumes import router as resumes_router
from .chat import router as chat_router

__all__ = [
    "config_router", "resumes_router", "chat_router"
]
