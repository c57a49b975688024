from datetime import datetime
from typing import Optional
from pydantic import Field

from ..models.chat import ChatRole
from .base import CamelModel


class ChatRequest(CamelModel):
    message: str = Field(..., description="User message to the career advisor")
    resume_id: Optional[int] = Field(None, description="Resume to use as conversation context")


class ChatMessageResponse(CamelModel):
    id: Optional[int] = None
    type: ChatRole
    content: str
    timestamp: datetime


class QuickSuggestion(CamelModel):
    text: str
    category: str
