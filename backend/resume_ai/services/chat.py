"""
Career advisor chat.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ChatMessage, ChatRole, Resume
from ..schemas.chat import ChatMessageResponse
from ..schemas.config import APIConfig
from .ai_client import AIServiceError, create_ai_service
from .analysis import to_response
from .mock_data import (
    CHAT_ERROR_MESSAGE,
    WELCOME_MESSAGE_WITH_KEY,
    WELCOME_MESSAGE_WITHOUT_KEY,
    canned_reply,
)

logger = logging.getLogger(__name__)


class EmptyMessageError(ValueError):
    pass


def welcome_message(config: APIConfig) -> ChatMessageResponse:
    content = WELCOME_MESSAGE_WITH_KEY if config.has_ai_key else WELCOME_MESSAGE_WITHOUT_KEY
    return ChatMessageResponse(
        type=ChatRole.ASSISTANT,
        content=content,
        timestamp=datetime.now(timezone.utc),
    )


async def _add_message(db: AsyncSession, role: ChatRole, content: str, resume_id: Optional[int]) -> ChatMessage:
    message = ChatMessage(type=role, content=content, resume_id=resume_id)
    db.add(message)
    await db.flush()
    return message


async def chat_with_advisor(
    db: AsyncSession,
    message: str,
    config: APIConfig,
    resume: Optional[Resume] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ChatMessage:
    """
    Record the user's message and the advisor's reply; return the reply.

    With an AI key the reply comes from the active provider, with the resume
    (if any) as context. Without one it is a canned, keyword-routed answer.
    Provider failures produce a fixed apology instead of an error.
    """
    if not message or not message.strip():
        raise EmptyMessageError("Message must not be empty")

    resume_id = resume.id if resume is not None else None
    await _add_message(db, ChatRole.USER, message, resume_id)

    if config.has_ai_key:
        context = to_response(resume).model_dump(mode="json", by_alias=True) if resume is not None else None
        try:
            reply = await create_ai_service(config, http_client=http_client).chat(message, context)
        except AIServiceError as e:
            logger.warning(f"Chat request failed: {e}")
            reply = CHAT_ERROR_MESSAGE
    else:
        reply = canned_reply(message)

    return await _add_message(db, ChatRole.ASSISTANT, reply, resume_id)


async def get_history(db: AsyncSession, resume_id: Optional[int] = None) -> List[ChatMessage]:
    """Messages oldest first, for one resume or for the resume-less conversation."""
    query = select(ChatMessage)
    if resume_id is None:
        query = query.where(ChatMessage.resume_id.is_(None))
    else:
        query = query.where(ChatMessage.resume_id == resume_id)
    result = await db.execute(query.order_by(ChatMessage.timestamp, ChatMessage.id))
    return list(result.scalars().all())


async def clear_history(db: AsyncSession, resume_id: Optional[int] = None) -> int:
    query = delete(ChatMessage)
    if resume_id is None:
        query = query.where(ChatMessage.resume_id.is_(None))
    else:
        query = query.where(ChatMessage.resume_id == resume_id)
    result = await db.execute(query)
    return result.rowcount or 0
