"""
Chat Router - career advisor conversation
"""
from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..dependencies import get_api_config, get_http_client
from ..schemas.chat import ChatMessageResponse, ChatRequest, QuickSuggestion
from ..schemas.config import APIConfig
from ..services.analysis import get_resume
from ..services.chat import (
    EmptyMessageError,
    chat_with_advisor,
    clear_history,
    get_history,
    welcome_message,
)
from ..services.mock_data import QUICK_SUGGESTIONS

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.post("", response_model=ChatMessageResponse)
async def send_message(
    request: ChatRequest,
    db: AsyncSession = Depends(get_db),
    config: APIConfig = Depends(get_api_config),
    http_client: Optional[httpx.AsyncClient] = Depends(get_http_client),
):
    resume = None
    if request.resume_id is not None:
        resume = await get_resume(db, request.resume_id)
        if resume is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Resume not found"
            )

    try:
        return await chat_with_advisor(db, request.message, config, resume=resume, http_client=http_client)
    except EmptyMessageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/history", response_model=List[ChatMessageResponse])
async def history(
    resume_id: Optional[int] = Query(None, alias="resumeId"),
    db: AsyncSession = Depends(get_db),
    config: APIConfig = Depends(get_api_config),
):
    """Conversation so far, starting with the advisor's greeting."""
    messages = await get_history(db, resume_id)
    return [welcome_message(config), *messages]


@router.delete("/history")
async def clear(
    resume_id: Optional[int] = Query(None, alias="resumeId"),
    db: AsyncSession = Depends(get_db),
):
    deleted = await clear_history(db, resume_id)
    return {"deleted": deleted}


@router.get("/suggestions", response_model=List[QuickSuggestion])
async def suggestions():
    return QUICK_SUGGESTIONS
