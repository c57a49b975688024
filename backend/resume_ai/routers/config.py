"""
Config Router - API key management
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.config import APIConfig, APIConfigStatus
from ..services.config_store import (
    ConfigValidationError,
    get_config_status,
    reset_api_config,
    save_api_config,
)

router = APIRouter(prefix="/api/config", tags=["Configuration"])


@router.get("", response_model=APIConfigStatus)
async def read_config(db: AsyncSession = Depends(get_db)):
    """Which keys are set and which provider is active. Keys are masked."""
    return await get_config_status(db)


@router.put("", response_model=APIConfigStatus)
async def update_config(config: APIConfig, db: AsyncSession = Depends(get_db)):
    """Save API keys. At least one of the Gemini, OpenAI or Anthropic keys is required."""
    try:
        await save_api_config(db, config)
    except ConfigValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    return await get_config_status(db)


@router.delete("", response_model=APIConfigStatus)
async def clear_config(db: AsyncSession = Depends(get_db)):
    """Drop saved keys; environment keys (if any) apply again."""
    await reset_api_config(db)
    return await get_config_status(db)
