from typing import Optional

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .schemas.config import APIConfig
from .services.config_store import load_api_config


def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    """Shared outbound client opened in the app lifespan (None outside it)."""
    return getattr(request.app.state, "http_client", None)


async def get_api_config(db: AsyncSession = Depends(get_db)) -> APIConfig:
    return await load_api_config(db)
