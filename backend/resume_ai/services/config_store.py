"""
API key configuration: environment defaults, overridden by keys saved through the API.
"""
import logging
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..models import StoredAPIConfig
from ..schemas.config import APIConfig, APIConfigStatus
from .ai_client import select_provider

logger = logging.getLogger(__name__)

CONFIG_ROW_ID = 1
KEY_FIELDS = tuple(APIConfig.model_fields)


class ConfigValidationError(ValueError):
    pass


def config_from_settings(settings: Optional[Settings] = None) -> APIConfig:
    settings = settings or get_settings()
    return APIConfig(**{field: getattr(settings, field) for field in KEY_FIELDS})


async def get_stored_config(db: AsyncSession) -> Optional[StoredAPIConfig]:
    result = await db.execute(select(StoredAPIConfig).where(StoredAPIConfig.id == CONFIG_ROW_ID))
    return result.scalar_one_or_none()


def effective_config(stored: Optional[StoredAPIConfig]) -> APIConfig:
    """The saved row when present, else environment settings."""
    if stored is None:
        return config_from_settings()
    return APIConfig.model_validate(stored)


async def load_api_config(db: AsyncSession) -> APIConfig:
    return effective_config(await get_stored_config(db))


async def save_api_config(db: AsyncSession, config: APIConfig) -> APIConfig:
    """Validate and upsert the saved configuration."""
    if not config.has_ai_key:
        raise ConfigValidationError(
            "Please provide at least one AI API key (Gemini, OpenAI, or Anthropic)"
        )

    stored = await get_stored_config(db)
    if stored is None:
        stored = StoredAPIConfig(id=CONFIG_ROW_ID)
        db.add(stored)

    for field in KEY_FIELDS:
        setattr(stored, field, getattr(config, field))

    await db.flush()
    logger.info(f"API configuration saved; active provider: {select_provider(config)}")
    return config


async def reset_api_config(db: AsyncSession) -> None:
    """Forget saved keys and fall back to the environment."""
    await db.execute(delete(StoredAPIConfig).where(StoredAPIConfig.id == CONFIG_ROW_ID))
    logger.info("Saved API configuration cleared")


def mask_key(key: Optional[str]) -> Optional[str]:
    """Show only enough of a key to recognise it."""
    if not key:
        return None
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}{'*' * (len(key) - 8)}{key[-4:]}"


async def get_config_status(db: AsyncSession) -> APIConfigStatus:
    stored = await get_stored_config(db)
    config = effective_config(stored)
    provider = select_provider(config)

    return APIConfigStatus(
        keys=APIConfig(**{field: mask_key(getattr(config, field)) for field in KEY_FIELDS}),
        configured=[field for field in KEY_FIELDS if getattr(config, field)],
        has_ai_key=config.has_ai_key,
        active_provider=provider.value if provider else None,
        source="environment" if stored is None else "stored",
    )
