import pytest

from resume_ai.schemas.config import APIConfig
from resume_ai.services.config_store import (
    ConfigValidationError,
    effective_config,
    get_config_status,
    get_stored_config,
    load_api_config,
    mask_key,
    reset_api_config,
    save_api_config,
)


@pytest.mark.parametrize("key, masked", [
    (None, None),
    ("", None),
    ("short", "*****"),
    ("12345678", "********"),
    ("sk-abcdefghij1234", "sk-a*********1234"),
])
def test_mask_key(key, masked):
    assert mask_key(key) == masked


def test_blank_keys_are_unset():
    config = APIConfig(openai_api_key="   ", gemini_api_key="g")
    assert config.openai_api_key is None
    assert config.has_ai_key


async def test_environment_config_is_used_until_saved(db):
    assert (await load_api_config(db)).has_ai_key is False

    await save_api_config(db, APIConfig(gemini_api_key="AIza-1234567890"))
    loaded = await load_api_config(db)
    assert loaded.gemini_api_key == "AIza-1234567890"

    status = await get_config_status(db)
    assert status.source == "stored"
    assert status.active_provider == "gemini"

    await reset_api_config(db)
    assert (await get_config_status(db)).source == "environment"


async def test_save_requires_ai_key(db):
    with pytest.raises(ConfigValidationError):
        await save_api_config(db, APIConfig(skills_api_key="s", job_market_api_key="j"))


async def test_status_reports_the_effective_config(db):
    await save_api_config(db, APIConfig(anthropic_api_key="sk-ant-abcdefgh", skills_api_key="skills"))

    effective = effective_config(await get_stored_config(db))
    status = await get_config_status(db)

    assert effective == await load_api_config(db)
    assert status.configured == [field for field, value in effective.model_dump().items() if value]
    assert status.active_provider == "anthropic"


def test_effective_config_without_saved_row_uses_environment():
    assert effective_config(None) == APIConfig()
