from typing import Any, Optional, Sequence
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire (both accepted on input)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        # Models return ids, years and list entries as numbers as often as strings
        coerce_numbers_to_str = True


def clamp_score(value: Any, low: int = 0, high: int = 100) -> int:
    """Coerce a model-provided score to an int within [low, high]; junk becomes low."""
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError):
        return low
    return max(low, min(high, number))


def coerce_choice(value: Any, choices: Sequence[str], default: str) -> str:
    """Case-insensitive match of value against choices, falling back to default."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        for choice in choices:
            if choice.lower() == lowered:
                return choice
    return default


def none_to_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    return list(value)


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
