from typing import Literal

from pydantic import BaseModel, ValidationError

class SettingsSchema(BaseModel):
    language: Literal["fr", "en"] = "fr"
    bar_weight: float = 20.0
    default_period: Literal["7d", "30d", "90d"] = "7d"
    default_detail_exercise: int = 33
    last_seen_pr: int = 0

def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
