from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


MAX_POINTS = 4

ResultSource = Literal["llm", "fallback", "error", "guard"]


class ComparisonResult(BaseModel):
    """Talking points returned to the caller: always 1 to 4 non-empty strings."""

    points: list[str] = Field(min_length=1, max_length=MAX_POINTS)
    source: ResultSource = "llm"

    model_config = ConfigDict(frozen=True)

    @field_validator("points")
    @classmethod
    def _points_not_blank(cls, value: list[str]) -> list[str]:
        if any(not p.strip() for p in value):
            raise ValueError("comparison points must be non-empty strings")
        return value
