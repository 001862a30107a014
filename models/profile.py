from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Experience(BaseModel):
    company: str = ""
    title: str = ""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Profile(BaseModel):
    """Canonical, provider-agnostic profile shape.

    Every field defaults to empty; a profile with nothing populated is valid
    but means acquisition failed upstream.
    """

    name: str = ""
    headline: str = ""
    location: str = ""
    skills: list[str] = Field(default_factory=list)
    experiences: list[Experience] = Field(default_factory=list)
    education: list[dict[str, Any]] = Field(default_factory=list)
    summary: str = ""
    tweets: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    def has_identity(self) -> bool:
        return bool(self.name or self.headline or self.summary)
