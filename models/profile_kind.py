from __future__ import annotations

from enum import Enum


class ProfileKind(str, Enum):
    LINKEDIN = "linkedin"
    TWITTER = "twitter"

    @property
    def label(self) -> str:
        return "LinkedIn" if self is ProfileKind.LINKEDIN else "Twitter"
