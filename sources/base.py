from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

from models import ProfileKind


InputBuilder = Callable[[str], Dict[str, Any]]


@dataclass(frozen=True)
class ProviderSpec:
    """One scraping actor and the input shape it expects for a profile URL."""

    identity: str
    kind: ProfileKind
    build_input: InputBuilder
    description: str = ""
