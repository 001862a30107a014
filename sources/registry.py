from __future__ import annotations

from typing import Dict, List, Tuple

from models import ProfileKind
from sources.base import ProviderSpec


# Registration order is fallback order: first registered, first tried
_REGISTRY: Dict[ProfileKind, List[ProviderSpec]] = {}


def register(spec: ProviderSpec) -> None:
    providers = _REGISTRY.setdefault(spec.kind, [])
    if any(p.identity == spec.identity for p in providers):
        return
    providers.append(spec)


def get_providers(kind: ProfileKind) -> Tuple[ProviderSpec, ...]:
    if kind not in _REGISTRY:
        raise KeyError(f"No providers registered for: {kind.value}")
    return tuple(_REGISTRY[kind])


def available_providers() -> Dict[ProfileKind, Tuple[ProviderSpec, ...]]:
    return {kind: tuple(specs) for kind, specs in _REGISTRY.items()}
