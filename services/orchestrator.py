from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from models import Profile, ProfileKind
from services.domain_utils import extract_handle
from services.errors import ScrapeExhausted
from services.mapping import degraded_profile, normalize_records
from services.run_poller import RunPoller
from sources.base import ProviderSpec


logger = logging.getLogger(__name__)

C = TypeVar("C")
R = TypeVar("R")


def first_successful(
    candidates: Iterable[C],
    attempt: Callable[[C], Optional[R]],
    on_error: Optional[Callable[[C, Exception], None]] = None,
) -> Optional[Tuple[C, R]]:
    """Try candidates in order and return the first (candidate, result) pair.

    A candidate is skipped when ``attempt`` returns None or raises; errors go
    to ``on_error``. Returns None once every candidate has been tried.
    """
    for candidate in candidates:
        try:
            result = attempt(candidate)
        except Exception as e:
            if on_error is not None:
                on_error(candidate, e)
            continue
        if result is not None:
            return candidate, result
    return None


class ScrapeOrchestrator:
    """Acquire a Profile for a URL by walking the provider list in order."""

    def __init__(
        self,
        poller: RunPoller,
        providers: Callable[[ProfileKind], Sequence[ProviderSpec]],
        *,
        strict: bool = False,
    ):
        self.poller = poller
        self.providers = providers
        self.strict = strict

    def acquire(self, url: str, kind: ProfileKind) -> Profile:
        errors: List[str] = []
        handle = extract_handle(url, kind)

        def _attempt(spec: ProviderSpec) -> Optional[Profile]:
            t0 = time.time()
            run_input = spec.build_input(url)
            records = self.poller.run(spec.identity, run_input)
            duration_ms = int((time.time() - t0) * 1000)
            if not records:
                logger.info(
                    f"{spec.identity} returned no items, trying next provider",
                    extra={"step": "scrape", "provider": spec.identity, "status": "empty", "duration_ms": duration_ms},
                )
                errors.append(f"{spec.identity}: no items")
                return None
            logger.info(
                f"{spec.identity} returned {len(records)} item(s)",
                extra={"step": "scrape", "provider": spec.identity, "status": "ok", "duration_ms": duration_ms},
            )
            return normalize_records(records, kind, handle)

        def _on_error(spec: ProviderSpec, exc: Exception) -> None:
            errors.append(f"{spec.identity}: {exc}")
            logger.warning(
                f"{spec.identity} failed, trying next provider",
                extra={"step": "scrape", "provider": spec.identity, "status": "error", "error": str(exc)},
            )

        try:
            specs = self.providers(kind)
        except KeyError as e:
            logger.error(str(e), extra={"step": "scrape", "status": "error"})
            specs = ()

        found = first_successful(specs, _attempt, _on_error)
        if found is not None:
            return found[1]

        exhausted = ScrapeExhausted(kind.label, errors)
        if self.strict:
            raise exhausted
        logger.warning(
            "Every provider failed, continuing with a profile derived from the URL",
            extra={"step": "scrape", "status": "degraded", "error": str(exhausted)},
        )
        return degraded_profile(handle)
