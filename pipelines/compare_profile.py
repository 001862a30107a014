from __future__ import annotations

import time
from typing import Callable, Optional

import sources  # noqa: F401 ensure registration
from config.reference_profile import REFERENCE_PROFILE
from config.settings import Settings, get_settings, require_credentials
from models import Profile
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import AcquireProfile, CompareProfiles, ValidateProfileUrl
from ports.llm import LLMClientPort
from ports.scrape_backend import ScrapeBackendPort
from services.apify_backend import ApifyBackend
from services.comparator import Comparator
from services.llm_client import LLMClient
from services.orchestrator import ScrapeOrchestrator
from services.run_poller import RunPoller
from sources.registry import get_providers


def build_compare_pipeline(
    settings: Optional[Settings] = None,
    *,
    backend: Optional[ScrapeBackendPort] = None,
    llm: Optional[LLMClientPort] = None,
    reference: Optional[Profile] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Pipeline:
    """Wire URL validation, profile acquisition and comparison.

    Real Apify/OpenAI clients are built only for collaborators that are not
    injected, and only then are credentials required.
    """
    settings = settings or get_settings()
    if backend is None or llm is None:
        require_credentials(settings)
    backend = backend or ApifyBackend(settings)
    llm = llm or LLMClient(settings)

    poller = RunPoller(backend, sleep=sleep, settings=settings)
    orchestrator = ScrapeOrchestrator(poller, get_providers, strict=settings.scrape_strict)
    comparator = Comparator(llm, reference or REFERENCE_PROFILE, max_tokens=settings.llm_max_tokens)
    return Pipeline([
        ValidateProfileUrl(),
        AcquireProfile(orchestrator),
        CompareProfiles(comparator),
    ])


def compare_profile_url(url: str, pipeline: Optional[Pipeline] = None) -> RunContext:
    pipeline = pipeline or build_compare_pipeline()
    return pipeline.run(RunContext(url=url))
