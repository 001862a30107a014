from __future__ import annotations

import time

from pipelines.runner import RunContext
from services.orchestrator import ScrapeOrchestrator


class AcquireProfile:
    def __init__(self, orchestrator: ScrapeOrchestrator) -> None:
        self.orchestrator = orchestrator

    def run(self, ctx: RunContext) -> RunContext:
        if ctx.url is None or ctx.kind is None:
            raise ValueError("AcquireProfile needs a validated url and kind")
        t0 = time.time()
        ctx.profile = self.orchestrator.acquire(ctx.url, ctx.kind)
        ctx.meta["scrape_ms"] = int((time.time() - t0) * 1000)
        return ctx
