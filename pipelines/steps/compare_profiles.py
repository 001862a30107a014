from __future__ import annotations

import time

from models import Profile
from pipelines.runner import RunContext
from services.comparator import Comparator


class CompareProfiles:
    def __init__(self, comparator: Comparator) -> None:
        self.comparator = comparator

    def run(self, ctx: RunContext) -> RunContext:
        t0 = time.time()
        ctx.result = self.comparator.compare(ctx.profile or Profile())
        ctx.meta["compare_ms"] = int((time.time() - t0) * 1000)
        ctx.meta["result_source"] = ctx.result.source
        return ctx
