from __future__ import annotations

from pipelines.runner import RunContext
from services.domain_utils import detect_profile_kind


class ValidateProfileUrl:
    """Classify ctx.url; raises InvalidInput before any network call."""

    def run(self, ctx: RunContext) -> RunContext:
        ctx.url = (ctx.url or "").strip()
        ctx.kind = detect_profile_kind(ctx.url)
        return ctx
