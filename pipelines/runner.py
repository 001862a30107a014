from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from models import ComparisonResult, Profile, ProfileKind
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """State handed from step to step for one profile comparison."""

    url: Optional[str] = None
    kind: Optional[ProfileKind] = None
    profile: Optional[Profile] = None
    result: Optional[ComparisonResult] = None
    run_id: Optional[str] = field(default_factory=lambda: os.getenv("RUN_ID"))
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        init_logging()
        for step in self.steps:
            name = type(step).__name__
            t0 = time.time()
            try:
                ctx = step.run(ctx)
            except Exception as e:
                logger.warning(
                    f"{name} stopped the run",
                    extra={"step": name, "status": "error", "error": str(e), "run_id": ctx.run_id or "-"},
                )
                raise
            logger.debug(
                f"{name} done",
                extra={"step": name, "status": "ok", "duration_ms": int((time.time() - t0) * 1000), "run_id": ctx.run_id or "-"},
            )
        return ctx
