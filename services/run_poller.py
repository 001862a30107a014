from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from config.settings import Settings, get_settings
from models import RunStatus
from ports.scrape_backend import ScrapeBackendPort
from services.errors import ProviderRunFailed, ProviderRunTimedOut
from utils.call_trace import log_call


logger = logging.getLogger(__name__)


class RunPoller:
    """Submit one scrape run and wait for it to reach a terminal state.

    Polls every ``poll_interval_seconds`` for at most ``max_polls`` checks
    (5s x 60 = ~300s by default). Sleeping is the only suspension point;
    ``sleep`` is injectable so tests run instantly.
    """

    def __init__(
        self,
        backend: ScrapeBackendPort,
        *,
        poll_interval_seconds: Optional[float] = None,
        max_polls: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.backend = backend
        self.poll_interval_seconds = (
            settings.poll_interval_seconds if poll_interval_seconds is None else poll_interval_seconds
        )
        self.max_polls = settings.max_polls if max_polls is None else max_polls
        self.sleep = sleep

    def run(self, identity: str, run_input: Dict[str, Any]) -> List[Dict[str, Any]]:
        t0 = time.time()
        handle = self.backend.submit_run(identity, run_input)

        def _trace(status: str, error: Optional[str] = None, **extras: Any) -> None:
            log_call(
                kind="scrape",
                caller="run_poller.run",
                provider=identity,
                operation="actor_run",
                duration_ms=int((time.time() - t0) * 1000),
                status=status,
                error=error,
                extras={"run_id": handle.run_id, "dataset_id": handle.dataset_id, **extras},
            )

        for poll in range(1, self.max_polls + 1):
            self.sleep(self.poll_interval_seconds)
            state = self.backend.get_run_status(handle.run_id)
            logger.debug(
                f"Poll {poll}/{self.max_polls} for run {handle.run_id}: {state.status.value}",
                extra={"step": "poll", "provider": identity, "status": state.status.value},
            )
            if not state.status.is_terminal:
                continue

            duration_ms = int((time.time() - t0) * 1000)
            if state.status is RunStatus.SUCCEEDED:
                items = self.backend.list_run_results(handle.dataset_id)
                logger.info(
                    f"Run {handle.run_id} succeeded with {len(items)} item(s)",
                    extra={"step": "poll", "provider": identity, "status": "succeeded", "duration_ms": duration_ms},
                )
                _trace("ok", items=len(items), polls=poll)
                return items

            logger.warning(
                f"Run {handle.run_id} ended as {state.status.value}",
                extra={
                    "step": "poll",
                    "provider": identity,
                    "status": state.status.value,
                    "duration_ms": duration_ms,
                    "error": state.status_message or "-",
                },
            )
            _trace(state.status.value, error=state.status_message, polls=poll)
            if state.status is RunStatus.TIMED_OUT:
                raise ProviderRunTimedOut(identity)
            raise ProviderRunFailed(identity, state.status_message)

        _trace("timed_out", error=f"still pending after {self.max_polls} polls", polls=self.max_polls)
        raise ProviderRunTimedOut(identity)
