from __future__ import annotations

from typing import Any, Dict, List, Protocol

from models import RunHandle, RunState


class ScrapeBackendPort(Protocol):
    def submit_run(self, identity: str, run_input: Dict[str, Any]) -> RunHandle:
        ...

    def get_run_status(self, run_id: str) -> RunState:
        ...

    def list_run_results(self, dataset_id: str) -> List[Dict[str, Any]]:
        ...
