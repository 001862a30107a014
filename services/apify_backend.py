"""
Apify REST API gateway: submit actor runs, read run status, list dataset items.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings, get_settings
from models import RunHandle, RunState, RunStatus
from services.errors import BackendError, ConfigurationMissing


logger = logging.getLogger(__name__)


APIFY_STATUS_MAP: Dict[str, RunStatus] = {
    "READY": RunStatus.PENDING,
    "RUNNING": RunStatus.PENDING,
    # Transitional states settle into ABORTED / TIMED-OUT on a later poll
    "ABORTING": RunStatus.PENDING,
    "TIMING-OUT": RunStatus.PENDING,
    "SUCCEEDED": RunStatus.SUCCEEDED,
    "FAILED": RunStatus.FAILED,
    "ABORTED": RunStatus.ABORTED,
    "TIMED-OUT": RunStatus.TIMED_OUT,
}


def actor_path_id(identity: str) -> str:
    """Apify expects `username~actor-name` in URLs; plain actor ids pass through."""
    return identity.replace("/", "~")


def map_run_status(raw_status: Optional[str]) -> RunStatus:
    status = APIFY_STATUS_MAP.get((raw_status or "").upper())
    if status is None:
        logger.warning("Unknown run status %r, treating as pending", raw_status)
        return RunStatus.PENDING
    return status


class ApifyBackend:
    """Thin client over the Apify v2 REST endpoints used by the run poller."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.token = self.settings.apify_api_token
        self.base_url = self.settings.apify_base_url.rstrip("/")
        self.session = session or requests.Session()

        if not self.token:
            raise ConfigurationMissing(["APIFY_API_TOKEN"])

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.token}"}
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.settings.http_timeout_seconds,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise BackendError(f"{method} {path} returned {response.status_code}: {response.text[:300]}")
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{method} {path} returned non-JSON body") from e

    @staticmethod
    def _data(payload: Any, path: str) -> Dict[str, Any]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise BackendError(f"Expected a 'data' object from {path}")
        return data

    def submit_run(self, identity: str, run_input: Dict[str, Any]) -> RunHandle:
        path = f"/v2/acts/{actor_path_id(identity)}/runs"
        data = self._data(self._request("POST", path, json=run_input), path)
        run_id = data.get("id")
        dataset_id = data.get("defaultDatasetId")
        if not run_id or not dataset_id:
            raise BackendError(f"Run submitted to {identity} has no id or dataset id")
        logger.info(f"Submitted run {run_id} to {identity}", extra={"step": "submit", "provider": identity})
        return RunHandle(run_id=str(run_id), dataset_id=str(dataset_id))

    def get_run_status(self, run_id: str) -> RunState:
        path = f"/v2/actor-runs/{run_id}"
        data = self._data(self._request("GET", path), path)
        return RunState(
            status=map_run_status(data.get("status")),
            status_message=data.get("statusMessage"),
        )

    def list_run_results(self, dataset_id: str) -> List[Dict[str, Any]]:
        path = f"/v2/datasets/{dataset_id}/items"
        payload = self._request("GET", path, params={"format": "json", "clean": "true"})
        # Items endpoint returns a bare array; tolerate the wrapped form too
        if isinstance(payload, dict):
            data = payload.get("data")
            payload = data.get("items", []) if isinstance(data, dict) else payload.get("items", [])
        if not isinstance(payload, list):
            raise BackendError(f"Expected a list of items from {path}")
        return [item for item in payload if isinstance(item, dict)]
