from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RunStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not RunStatus.PENDING


class RunHandle(BaseModel):
    """Identifies one submitted scrape run and the dataset it writes to."""

    run_id: str
    dataset_id: str

    model_config = ConfigDict(frozen=True)


class RunState(BaseModel):
    status: RunStatus
    status_message: str | None = None

    model_config = ConfigDict(frozen=True)
