from __future__ import annotations

import logging
import os
import sys
from typing import Any

from config.settings import get_settings


_INITIALIZED: bool = False

# Third-party loggers that drown the pipeline output at INFO
_NOISY_LOGGERS = ("urllib3", "requests", "httpx", "openai")

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "step=%(step)s status=%(status)s duration_ms=%(duration_ms)s "
    "provider=%(provider)s error=%(error)s run_id=%(run_id)s"
)


class SafeExtraFormatter(logging.Formatter):
    """Formatter that tolerates missing extra fields by injecting defaults."""

    DEFAULTS: dict[str, Any] = {
        "step": "-",
        "status": "-",
        "duration_ms": "-",
        "provider": "-",
        "error": "-",
        "run_id": "-",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for key, value in self.DEFAULTS.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return super().format(record)


class RunIdFilter(logging.Filter):
    """Stamp records with the RUN_ID of the current process when none is given."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "run_id", "-") in (None, "-"):
            record.run_id = os.getenv("RUN_ID") or "-"
        return True


def init_logging(level: str | None = None) -> None:
    """Install one stderr handler on the root logger; later calls are no-ops.

    stdout is left to command output (``cli.py compare --json`` prints JSON there).
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.addFilter(RunIdFilter())
        handler.setFormatter(SafeExtraFormatter(fmt=LOG_FORMAT))
        root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _INITIALIZED = True
