from __future__ import annotations

import hashlib
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Literal, Optional


CallKind = Literal["scrape", "llm"]


def sha256_text(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def log_call(
    *,
    kind: CallKind,
    caller: str,
    provider: str,
    operation: str,
    model: Optional[str] = None,
    prompt_hash: Optional[str] = None,
    duration_ms: Optional[int] = None,
    status: str = "ok",
    error: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Append a single JSON line describing an outbound call if tracing is enabled.

    Covers both scrape runs (one line per provider attempt) and LLM
    completions. Controlled by CALL_TRACE / CALL_TRACE_PATH.
    """
    from config.settings import get_settings

    # Pick up env changes between calls (tests monkeypatch the env)
    get_settings.cache_clear()
    settings = get_settings()
    if not settings.call_trace:
        return

    log_path = Path(settings.call_trace_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "kind": kind,
        "caller": caller,
        "provider": provider,
        "model": model,
        "operation": operation,
        "prompt_hash": prompt_hash,
        "duration_ms": duration_ms,
        "status": status,
        "error": error,
        "usage": usage or {},
    }
    run_id = os.getenv("RUN_ID")
    if run_id:
        payload["run_id"] = run_id
    if extras:
        # Nested under a dedicated key to avoid collisions
        payload["extras"] = extras

    try:
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    except OSError:
        # Never break a request on trace failures
        return
