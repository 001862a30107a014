from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from services.errors import ConfigurationMissing


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Scraping backend (Apify)
    apify_api_token: str | None
    apify_base_url: str

    # LLM backend
    openai_api_key: str | None
    openai_model: str
    llm_max_tokens: int

    # Run polling
    poll_interval_seconds: float
    max_polls: int
    http_timeout_seconds: int

    # Fail the request instead of degrading when every provider fails
    scrape_strict: bool

    log_level: str
    run_env: str

    # Logging/tracing
    call_trace: bool = False
    call_trace_path: str = "logs/calls.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        apify_api_token=os.getenv("APIFY_API_TOKEN"),
        apify_base_url=os.getenv("APIFY_BASE_URL", "https://api.apify.com").rstrip("/"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "400")),
        poll_interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS", "5")),
        max_polls=int(os.getenv("MAX_POLLS", "60")),
        http_timeout_seconds=int(os.getenv("HTTP_TIMEOUT_SECONDS", "30")),
        scrape_strict=_as_bool(os.getenv("SCRAPE_STRICT", "false")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        call_trace=_as_bool(os.getenv("CALL_TRACE", "false")),
        call_trace_path=os.getenv("CALL_TRACE_PATH", "logs/calls.jsonl"),
    )


def require_credentials(settings: Settings) -> None:
    """Raise ConfigurationMissing unless both backend credentials are set."""
    missing = []
    if not settings.apify_api_token:
        missing.append("APIFY_API_TOKEN")
    if not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")
    if missing:
        raise ConfigurationMissing(missing)
