from __future__ import annotations

import time
from typing import Any, Dict, Optional

from config.llm_routes import ROUTES
from config.settings import Settings, get_settings
from utils.call_trace import log_call, sha256_text


class LLMClient:
    """Minimal wrapper to centralize per-use-case routing and logging."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._client = None

    def _openai(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def complete(
        self,
        *,
        use_case: str,
        prompt: str,
        max_tokens: int,
        prompt_name: Optional[str] = None,
    ) -> str:
        """Single-turn completion: one user message in, response text out."""
        route = ROUTES.get(use_case, {})
        provider = route.get("provider", "openai")
        model = route.get("model") or self.settings.openai_model or "gpt-4o-mini"
        op = route.get("operation", "chat")
        temp = route.get("temperature")

        if provider != "openai":
            raise NotImplementedError(f"Provider not implemented: {provider}")

        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
        }
        # Only pass temperature if the route sets one (some models only accept default)
        if temp is not None:
            kwargs["temperature"] = temp

        def _log(status: str, duration_ms: int, error: Optional[str] = None, usage: Optional[Dict[str, Any]] = None) -> None:
            log_call(
                kind="llm",
                caller=f"llm_client.complete:{use_case}",
                provider=provider,
                model=model,
                operation=op,
                prompt_hash=sha256_text(prompt),
                duration_ms=duration_ms,
                status=status,
                error=error,
                usage=usage,
                extras={"prompt_name": prompt_name, "max_tokens": max_tokens},
            )

        t0 = time.time()
        try:
            resp = self._openai().chat.completions.create(**kwargs)
        except Exception as e:
            _log("error", int((time.time() - t0) * 1000), error=str(e))
            raise
        dt_ms = int((time.time() - t0) * 1000)

        usage_obj = None
        usage = getattr(resp, "usage", None)
        if usage:
            usage_obj = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }
        _log("ok", dt_ms, usage=usage_obj)

        choices = getattr(resp, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""
