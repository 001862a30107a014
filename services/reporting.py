from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from config.settings import get_settings
from pipelines.runner import RunContext


def usage_for_run(run_id: str, trace_path: Optional[Path] = None) -> Dict[str, Dict[str, int]]:
    """Aggregate traced calls for the given run_id, keyed by kind:provider.

    Returns dict like { 'scrape:apify/twitter-scraper': {'calls': 1, 'errors': 0, 'tokens': 0},
    'llm:openai': {'calls': 1, 'errors': 0, 'tokens': 512} }
    """
    result: Dict[str, Dict[str, int]] = {}
    log_path = trace_path or Path(get_settings().call_trace_path)
    if not log_path.exists():
        return result
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                rec = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(rec, dict) or rec.get("run_id") != run_id:
                continue
            key = f"{rec.get('kind') or 'unknown'}:{rec.get('provider') or 'unknown'}"
            bucket = result.setdefault(key, {"calls": 0, "errors": 0, "tokens": 0})
            bucket["calls"] += 1
            if rec.get("status") != "ok":
                bucket["errors"] += 1
            tokens = (rec.get("usage") or {}).get("total_tokens")
            if isinstance(tokens, int):
                bucket["tokens"] += tokens
    return result


def print_summary(ctx: RunContext) -> None:
    """Print the talking points of one comparison run."""
    profile = ctx.profile
    print("\n" + "=" * 60)
    print("PROFILE TALKING POINTS")
    print("=" * 60)
    print(f"URL: {ctx.url}")
    print(f"Kind: {ctx.kind.label if ctx.kind else 'N/A'}")
    if profile is not None:
        print(f"Name: {profile.name or 'N/A'}")
        print(f"Headline: {profile.headline or 'N/A'}")
        print(f"Location: {profile.location or 'N/A'}")
    print()
    if ctx.result is not None:
        for i, point in enumerate(ctx.result.points, start=1):
            print(f"  {i}. {point}")
        print()
        print(f"Source: {ctx.result.source}")
    print(f"Scrape: {ctx.meta.get('scrape_ms', 'N/A')} ms, compare: {ctx.meta.get('compare_ms', 'N/A')} ms")
    print("=" * 60)
