from __future__ import annotations

import json

from fakes import FakeBackend, no_sleep, succeeded
from services.reporting import usage_for_run
from services.run_poller import RunPoller
from utils.call_trace import log_call


def test_call_trace_writes_jsonl(tmp_path, monkeypatch):
    log_file = tmp_path / "calls.jsonl"
    monkeypatch.setenv("CALL_TRACE", "true")
    monkeypatch.setenv("CALL_TRACE_PATH", str(log_file))
    monkeypatch.setenv("RUN_ID", "test-run-123")

    log_call(
        kind="llm",
        caller="unit.test",
        provider="openai",
        model="gpt-x",
        operation="profile_comparison",
        prompt_hash="abc",
        duration_ms=42,
        status="ok",
        usage={"total_tokens": 10},
        extras={"max_tokens": 400},
    )

    lines = log_file.read_text(encoding="utf-8").strip().splitlines()
    rec = json.loads(lines[-1])
    assert rec["kind"] == "llm"
    assert rec["caller"] == "unit.test"
    assert rec["run_id"] == "test-run-123"
    assert rec["usage"]["total_tokens"] == 10
    assert rec["extras"] == {"max_tokens": 400}


def test_call_trace_disabled_writes_nothing(tmp_path, monkeypatch):
    log_file = tmp_path / "calls.jsonl"
    monkeypatch.setenv("CALL_TRACE", "false")
    monkeypatch.setenv("CALL_TRACE_PATH", str(log_file))
    log_call(kind="scrape", caller="x", provider="p", operation="actor_run")
    assert not log_file.exists()


def test_scrape_runs_are_traced_and_aggregated(tmp_path, monkeypatch):
    log_file = tmp_path / "calls.jsonl"
    monkeypatch.setenv("CALL_TRACE", "true")
    monkeypatch.setenv("CALL_TRACE_PATH", str(log_file))
    monkeypatch.setenv("RUN_ID", "run-abc")

    backend = FakeBackend({"actor": succeeded([{"name": "a"}])})
    RunPoller(backend, sleep=no_sleep, max_polls=2).run("actor", {})
    log_call(kind="llm", caller="t", provider="openai", operation="op", usage={"total_tokens": 7})
    log_call(kind="llm", caller="t", provider="openai", operation="op", status="error")

    usage = usage_for_run("run-abc", trace_path=log_file)
    assert usage["scrape:actor"] == {"calls": 1, "errors": 0, "tokens": 0}
    assert usage["llm:openai"] == {"calls": 2, "errors": 1, "tokens": 7}
    assert usage_for_run("other-run", trace_path=log_file) == {}
