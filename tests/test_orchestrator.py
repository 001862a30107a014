from __future__ import annotations

import pytest

from fakes import FakeBackend, no_sleep, succeeded
from models import Profile, ProfileKind, RunStatus
from services.errors import BackendError, InvalidInput, ScrapeExhausted
from services.orchestrator import ScrapeOrchestrator, first_successful
from services.run_poller import RunPoller
from sources.base import ProviderSpec


def _spec(identity, kind=ProfileKind.LINKEDIN, build_input=None):
    return ProviderSpec(identity=identity, kind=kind, build_input=build_input or (lambda url: {"profileUrls": [url]}))


def _orchestrator(backend, specs, strict=False):
    poller = RunPoller(backend, poll_interval_seconds=5, max_polls=3, sleep=no_sleep)
    return ScrapeOrchestrator(poller, lambda kind: specs, strict=strict)


URL = "https://linkedin.com/in/jdoe"


def test_first_provider_with_items_wins_without_fallback():
    backend = FakeBackend({
        "p1": succeeded([{"fullName": "Jane Doe", "headline": "Engineer"}]),
        "p2": succeeded([{"fullName": "Wrong"}]),
    })
    profile = _orchestrator(backend, [_spec("p1"), _spec("p2")]).acquire(URL, ProfileKind.LINKEDIN)
    assert profile.name == "Jane Doe"
    assert [s[0] for s in backend.submitted] == ["p1"]


@pytest.mark.parametrize(
    "first_script",
    [
        ([RunStatus.FAILED], []),
        ([RunStatus.ABORTED], []),
        ([RunStatus.PENDING], []),  # times out after max_polls
        succeeded([]),  # empty dataset
        BackendError("500 from backend"),
    ],
)
def test_failure_on_provider_advances_to_next_once(first_script):
    backend = FakeBackend({
        "p1": first_script,
        "p2": succeeded([{"fullName": "Jane Doe"}]),
        "p3": succeeded([{"fullName": "Not reached"}]),
    })
    profile = _orchestrator(backend, [_spec("p1"), _spec("p2"), _spec("p3")]).acquire(URL, ProfileKind.LINKEDIN)
    assert profile.name == "Jane Doe"
    assert [s[0] for s in backend.submitted] == ["p1", "p2"]


def test_input_builder_error_skips_provider():
    def _boom(url):
        raise InvalidInput("no handle")

    backend = FakeBackend({"p2": succeeded([{"fullName": "Jane"}])})
    specs = [_spec("p1", build_input=_boom), _spec("p2")]
    assert _orchestrator(backend, specs).acquire(URL, ProfileKind.LINKEDIN).name == "Jane"
    assert [s[0] for s in backend.submitted] == ["p2"]


def test_each_provider_receives_its_own_input_shape():
    backend = FakeBackend({"p1": succeeded([]), "p2": succeeded([{"name": "x"}])})
    specs = [
        _spec("p1", build_input=lambda url: {"startUrls": [{"url": url}]}),
        _spec("p2", build_input=lambda url: {"profileUrls": [url]}),
    ]
    _orchestrator(backend, specs).acquire(URL, ProfileKind.LINKEDIN)
    assert backend.submitted == [
        ("p1", {"startUrls": [{"url": URL}]}),
        ("p2", {"profileUrls": [URL]}),
    ]


def test_exhaustion_returns_degraded_profile_from_url():
    backend = FakeBackend({"p1": BackendError("down"), "p2": succeeded([])})
    profile = _orchestrator(backend, [_spec("p1"), _spec("p2")]).acquire(URL, ProfileKind.LINKEDIN)
    assert profile == Profile(name="jdoe")


def test_exhaustion_for_twitter_uses_username():
    backend = FakeBackend({"t1": ([RunStatus.FAILED], [])})
    specs = [_spec("t1", kind=ProfileKind.TWITTER)]
    profile = _orchestrator(backend, specs).acquire("https://x.com/jack?lang=en", ProfileKind.TWITTER)
    assert profile.name == "jack"


def test_twitter_items_without_user_info_reach_the_llm():
    from fakes import FakeLLM
    from services.comparator import Comparator

    backend = FakeBackend({"t1": succeeded([{"type": "Tweet", "text": "hiking and sauna"}])})
    specs = [_spec("t1", kind=ProfileKind.TWITTER)]
    profile = _orchestrator(backend, specs).acquire("https://x.com/jack", ProfileKind.TWITTER)
    assert profile.name == "jack"
    assert profile.tweets == "hiking and sauna"

    llm = FakeLLM(response='{"points": ["You both like hiking"]}')
    result = Comparator(llm, Profile(name="Ref")).compare(profile)
    assert result.source == "llm"
    assert len(llm.calls) == 1


def test_strict_mode_raises_on_exhaustion():
    backend = FakeBackend({"p1": succeeded([])})
    with pytest.raises(ScrapeExhausted) as exc:
        _orchestrator(backend, [_spec("p1")], strict=True).acquire(URL, ProfileKind.LINKEDIN)
    assert "p1: no items" in exc.value.errors


def test_no_registered_providers_degrades():
    poller = RunPoller(FakeBackend({}), sleep=no_sleep, max_polls=1)

    def _missing(kind):
        raise KeyError(kind)

    assert ScrapeOrchestrator(poller, _missing).acquire(URL, ProfileKind.LINKEDIN).name == "jdoe"


def test_first_successful_preserves_order_and_reports_errors():
    seen, errors = [], []

    def attempt(n):
        seen.append(n)
        if n == 1:
            raise RuntimeError("boom")
        return None if n == 2 else n * 10

    found = first_successful([1, 2, 3, 4], attempt, lambda c, e: errors.append((c, str(e))))
    assert found == (3, 30)
    assert seen == [1, 2, 3]
    assert errors == [(1, "boom")]


def test_first_successful_returns_none_when_exhausted():
    assert first_successful([1, 2], lambda n: None) is None
