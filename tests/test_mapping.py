from __future__ import annotations

import pytest

from models import Experience, Profile, ProfileKind
from services.mapping import degraded_profile, first_present, normalize, normalize_records


def test_normalize_primary_linkedin_fields():
    record = {
        "fullName": "Jane Doe",
        "headline": "Engineer",
        "location": "San Francisco Bay Area",
        "skills": [{"name": "Prompt engineering"}, {"title": "Voice AI"}, "Python"],
        "experiences": [{"companyName": "Acme", "title": "Staff Engineer"}],
        "education": [{"schoolName": "MIT"}],
        "summary": "Builds agents.",
    }
    profile = normalize(record)
    assert profile.name == "Jane Doe"
    assert profile.headline == "Engineer"
    assert profile.location == "San Francisco Bay Area"
    assert profile.skills == ["Prompt engineering", "Voice AI", "Python"]
    assert profile.experiences == [Experience(company="Acme", title="Staff Engineer")]
    assert profile.education == [{"schoolName": "MIT"}]
    assert profile.summary == "Builds agents."
    assert profile.tweets is None


@pytest.mark.parametrize(
    "primary,alternate",
    [
        ({"headline": "Engineer"}, {"headlineText": "Engineer"}),
        ({"location": "Berlin"}, {"locationName": "Berlin"}),
        ({"summary": "Hi"}, {"about": "Hi"}),
        ({"fullName": "Jane Doe"}, {"firstName": "Jane", "lastName": "Doe"}),
        ({"fullName": "Jane Doe"}, {"profileName": "Jane Doe"}),
        (
            {"experiences": [{"company": "Acme", "title": "CTO"}]},
            {"positions": [{"companyName": "Acme", "positionTitle": "CTO"}]},
        ),
    ],
)
def test_alternate_field_names_yield_same_profile(primary, alternate):
    assert normalize(primary) == normalize(alternate)


def test_first_name_without_last_name_is_not_used():
    assert normalize({"firstName": "Jane"}).name == ""


def test_empty_values_fall_through_to_next_candidate():
    record = {"fullName": "  ", "name": "", "profileName": "Jane"}
    assert first_present(record, ("fullName", "name", "profileName")) == "Jane"


def test_unmatched_record_defaults_to_empty_profile():
    profile = normalize({"unexpected": 1, "skills": "not-a-list"})
    assert profile == Profile()
    assert not profile.has_identity()


def test_experiences_without_company_or_title_are_dropped():
    profile = normalize({"experiences": [{"foo": "bar"}, {"subtitle": "Acme"}, "junk"]})
    assert profile.experiences == [Experience(company="Acme", title="")]


def test_linkedin_records_normalize_first_record_only():
    records = [{"fullName": "First"}, {"fullName": "Second"}]
    assert normalize_records(records, ProfileKind.LINKEDIN).name == "First"


def test_twitter_records_collect_user_info_and_tweets():
    records = [
        {"type": "Tweet", "text": "Shipping a voice agent today"},
        {"type": "User", "name": "Jane", "description": "AI builder", "location": "SF"},
        {"type": "Tweet", "fullText": "Sauna then hiking"},
    ]
    profile = normalize_records(records, ProfileKind.TWITTER)
    assert profile.name == "Jane"
    assert profile.headline == "AI builder"
    assert profile.location == "SF"
    assert profile.tweets == "Shipping a voice agent today Sauna then hiking"


def test_twitter_tweet_author_fields_are_probed():
    records = [{"text": "hello", "author": {"name": "Jane", "description": "bio", "location": "NYC"}}]
    profile = normalize_records(records, ProfileKind.TWITTER)
    assert (profile.name, profile.headline, profile.location) == ("Jane", "bio", "NYC")
    assert profile.tweets == "hello"


def test_twitter_lowercase_tweet_items_are_collected():
    records = [
        {"type": "tweet", "text": "sauna every morning", "author": {"name": "Jack"}},
        {"type": "tweet", "text": "pilates later"},
    ]
    profile = normalize_records(records, ProfileKind.TWITTER)
    assert profile.name == "Jack"
    assert profile.tweets == "sauna every morning pilates later"


def test_twitter_username_stands_in_for_missing_name():
    records = [{"type": "Tweet", "text": "hiking and sauna"}]
    profile = normalize_records(records, ProfileKind.TWITTER, handle="jack")
    assert profile.name == "jack"
    assert profile.tweets == "hiking and sauna"
    assert normalize_records([{"headline": "x"}], ProfileKind.LINKEDIN, handle="jdoe").name == ""


def test_degraded_profile_uses_handle_as_name():
    assert degraded_profile("jdoe") == Profile(name="jdoe")
    assert degraded_profile(None) == Profile()
