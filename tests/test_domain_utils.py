from __future__ import annotations

import pytest

from models import ProfileKind
from services.domain_utils import (
    canonical_twitter_url,
    detect_profile_kind,
    extract_handle,
    normalize_linkedin_profile_url,
)
from services.errors import InvalidInput


@pytest.mark.parametrize(
    "url,kind",
    [
        ("https://linkedin.com/in/jdoe", ProfileKind.LINKEDIN),
        ("https://www.linkedin.com/in/jdoe/", ProfileKind.LINKEDIN),
        ("de.linkedin.com/in/jdoe", ProfileKind.LINKEDIN),
        ("https://twitter.com/jack", ProfileKind.TWITTER),
        ("https://x.com/jack", ProfileKind.TWITTER),
        ("https://mobile.twitter.com/jack", ProfileKind.TWITTER),
    ],
)
def test_detect_profile_kind(url, kind):
    assert detect_profile_kind(url) is kind


@pytest.mark.parametrize("url", ["https://facebook.com/jdoe", "https://dropbox.com/x", "", None, "   "])
def test_unsupported_or_missing_urls_are_rejected(url):
    with pytest.raises(InvalidInput):
        detect_profile_kind(url)


def test_extract_handle():
    assert extract_handle("https://www.linkedin.com/in/jane-doe-123/?trk=x", ProfileKind.LINKEDIN) == "jane-doe-123"
    assert extract_handle("https://linkedin.com/company/acme", ProfileKind.LINKEDIN) is None
    assert extract_handle("https://x.com/@jack/status/1", ProfileKind.TWITTER) == "jack"
    assert extract_handle("https://twitter.com/home", ProfileKind.TWITTER) is None
    assert extract_handle("https://linkedin.com/in/j%C3%BCrgen", ProfileKind.LINKEDIN) == "jürgen"


def test_normalize_linkedin_profile_url():
    assert normalize_linkedin_profile_url("linkedin.com/in/JDoe/de") == "https://www.linkedin.com/in/jdoe/"
    assert normalize_linkedin_profile_url("https://twitter.com/jdoe") is None
    assert normalize_linkedin_profile_url(None) is None


def test_canonical_twitter_url():
    assert canonical_twitter_url("https://x.com/jack?lang=en") == "https://twitter.com/jack"
    assert canonical_twitter_url("https://x.com/") is None
