from __future__ import annotations

from typing import Any, Dict

from models import ProfileKind
from services.domain_utils import canonical_twitter_url, extract_handle
from services.errors import InvalidInput
from sources.base import ProviderSpec
from sources.registry import register


MAX_TWEETS = 50


def _username(url: str) -> str:
    username = extract_handle(url, ProfileKind.TWITTER)
    if not username:
        raise InvalidInput(f"Invalid Twitter URL: {url}")
    return username


def _profile_url(url: str) -> str:
    profile_url = canonical_twitter_url(url)
    if not profile_url:
        raise InvalidInput(f"Invalid Twitter URL: {url}")
    return profile_url


def _twitter_scraper_input(url: str) -> Dict[str, Any]:
    return {
        "startUrls": [{"url": _profile_url(url)}],
        "maxTweets": MAX_TWEETS,
        "addUserInfo": True,
    }


def _tweet_scraper_input(url: str) -> Dict[str, Any]:
    return {
        "twitterHandles": [_username(url)],
        "maxItems": MAX_TWEETS,
        "sort": "Latest",
    }


PROVIDERS = (
    ProviderSpec(
        identity="apify/twitter-scraper",
        kind=ProfileKind.TWITTER,
        build_input=_twitter_scraper_input,
        description="Apify Twitter scraper with user info",
    ),
    ProviderSpec(
        identity="apidojo/tweet-scraper",
        kind=ProfileKind.TWITTER,
        build_input=_tweet_scraper_input,
        description="Tweet scraper by handle",
    ),
)


def _register():
    for spec in PROVIDERS:
        register(spec)


_register()
