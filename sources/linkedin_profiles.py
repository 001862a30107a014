from __future__ import annotations

from typing import Any, Dict

from models import ProfileKind
from services.domain_utils import normalize_linkedin_profile_url
from sources.base import ProviderSpec
from sources.registry import register


def _profile_and_start_urls(url: str) -> Dict[str, Any]:
    # Accepted by both the console actor and the dev_fusion actors
    url = normalize_linkedin_profile_url(url) or url
    return {
        "profileUrls": [url],
        "startUrls": [{"url": url}],
    }


PROVIDERS = (
    ProviderSpec(
        identity="2SyF0bVxmgGr8IVCZ",
        kind=ProfileKind.LINKEDIN,
        build_input=_profile_and_start_urls,
        description="LinkedIn profile scraper (actor id from the Apify console)",
    ),
    ProviderSpec(
        identity="dev_fusion/Linkedin-Profile-Scraper",
        kind=ProfileKind.LINKEDIN,
        build_input=_profile_and_start_urls,
        description="dev_fusion LinkedIn profile scraper",
    ),
    ProviderSpec(
        identity="dev_fusion/linkedin-profile-scraper",
        kind=ProfileKind.LINKEDIN,
        build_input=_profile_and_start_urls,
        description="dev_fusion LinkedIn profile scraper (lowercase store name)",
    ),
)


def _register():
    for spec in PROVIDERS:
        register(spec)


_register()
