from __future__ import annotations

import unicodedata
from typing import Optional
from urllib.parse import unquote, urlparse

from models import ProfileKind
from services.errors import InvalidInput


_TWITTER_HOSTS = {"twitter.com", "x.com"}

# First path segments on twitter.com / x.com that are not user handles
_TWITTER_RESERVED = {"home", "i", "intent", "search", "explore", "hashtag", "share", "settings"}


def _host_and_parts(url: str) -> tuple[str, list[str]]:
    text = str(url).strip()
    if "://" not in text:
        text = f"https://{text}"
    u = urlparse(text)
    host = (u.hostname or "").lower()
    for prefix in ("www.", "mobile.", "m."):
        if host.startswith(prefix):
            host = host[len(prefix):]
    parts = [p for p in (u.path or "").split("/") if p]
    return host, parts


def detect_profile_kind(url: Optional[str]) -> ProfileKind:
    """Classify a profile URL by host. Raises InvalidInput for anything else."""
    if not url or not str(url).strip():
        raise InvalidInput("URL is required")
    host, _ = _host_and_parts(url)
    if host == "linkedin.com" or host.endswith(".linkedin.com"):
        return ProfileKind.LINKEDIN
    if host in _TWITTER_HOSTS:
        return ProfileKind.TWITTER
    raise InvalidInput("Please provide a LinkedIn or Twitter URL")


def _clean_slug(slug: str) -> str:
    # Decode percent-encoding and normalize Unicode
    slug = unicodedata.normalize("NFKC", unquote(slug)).strip()
    # Remove invisible characters occasionally present
    return slug.replace("\u200b", "").replace("\u200c", "").replace("\u200d", "")


def extract_handle(url: str, kind: ProfileKind) -> Optional[str]:
    """Return the LinkedIn slug or Twitter username embedded in a profile URL."""
    _, parts = _host_and_parts(url)
    if kind is ProfileKind.LINKEDIN:
        if len(parts) >= 2 and parts[0] == "in":
            return _clean_slug(parts[1]) or None
        return None
    if parts and parts[0].lower() not in _TWITTER_RESERVED:
        return _clean_slug(parts[0]).lstrip("@") or None
    return None


def normalize_linkedin_profile_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    host, parts = _host_and_parts(url)
    if not host.endswith("linkedin.com"):
        return None
    # Keep only /in/{slug} and drop trailing locale/segments (e.g., /de, /en)
    if len(parts) >= 2 and parts[0] == "in":
        return f"https://www.linkedin.com/in/{_clean_slug(parts[1]).lower()}/"
    return None


def canonical_twitter_url(url: str) -> Optional[str]:
    handle = extract_handle(url, ProfileKind.TWITTER)
    if not handle:
        return None
    return f"https://twitter.com/{handle}"
