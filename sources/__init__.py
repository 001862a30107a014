"""Scraping providers, registered per profile kind in fallback order."""

from . import linkedin_profiles, twitter_profiles  # noqa: F401 ensure registration
from .base import ProviderSpec
from .registry import available_providers, get_providers

__all__ = ["ProviderSpec", "available_providers", "get_providers"]
