from __future__ import annotations

from typing import List, Optional, Sequence


class ProfileCompareError(Exception):
    """Base class for every error raised by the compare pipeline."""


class InvalidInput(ProfileCompareError):
    """Missing or unsupported profile URL. Surfaced to callers as a 400."""


class ConfigurationMissing(ProfileCompareError):
    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


class BackendError(ProfileCompareError):
    """Unexpected response from the scraping backend."""


class ProviderRunFailed(ProfileCompareError):
    def __init__(self, identity: str, status_message: Optional[str] = None):
        self.identity = identity
        self.status_message = status_message
        detail = f": {status_message}" if status_message else ""
        super().__init__(f"Provider run failed for {identity}{detail}")


class ProviderRunTimedOut(ProfileCompareError):
    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Provider run timed out for {identity}")


class ScrapeExhausted(ProfileCompareError):
    def __init__(self, kind: str, errors: Optional[List[str]] = None):
        self.kind = kind
        self.errors = list(errors or [])
        last = self.errors[-1] if self.errors else "no provider returned data"
        super().__init__(f"{kind} scraping failed on every provider. Last error: {last}")


class UnparsableComparison(ProfileCompareError):
    """LLM response could not be decoded into comparison points."""
