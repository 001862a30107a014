from .validate_url import ValidateProfileUrl
from .acquire_profile import AcquireProfile
from .compare_profiles import CompareProfiles

__all__ = [
    "ValidateProfileUrl",
    "AcquireProfile",
    "CompareProfiles",
]
