from .profile import Experience, Profile
from .profile_kind import ProfileKind
from .scrape_run import RunHandle, RunState, RunStatus
from .comparison_result import ComparisonResult, MAX_POINTS

__all__ = [
    "Experience",
    "Profile",
    "ProfileKind",
    "RunHandle",
    "RunState",
    "RunStatus",
    "ComparisonResult",
    "MAX_POINTS",
]
