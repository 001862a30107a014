from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from models import Experience, Profile, ProfileKind


# A candidate is a (possibly dotted) key path or a function over the record
Candidate = Union[str, Callable[[Dict[str, Any]], Any]]


def _lookup(record: Any, path: str) -> Any:
    value = record
    for key in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def first_present(record: Dict[str, Any], candidates: Sequence[Candidate]) -> Any:
    """Return the first non-empty value among the candidates, or None."""
    for candidate in candidates:
        value = candidate(record) if callable(candidate) else _lookup(record, candidate)
        if not _is_empty(value):
            return value
    return None


def _full_name(record: Dict[str, Any]) -> Optional[str]:
    first = record.get("firstName")
    last = record.get("lastName")
    if first and last:
        return f"{first} {last}"
    return None


# attribute -> ordered candidate source fields
TEXT_FIELDS: Dict[str, Sequence[Candidate]] = {
    "name": ("fullName", "name", _full_name, "profileName", "user.name", "author.name", "displayName"),
    "headline": ("headline", "headlineText", "occupation", "bio", "description", "user.description", "author.description"),
    "location": ("location", "locationName", "addressWithCountry", "geoLocationName", "user.location", "author.location"),
    "summary": ("summary", "about"),
}

LIST_FIELDS: Dict[str, Sequence[Candidate]] = {
    "skills": ("skills",),
    "experiences": ("experiences", "positions", "experience"),
    "education": ("education", "educations"),
}

SKILL_FIELDS: Sequence[Candidate] = ("name", "title")

EXPERIENCE_FIELDS: Dict[str, Sequence[Candidate]] = {
    "company": ("companyName", "company", "subtitle"),
    "title": ("title", "positionTitle"),
}

TWEET_TEXT_FIELDS: Sequence[Candidate] = ("text", "fullText", "full_text")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _map_skill(element: Any) -> str:
    if isinstance(element, str):
        return element.strip()
    if isinstance(element, dict):
        return _as_text(first_present(element, SKILL_FIELDS))
    return ""


def _map_experience(element: Any) -> Optional[Experience]:
    if not isinstance(element, dict):
        return None
    exp = Experience(**{
        attr: _as_text(first_present(element, candidates))
        for attr, candidates in EXPERIENCE_FIELDS.items()
    })
    if not exp.company and not exp.title:
        return None
    return exp


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def normalize(record: Dict[str, Any]) -> Profile:
    """Map one provider record onto the canonical Profile (pure)."""
    fields: Dict[str, Any] = {
        attr: _as_text(first_present(record, candidates))
        for attr, candidates in TEXT_FIELDS.items()
    }

    raw_skills = _as_list(first_present(record, LIST_FIELDS["skills"]))
    fields["skills"] = [s for s in (_map_skill(e) for e in raw_skills) if s]

    raw_experiences = _as_list(first_present(record, LIST_FIELDS["experiences"]))
    fields["experiences"] = [e for e in (_map_experience(x) for x in raw_experiences) if e]

    raw_education = _as_list(first_present(record, LIST_FIELDS["education"]))
    fields["education"] = [e for e in raw_education if isinstance(e, dict)]

    return Profile(**fields)


def _is_user_record(record: Dict[str, Any]) -> bool:
    return str(record.get("type") or "").lower() == "user" or isinstance(record.get("user"), dict)


def _tweet_text(record: Dict[str, Any]) -> str:
    # Actors disagree on the case of "type"; anything but a user item may carry text
    if str(record.get("type") or "").lower() == "user":
        return ""
    return _as_text(first_present(record, TWEET_TEXT_FIELDS))


def normalize_records(
    records: Sequence[Dict[str, Any]],
    kind: ProfileKind,
    handle: Optional[str] = None,
) -> Profile:
    """Normalize a provider's result set: the first record defines the profile.

    Twitter result sets mix user and tweet items, so for that kind the tweets
    of every record are joined into ``tweets``, and the username stands in
    for the name when no item carries one.
    """
    if not records:
        return Profile()
    profile = normalize(records[0])
    if kind is not ProfileKind.TWITTER:
        return profile

    if not profile.name:
        user = next((r for r in records if _is_user_record(r)), None)
        if user is not None:
            profile = normalize(user)
    if not profile.name and handle:
        profile = profile.model_copy(update={"name": handle})
    tweets = " ".join(t for t in (_tweet_text(r) for r in records) if t)
    return profile.model_copy(update={"tweets": tweets or None})


def degraded_profile(handle: Optional[str]) -> Profile:
    """Best-effort profile when no provider returned data."""
    return Profile(name=handle or "")
