"""
Talking points between a scraped profile and the reference profile.

The LLM is asked for strict JSON but its answer is treated as free text:
decoding tries several strategies in order and every failure path ends in
a fallback, so ``Comparator.compare`` always returns 1-4 points.
"""
from __future__ import annotations

import json
import logging
import re
import time
from typing import Callable, List, Optional, Sequence

from models import MAX_POINTS, ComparisonResult, Profile
from ports.llm import LLMClientPort
from services.errors import UnparsableComparison


logger = logging.getLogger(__name__)

USE_CASE = "profile_comparison"

NOT_SPECIFIED = "Not specified"
MAX_SKILLS_IN_PROMPT = 15
MAX_EXPERIENCES_IN_PROMPT = 5
MAX_TWEET_CHARS = 1500

EMPTY_PROFILE_POINTS = [
    "We couldn't read enough of this profile to compare it. "
    "Try a public LinkedIn or Twitter profile URL.",
]

GENERIC_FALLBACK_POINTS = [
    "You're both building a career in a fast-moving industry - ask what they're focused on right now.",
    "Compare notes on the tools and skills that have mattered most in your recent work.",
    "Find out what they're excited about next; shared goals make for the best conversations.",
]

ERROR_FALLBACK_POINTS = [
    "We couldn't generate talking points right now - try again in a moment.",
]


def _value(text: Optional[str]) -> str:
    text = (text or "").strip()
    return text or NOT_SPECIFIED


def render_profile(profile: Profile, title: str) -> str:
    """Render a profile as a fixed-format ``Field: value`` block."""
    skills = ", ".join(profile.skills[:MAX_SKILLS_IN_PROMPT])
    experiences = "; ".join(
        " at ".join(p for p in (e.title, e.company) if p)
        for e in profile.experiences[:MAX_EXPERIENCES_IN_PROMPT]
    )
    lines = [
        f"{title}:",
        f"Name: {_value(profile.name)}",
        f"Headline: {_value(profile.headline)}",
        f"Location: {_value(profile.location)}",
        f"Skills: {_value(skills)}",
        f"Experience: {_value(experiences)}",
        f"Summary: {_value(profile.summary)}",
    ]
    if profile.tweets:
        lines.append(f"Recent tweets: {profile.tweets[:MAX_TWEET_CHARS]}")
    return "\n".join(lines)


def build_prompt(user_profile: Profile, reference_profile: Profile) -> str:
    return f"""You are helping two people start a conversation. Compare the PERSON profile with the REFERENCE profile and write short talking points.

{render_profile(user_profile, "PERSON")}

{render_profile(reference_profile, "REFERENCE")}

Rules:
- Write exactly 3 or 4 points.
- Put commonalities first (shared skills, companies, industry, location, interests); mention differences only after.
- Each point is one short, friendly sentence.
- Do not invent facts that are not in the profiles.

Return format (JSON only, no other text):
{{"points": ["...", "...", "..."]}}"""


# ---- Decoding strategies: text -> points or None ----

def _first_json_object(text: str) -> Optional[str]:
    """Return the first balanced top-level {...} span, respecting strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        # Unbalanced from here; try the next opening brace
        start = text.find("{", start + 1)
    return None


def _clean_points(items: Sequence[object]) -> List[str]:
    return [str(p).strip() for p in items if isinstance(p, str) and p.strip()]


def parse_json_points(text: str) -> Optional[List[str]]:
    span = _first_json_object(text)
    if span is None:
        return None
    try:
        data = json.loads(span)
    except json.JSONDecodeError:
        return None
    points = data.get("points") if isinstance(data, dict) else None
    if not isinstance(points, list):
        return None
    return _clean_points(points) or None


_BULLET_RE = re.compile(r"^\s*[•\-\*]\s+(.+?)\s*$")
_NUMBERED_RE = re.compile(r"^\s*\d+[\.\)]\s+(.+?)\s*$")
_POINTS_ARRAY_RE = re.compile(r"points\"?\s*[:=]\s*\[(.*?)\]", re.IGNORECASE | re.DOTALL)


def _match_lines(text: str, pattern: re.Pattern) -> Optional[List[str]]:
    found = []
    for line in text.splitlines():
        m = pattern.match(line)
        if m:
            found.append(m.group(1))
    return _clean_points(found) or None


def parse_bullet_points(text: str) -> Optional[List[str]]:
    return _match_lines(text, _BULLET_RE)


def parse_numbered_points(text: str) -> Optional[List[str]]:
    return _match_lines(text, _NUMBERED_RE)


def parse_points_fragment(text: str) -> Optional[List[str]]:
    m = _POINTS_ARRAY_RE.search(text)
    if not m:
        return None
    parts = [p.strip().strip("\"'").strip() for p in m.group(1).split(",")]
    return _clean_points(parts) or None


DECODERS: Sequence[Callable[[str], Optional[List[str]]]] = (
    parse_json_points,
    parse_bullet_points,
    parse_numbered_points,
    parse_points_fragment,
)


def decode_points(text: str) -> List[str]:
    """Apply the decoders in order; the first non-empty answer wins."""
    for decoder in DECODERS:
        points = decoder(text or "")
        if points:
            logger.debug(f"Decoded {len(points)} point(s) with {decoder.__name__}")
            return points
    raise UnparsableComparison("No decoding strategy found any points in the LLM response")


class Comparator:
    """Compare a profile with the reference profile via one LLM call."""

    def __init__(self, llm: LLMClientPort, reference_profile: Profile, *, max_tokens: int = 400):
        self.llm = llm
        self.reference_profile = reference_profile
        self.max_tokens = max_tokens

    def compare(self, user_profile: Profile, reference_profile: Optional[Profile] = None) -> ComparisonResult:
        reference = reference_profile or self.reference_profile
        if not user_profile.has_identity():
            logger.info("Profile has no name, headline or summary, skipping LLM", extra={"step": "compare", "status": "guard"})
            return ComparisonResult(points=list(EMPTY_PROFILE_POINTS), source="guard")

        t0 = time.time()
        try:
            prompt = build_prompt(user_profile, reference)
            text = self.llm.complete(
                use_case=USE_CASE,
                prompt=prompt,
                max_tokens=self.max_tokens,
                prompt_name="profile_comparison",
            )
            try:
                points = decode_points(text)
            except UnparsableComparison as e:
                logger.warning(
                    "LLM response not parseable, using generic points",
                    extra={"step": "compare", "status": "fallback", "error": str(e)},
                )
                points = []

            points = points[:MAX_POINTS]
            if not points:
                return ComparisonResult(points=list(GENERIC_FALLBACK_POINTS), source="fallback")

            logger.info(
                f"Generated {len(points)} talking point(s)",
                extra={"step": "compare", "status": "ok", "duration_ms": int((time.time() - t0) * 1000)},
            )
            return ComparisonResult(points=points, source="llm")
        except Exception as e:
            logger.error(
                "Comparison failed, using error fallback",
                extra={"step": "compare", "status": "error", "error": str(e)},
            )
            return ComparisonResult(points=list(ERROR_FALLBACK_POINTS), source="error")
