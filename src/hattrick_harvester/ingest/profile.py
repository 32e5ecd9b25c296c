"""Pattern-based extractors for player profile text blocks.

Profile blocks are copied from the game's forum markup, e.g.::

    [playerid=475716864]
    23 years and 67 days
    TSI: 76 670
    Speciality: [b]Head[/b]
    Has inadequate experience and inadequate leadership.
    [table][tr][th]Keeper[/th][td][b]poor[/b] (1)[/td][/tr]...

Each extractor looks for one field in isolation and reports a
:class:`FieldResult`; :func:`extract_player_profile` combines them so that a
missing field never aborts the whole record.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Sequence, Tuple

from hattrick_harvester.config import DEFAULT_EXTRACTION, ExtractionRules
from hattrick_harvester.models import NO_SPECIALITY, ProfileRecord

from .results import FieldResult


logger = logging.getLogger(__name__)

# Thousands may be grouped with plain, thin or non-breaking spaces.
_TSI_PATTERN = re.compile(r"TSI:\s*(\d[\d \t\u00a0\u202f]*)")
_AGE_PATTERN = re.compile(r"(\d+)\s+years\s+and\s+(\d+)\s+days")
_SPECIALITY_PATTERN = re.compile(r"Speciality:\s*\[b\](.*?)\[/b\]")
_EXPERIENCE_PATTERN = re.compile(r"Has\s+(\w+)\s+experience", re.IGNORECASE)
_LEADERSHIP_PATTERN = re.compile(r"and\s+(\w+)\s+leadership", re.IGNORECASE)
_PLAYER_ID_PATTERN = re.compile(r"\[playerid=(\d+)\]")


def _skill_pattern(skill: str) -> re.Pattern[str]:
    return re.compile(
        r"\[th\]"
        + re.escape(skill)
        + r"\[/th\]\[td\](?:\[b\])?([^\[\(]+)(?:\[/b\])?\s*\((\d+)\)\[/td\]"
    )


def extract_skill(text: str, skill: str) -> FieldResult[int]:
    """Return the numeric level of ``skill``; the textual label is discarded."""

    match = _skill_pattern(skill).search(text)
    if match is None:
        return FieldResult.missing(skill, f"skill {skill!r} not found")
    return FieldResult.found(skill, int(match.group(2)))


def extract_all_skills(
    text: str, skills: Sequence[str] = DEFAULT_EXTRACTION.skills
) -> Dict[str, Optional[int]]:
    levels: Dict[str, Optional[int]] = {}
    for skill in skills:
        result = extract_skill(text, skill)
        if not result.ok:
            logger.warning("Skill %s missing from profile text", skill)
        levels[skill] = result.unwrap_or(None)
    return levels


def extract_tsi(text: str) -> FieldResult[int]:
    match = _TSI_PATTERN.search(text)
    if match is None:
        return FieldResult.missing("TSI", "TSI information not found in the input text")
    return FieldResult.found("TSI", int(re.sub(r"\D", "", match.group(1))))


def extract_age(text: str) -> FieldResult[Tuple[int, int]]:
    match = _AGE_PATTERN.search(text)
    if match is None:
        return FieldResult.missing("Age", "Age information not found in the input text")
    return FieldResult.found("Age", (int(match.group(1)), int(match.group(2))))


def extract_speciality(text: str) -> FieldResult[str]:
    match = _SPECIALITY_PATTERN.search(text)
    if match is None:
        return FieldResult.missing("Speciality")
    return FieldResult.found("Speciality", match.group(1).strip())


def extract_experience(text: str) -> FieldResult[str]:
    """Adjective from the ``Has <word> experience`` sentence."""

    match = _EXPERIENCE_PATTERN.search(text)
    if match is None:
        return FieldResult.missing("Experience", "'experience' not found in the input text")
    return FieldResult.found("Experience", match.group(1))


def extract_leadership(text: str) -> FieldResult[str]:
    """Adjective from the ``and <word> leadership`` clause."""

    match = _LEADERSHIP_PATTERN.search(text)
    if match is None:
        return FieldResult.missing("Leadership", "'leadership' not found in the input text")
    return FieldResult.found("Leadership", match.group(1))


def extract_player_id(text: str) -> Optional[int]:
    """Return the id from a ``[playerid=N]`` tag, or ``None`` when untagged."""

    match = _PLAYER_ID_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def _resolve(result: FieldResult, default):
    if not result.ok:
        logger.warning("Error extracting %s: %s", result.field, result.error)
    return result.unwrap_or(default)


def extract_player_profile(
    text: str, rules: ExtractionRules = DEFAULT_EXTRACTION
) -> ProfileRecord:
    """Assemble a :class:`ProfileRecord`, defaulting any field that is missing."""

    player_id = extract_player_id(text)
    if player_id is None:
        logger.warning("No [playerid=...] tag found in profile text")

    age_years, age_days = _resolve(extract_age(text), (None, None))
    return ProfileRecord(
        player_id=player_id,
        skills=extract_all_skills(text, rules.skills),
        tsi=_resolve(extract_tsi(text), None),
        age_years=age_years,
        age_days=age_days,
        speciality=_resolve(extract_speciality(text), NO_SPECIALITY),
        experience=_resolve(extract_experience(text), None),
        leadership=_resolve(extract_leadership(text), None),
    )
