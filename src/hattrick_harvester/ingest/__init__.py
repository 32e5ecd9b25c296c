"""Parsers that turn copied profile and listing text into records."""

from .listing import ListingParseError, ListingScan, ScanState, parse_listing
from .merge import MergeResult, MissingIdentityError, build_filename_key, merge_records
from .profile import (
    extract_age,
    extract_all_skills,
    extract_experience,
    extract_leadership,
    extract_player_id,
    extract_player_profile,
    extract_skill,
    extract_speciality,
    extract_tsi,
)
from .results import FieldNotFoundError, FieldResult

__all__ = [
    "FieldNotFoundError",
    "FieldResult",
    "ListingParseError",
    "ListingScan",
    "MergeResult",
    "MissingIdentityError",
    "ScanState",
    "build_filename_key",
    "extract_age",
    "extract_all_skills",
    "extract_experience",
    "extract_leadership",
    "extract_player_id",
    "extract_player_profile",
    "extract_skill",
    "extract_speciality",
    "extract_tsi",
    "merge_records",
    "parse_listing",
]
