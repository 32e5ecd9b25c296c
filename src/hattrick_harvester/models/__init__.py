"""Record models and their payload keys."""

from .profile import (
    AGE_DAYS_KEY,
    AGE_YEARS_KEY,
    EXPERIENCE_KEY,
    LEADERSHIP_KEY,
    NO_SPECIALITY,
    PLAYER_ID_KEY,
    PRICE_KEY,
    SEASON_KEY,
    SEASON_WEEK_KEY,
    SPECIALITY_KEY,
    TSI_KEY,
    ListingRecord,
    ProfileRecord,
)

__all__ = [
    "ListingRecord",
    "ProfileRecord",
    "AGE_DAYS_KEY",
    "AGE_YEARS_KEY",
    "EXPERIENCE_KEY",
    "LEADERSHIP_KEY",
    "NO_SPECIALITY",
    "PLAYER_ID_KEY",
    "PRICE_KEY",
    "SEASON_KEY",
    "SEASON_WEEK_KEY",
    "SPECIALITY_KEY",
    "TSI_KEY",
]
