"""Canonical player records shared by the ingest, merge and API layers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


PLAYER_ID_KEY = "PlayerID"
TSI_KEY = "TSI"
AGE_YEARS_KEY = "AgeYears"
AGE_DAYS_KEY = "AgeDays"
SPECIALITY_KEY = "Speciality"
EXPERIENCE_KEY = "Experience"
LEADERSHIP_KEY = "Leadership"
SEASON_KEY = "Season"
SEASON_WEEK_KEY = "SeasonWeek"
PRICE_KEY = "Price"

NO_SPECIALITY = "None"


class ProfileRecord(BaseModel):
    """Player attributes harvested from a profile text block."""

    player_id: Optional[int] = None
    skills: Dict[str, Optional[int]] = Field(default_factory=dict)
    tsi: Optional[int] = None
    age_years: Optional[int] = None
    age_days: Optional[int] = None
    speciality: str = NO_SPECIALITY
    experience: Optional[str] = None
    leadership: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {PLAYER_ID_KEY: self.player_id}
        payload.update(self.skills)
        payload[TSI_KEY] = self.tsi
        payload[AGE_YEARS_KEY] = self.age_years
        payload[AGE_DAYS_KEY] = self.age_days
        payload[SPECIALITY_KEY] = self.speciality
        payload[EXPERIENCE_KEY] = self.experience
        payload[LEADERSHIP_KEY] = self.leadership
        return payload


class ListingRecord(BaseModel):
    """Transfer listing figures; every field is required."""

    season: int
    season_week: int
    tsi: int = Field(..., ge=0)
    age_years: int
    age_days: int
    price: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, int]:
        return {
            SEASON_KEY: self.season,
            SEASON_WEEK_KEY: self.season_week,
            TSI_KEY: self.tsi,
            AGE_YEARS_KEY: self.age_years,
            AGE_DAYS_KEY: self.age_days,
            PRICE_KEY: self.price,
        }
