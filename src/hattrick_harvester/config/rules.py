"""Extraction and calendar rules shared by the ingest layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class ExtractionRules:
    skills: Tuple[str, ...]
    currency_marker: str
    superseded_keys: FrozenSet[str]


@dataclass(frozen=True)
class CalendarRules:
    """Anchor of the season calendar and its cycle lengths.

    The anchor date is the last day (``anchor_day``) of ``anchor_week`` in
    season ``anchor_era``.
    """

    anchor_date: date
    anchor_era: int
    anchor_week: int
    anchor_day: int
    days_per_week: int = 7
    weeks_per_era: int = 16

    @property
    def days_per_era(self) -> int:
        return self.days_per_week * self.weeks_per_era

    @property
    def anchor_position(self) -> int:
        return (self.anchor_week - 1) * self.days_per_week + self.anchor_day


DEFAULT_SKILLS: Tuple[str, ...] = (
    "Keeper",
    "Defending",
    "Playmaking",
    "Passing",
    "Scoring",
    "Winger",
)

DEFAULT_EXTRACTION = ExtractionRules(
    skills=DEFAULT_SKILLS,
    currency_marker="€",
    superseded_keys=frozenset({"TSI", "AgeDays", "AgeYears"}),
)

DEFAULT_CALENDAR = CalendarRules(
    anchor_date=date(2024, 11, 16),
    anchor_era=89,
    anchor_week=9,
    anchor_day=7,
)
