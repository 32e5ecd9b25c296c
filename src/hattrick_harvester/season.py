"""Map standard dates onto the game's season calendar (16 weeks of 7 days)."""

from __future__ import annotations

from datetime import date
from typing import NamedTuple, Optional

from hattrick_harvester.config import DEFAULT_CALENDAR, CalendarRules


class CalendarCoordinate(NamedTuple):
    era: int
    week: int


def calendar_coordinate(day: date, rules: CalendarRules = DEFAULT_CALENDAR) -> CalendarCoordinate:
    """Return the (season, week) that ``day`` falls in.

    Positions count days from the start of the anchor season (1-based), so
    floor division handles dates on either side of the anchor.
    """

    position = rules.anchor_position + (day - rules.anchor_date).days
    era_offset, day_of_era = divmod(position - 1, rules.days_per_era)
    return CalendarCoordinate(
        era=rules.anchor_era + era_offset,
        week=day_of_era // rules.days_per_week + 1,
    )


def current_coordinate(
    today: Optional[date] = None, rules: CalendarRules = DEFAULT_CALENDAR
) -> CalendarCoordinate:
    return calendar_coordinate(today or date.today(), rules)
