"""Persist and load harvester settings overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from hattrick_harvester.config import (
    DEFAULT_CALENDAR,
    DEFAULT_EXTRACTION,
    CalendarRules,
    ExtractionRules,
)


CURRENCY_ENV = "HATTRICK_CURRENCY"


@dataclass
class HarvestSettings:
    skills: List[str] = field(default_factory=lambda: list(DEFAULT_EXTRACTION.skills))
    currency_marker: str = DEFAULT_EXTRACTION.currency_marker
    calendar: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "HarvestSettings":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            skills=data.get("skills", list(DEFAULT_EXTRACTION.skills)),
            currency_marker=data.get("currency_marker", DEFAULT_EXTRACTION.currency_marker),
            calendar=data.get("calendar", {}),
        )

    @classmethod
    def from_env(cls, path: Optional[Path] = None) -> "HarvestSettings":
        settings = cls.load(path) if path else cls()
        currency = os.getenv(CURRENCY_ENV)
        if currency:
            settings.currency_marker = currency
        return settings

    def save(self, path: Path) -> None:
        payload = {
            "skills": self.skills,
            "currency_marker": self.currency_marker,
            "calendar": self.calendar,
        }
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    def extraction_rules(self) -> ExtractionRules:
        if not self.skills:
            raise ValueError("skills list cannot be empty")
        return ExtractionRules(
            skills=tuple(self.skills),
            currency_marker=self.currency_marker,
            superseded_keys=DEFAULT_EXTRACTION.superseded_keys,
        )

    def calendar_rules(self) -> CalendarRules:
        if not self.calendar:
            return DEFAULT_CALENDAR
        anchor = self.calendar.get("anchor_date", DEFAULT_CALENDAR.anchor_date.isoformat())
        return CalendarRules(
            anchor_date=date.fromisoformat(anchor),
            anchor_era=int(self.calendar.get("anchor_era", DEFAULT_CALENDAR.anchor_era)),
            anchor_week=int(self.calendar.get("anchor_week", DEFAULT_CALENDAR.anchor_week)),
            anchor_day=int(self.calendar.get("anchor_day", DEFAULT_CALENDAR.anchor_day)),
            days_per_week=int(self.calendar.get("days_per_week", DEFAULT_CALENDAR.days_per_week)),
            weeks_per_era=int(self.calendar.get("weeks_per_era", DEFAULT_CALENDAR.weeks_per_era)),
        )
