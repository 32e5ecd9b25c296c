"""Configuration helpers for extraction and calendar rules."""

from .rules import (
    DEFAULT_CALENDAR,
    DEFAULT_EXTRACTION,
    DEFAULT_SKILLS,
    CalendarRules,
    ExtractionRules,
)

__all__ = [
    "CalendarRules",
    "ExtractionRules",
    "DEFAULT_CALENDAR",
    "DEFAULT_EXTRACTION",
    "DEFAULT_SKILLS",
]
