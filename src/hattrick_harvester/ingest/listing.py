"""Token scanner for transfer-listing text blocks.

Listing blocks wrap unpredictably, so fields are located relative to the
``<digits> (<digits>)`` motif instead of at fixed offsets. The motif appears
twice: first as ``Season (SeasonWeek)`` and later as ``AgeYears (AgeDays)``.
Tokens between the two pairs make up TSI; tokens after the age pair up to the
currency marker make up the price.

The age scan starts right after the season pair, so a second pair directly
adjacent to it is reported as an empty TSI span instead of being read as TSI.
Numbers too long to convert are reported against the stage that holds them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from hattrick_harvester.config import DEFAULT_EXTRACTION
from hattrick_harvester.models import ListingRecord


logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[0-9]+")
_PAREN_NUMBER = re.compile(r"\(([0-9]+)\)")
_NON_DIGIT = re.compile(r"[^0-9]")


class ScanState(Enum):
    SEEKING_SEASON = "season/week"
    SEEKING_AGE = "age"
    ACCUMULATING_PRICE = "price"
    DONE = "done"


class ListingParseError(ValueError):
    """Raised when a listing block is missing one of its numeric groups."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage}: {message}")


def _digits(token: str) -> str:
    return _NON_DIGIT.sub("", token)


def _to_int(digits: str, stage: str) -> int:
    try:
        return int(digits)
    except ValueError as exc:
        raise ListingParseError(stage, f"cannot read a {len(digits)}-digit number") from exc


@dataclass
class ListingScan:
    """Single-use scan over one tokenized listing block."""

    tokens: List[str]
    currency_marker: str = DEFAULT_EXTRACTION.currency_marker
    state: ScanState = ScanState.SEEKING_SEASON
    season: Optional[int] = None
    season_week: Optional[int] = None
    season_index: Optional[int] = None
    tsi_digits: str = ""
    tsi: Optional[int] = None
    age_years: Optional[int] = None
    age_days: Optional[int] = None
    age_index: Optional[int] = None
    price_digits: str = ""
    price: Optional[int] = None
    _handlers: Dict[ScanState, Callable[[], ScanState]] = field(
        init=False, repr=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        self._handlers = {
            ScanState.SEEKING_SEASON: self.scan_season,
            ScanState.SEEKING_AGE: self.scan_age,
            ScanState.ACCUMULATING_PRICE: self.scan_price,
        }

    @classmethod
    def from_text(cls, text: str, *, currency_marker: str | None = None) -> "ListingScan":
        return cls(
            tokens=text.split(),
            currency_marker=currency_marker or DEFAULT_EXTRACTION.currency_marker,
        )

    def _is_pair(self, index: int) -> bool:
        return (
            index + 1 < len(self.tokens)
            and _NUMBER.fullmatch(self.tokens[index]) is not None
            and _PAREN_NUMBER.fullmatch(self.tokens[index + 1]) is not None
        )

    def _read_pair(self, index: int, stage: str) -> tuple[int, int]:
        return (
            _to_int(self.tokens[index], stage),
            _to_int(self.tokens[index + 1][1:-1], stage),
        )

    def scan_season(self) -> ScanState:
        stage = ScanState.SEEKING_SEASON.value
        for index in range(len(self.tokens) - 1):
            if self._is_pair(index):
                self.season, self.season_week = self._read_pair(index, stage)
                self.season_index = index
                return ScanState.SEEKING_AGE
        raise ListingParseError(stage, "could not locate a 'Season (SeasonWeek)' pattern in the input")

    def scan_age(self) -> ScanState:
        if self.season_index is None:
            raise RuntimeError("age scan requires a located season pair")
        stage = ScanState.SEEKING_AGE.value
        start = self.season_index + 2
        for index in range(start, len(self.tokens) - 1):
            if not self._is_pair(index):
                continue
            span = self.tokens[start:index]
            if not span:
                raise ListingParseError(
                    "TSI", "no tokens between 'Season (SeasonWeek)' and 'AgeYears (AgeDays)'"
                )
            self.tsi_digits = "".join(_digits(token) for token in span)
            if not self.tsi_digits:
                raise ListingParseError("TSI", f"could not parse TSI from tokens {span!r}")
            self.tsi = _to_int(self.tsi_digits, "TSI")
            self.age_years, self.age_days = self._read_pair(index, stage)
            self.age_index = index
            return ScanState.ACCUMULATING_PRICE
        raise ListingParseError(stage, "could not locate 'AgeYears (AgeDays)' after the TSI tokens")

    def scan_price(self) -> ScanState:
        if self.age_index is None:
            raise RuntimeError("price scan requires a located age pair")
        stage = ScanState.ACCUMULATING_PRICE.value
        for token in self.tokens[self.age_index + 2 :]:
            self.price_digits += _digits(token)
            if self.currency_marker in token:
                if not self.price_digits:
                    break
                self.price = _to_int(self.price_digits, stage)
                return ScanState.DONE
        raise ListingParseError(
            stage,
            f"no {self.currency_marker!r} found or no digits in the trailing tokens",
        )

    def step(self) -> ScanState:
        handler = self._handlers.get(self.state)
        if handler is None:
            raise RuntimeError(f"scan already finished in state {self.state.name}")
        self.state = handler()
        return self.state

    def run(self) -> ListingRecord:
        while self.state is not ScanState.DONE:
            self.step()
        return self.record()

    def record(self) -> ListingRecord:
        if self.state is not ScanState.DONE:
            raise RuntimeError(f"scan incomplete (state {self.state.name})")
        return ListingRecord(
            season=self.season,
            season_week=self.season_week,
            tsi=self.tsi,
            age_years=self.age_years,
            age_days=self.age_days,
            price=self.price,
        )


def parse_listing(
    text: str, *, currency_marker: str = DEFAULT_EXTRACTION.currency_marker
) -> ListingRecord:
    """Parse a listing block into a :class:`ListingRecord` or raise :class:`ListingParseError`."""

    record = ListingScan.from_text(text, currency_marker=currency_marker).run()
    logger.debug("Parsed listing %s", record.to_payload())
    return record
