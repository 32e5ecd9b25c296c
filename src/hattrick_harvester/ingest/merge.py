"""Combine a stored profile payload with a freshly parsed listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Mapping

from hattrick_harvester.config import DEFAULT_EXTRACTION
from hattrick_harvester.models import (
    PLAYER_ID_KEY,
    SEASON_KEY,
    SEASON_WEEK_KEY,
    ListingRecord,
)


logger = logging.getLogger(__name__)


class MissingIdentityError(KeyError):
    """Raised when a stored payload carries no usable ``PlayerID``."""


@dataclass(frozen=True)
class MergeResult:
    player_id: Any
    record: Dict[str, Any]
    filename_key: str


def build_filename_key(player_id: Any, merged: Mapping[str, Any]) -> str:
    season = merged.get(SEASON_KEY)
    season_week = merged.get(SEASON_WEEK_KEY)
    if season is None or season_week is None:
        logger.warning(
            "Missing %s or %s for player %s; using generic filename",
            SEASON_KEY,
            SEASON_WEEK_KEY,
            player_id,
        )
        return str(player_id)
    return f"{player_id}_{season}_{season_week}"


def merge_records(
    persisted: Mapping[str, Any],
    listing: ListingRecord,
    *,
    superseded_keys: AbstractSet[str] = DEFAULT_EXTRACTION.superseded_keys,
) -> MergeResult:
    """Return the stored payload updated with ``listing``.

    ``superseded_keys`` are dropped from ``persisted`` before the listing is
    applied. Listing values are applied last, so they win over any stored key
    that survives the filter.
    """

    player_id = persisted.get(PLAYER_ID_KEY)
    if player_id is None:
        raise MissingIdentityError(PLAYER_ID_KEY)

    merged = {key: value for key, value in persisted.items() if key not in superseded_keys}
    listing_payload = listing.to_payload()
    collisions = sorted(set(merged).intersection(listing_payload))
    if collisions:
        logger.debug("Listing overrides stored keys %s for player %s", collisions, player_id)
    merged.update(listing_payload)

    return MergeResult(
        player_id=player_id,
        record=merged,
        filename_key=build_filename_key(player_id, merged),
    )
