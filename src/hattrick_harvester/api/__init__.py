"""REST API for the harvester."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import FastAPI, HTTPException, Query

from hattrick_harvester.api.schemas import (
    CalendarResponse,
    MergeRequest,
    MergeResponse,
    TextPayload,
)
from hattrick_harvester.config_loader import HarvestSettings
from hattrick_harvester.ingest import (
    ListingParseError,
    MissingIdentityError,
    extract_player_profile,
    merge_records,
    parse_listing,
)
from hattrick_harvester.season import current_coordinate


logger = logging.getLogger(__name__)


def _listing_error(exc: ListingParseError) -> HTTPException:
    return HTTPException(status_code=422, detail={"stage": exc.stage, "message": str(exc)})


def create_app(settings: HarvestSettings | None = None) -> FastAPI:
    app = FastAPI(title="hattrick harvester")
    settings = settings or HarvestSettings.from_env()
    extraction = settings.extraction_rules()
    calendar = settings.calendar_rules()

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/profiles/extract")
    async def extract_profile(payload: TextPayload) -> dict[str, Any]:
        return extract_player_profile(payload.text, extraction).to_payload()

    @app.post("/listings/parse")
    async def parse_listing_text(payload: TextPayload) -> dict[str, int]:
        try:
            listing = parse_listing(payload.text, currency_marker=extraction.currency_marker)
        except ListingParseError as exc:
            raise _listing_error(exc) from exc
        return listing.to_payload()

    @app.post("/merge", response_model=MergeResponse)
    async def merge(payload: MergeRequest) -> MergeResponse:
        try:
            listing = parse_listing(payload.listing_text, currency_marker=extraction.currency_marker)
            result = merge_records(
                payload.persisted,
                listing,
                superseded_keys=extraction.superseded_keys,
            )
        except ListingParseError as exc:
            raise _listing_error(exc) from exc
        except MissingIdentityError as exc:
            logger.warning("Merge request without %s rejected", exc.args[0])
            raise HTTPException(
                status_code=400, detail=f"persisted record has no {exc.args[0]}"
            ) from exc
        return MergeResponse(
            player_id=result.player_id,
            filename_key=result.filename_key,
            record=result.record,
        )

    @app.get("/calendar", response_model=CalendarResponse)
    async def season_calendar(day: date | None = Query(None, alias="date")) -> CalendarResponse:
        day = day or date.today()
        coordinate = current_coordinate(day, calendar)
        return CalendarResponse(date=day, era=coordinate.era, week=coordinate.week)

    return app


__all__ = ["create_app"]
