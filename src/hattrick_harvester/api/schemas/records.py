from __future__ import annotations

import datetime
from typing import Any

from pydantic import BaseModel, Field


class TextPayload(BaseModel):
    text: str = Field(..., min_length=1)


class MergeRequest(BaseModel):
    persisted: dict[str, Any]
    listing_text: str = Field(..., min_length=1)


class MergeResponse(BaseModel):
    player_id: Any
    filename_key: str
    record: dict[str, Any]


class CalendarResponse(BaseModel):
    date: datetime.date
    era: int
    week: int
