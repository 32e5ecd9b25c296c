"""Pydantic models for API I/O."""

from .records import CalendarResponse, MergeRequest, MergeResponse, TextPayload

__all__ = [
    "CalendarResponse",
    "MergeRequest",
    "MergeResponse",
    "TextPayload",
]
