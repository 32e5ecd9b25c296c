"""Per-field extraction outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class FieldNotFoundError(LookupError):
    """Raised (or carried) when a field's pattern is absent from the text."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} not found in the input text")


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    """Either an extracted value or the failure that prevented it."""

    field: str
    value: Optional[T] = None
    error: Optional[FieldNotFoundError] = None

    @classmethod
    def found(cls, field: str, value: T) -> "FieldResult[T]":
        return cls(field=field, value=value)

    @classmethod
    def missing(cls, field: str, message: str | None = None) -> "FieldResult[T]":
        return cls(field=field, error=FieldNotFoundError(field, message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return default if self.error is not None else self.value  # type: ignore[return-value]
