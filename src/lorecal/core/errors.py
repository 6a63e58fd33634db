from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


class LorecalError(Exception):
    """Base error."""


@dataclass(frozen=True)
class FieldError:
    """One malformed field of a calendar configuration."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class InvalidDefinition(LorecalError):
    """Raised when a calendar shape is malformed. Carries every problem found."""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors: List[FieldError] = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors) or "invalid calendar definition")


class InvalidDate(LorecalError):
    """Raised when a (year, month, day) triple does not exist in a calendar."""


class InvalidRecurrenceRule(LorecalError):
    """Raised for non-positive intervals, end dates before the base date, or
    moon-based rules on a calendar without moons."""
