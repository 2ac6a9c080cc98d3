"""
Central data model definitions used across the project.

SyllabusEvent is the only record the pipeline produces. It is a fixed-schema,
frozen dataclass so that:
- every module shares the same field names
- invalid records are rejected when they are created, not when they are exported
- consumers edit events by building new ones (dataclasses.replace)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from syllabuscal.errors import EventValidationError


EVENT_TYPES = ("assignment", "reading", "exam", "lecture", "other")

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class SyllabusEvent:
    """
    One calendar entry extracted from one syllabus line.

    `date` is YYYY-MM-DD. `time` is HH:MM (24h) or None for an all-day entry.
    `confidence` is advisory only and always within [0, 1].
    """

    id: str
    title: str
    date: str
    type: str = "other"
    confidence: float = 0.4
    time: Optional[str] = None
    duration_minutes: Optional[int] = 60
    description: str = ""
    source_line: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise EventValidationError("Event id must not be empty")
        if not isinstance(self.date, str) or not _DATE_RE.fullmatch(self.date):
            raise EventValidationError(f"Invalid event date: {self.date!r}")
        try:
            datetime.strptime(self.date, "%Y-%m-%d")
        except ValueError:
            raise EventValidationError(f"Invalid event date: {self.date!r}") from None
        if self.time is not None and not _TIME_RE.match(self.time):
            raise EventValidationError(f"Invalid event time: {self.time!r}")
        if self.type not in EVENT_TYPES:
            raise EventValidationError(f"Invalid event type: {self.type!r}")
        if isinstance(self.confidence, bool) or not 0.0 <= self.confidence <= 1.0:
            raise EventValidationError(f"Confidence out of range: {self.confidence!r}")
        if self.duration_minutes is not None and (
            isinstance(self.duration_minutes, bool) or self.duration_minutes <= 0
        ):
            raise EventValidationError(f"Invalid duration: {self.duration_minutes!r}")

    @property
    def all_day(self) -> bool:
        return self.time is None

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain dict using the interchange field names (camelCase).
        """
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "durationMinutes": self.duration_minutes,
            "type": self.type,
            "description": self.description,
            "sourceLine": self.source_line,
            "confidence": self.confidence,
        }
