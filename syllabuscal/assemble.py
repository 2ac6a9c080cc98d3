"""
Event assembly.

Turns (line, date, classification) into SyllabusEvent records and is the
single place that knows the defaults (title length, duration, confidence).

event_from_dict() is the gate for records that did not come out of the
pipeline (LLM output, JSON files edited by hand): everything is normalized
against the SyllabusEvent schema before it enters an event list.
"""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from syllabuscal.classify import FALLBACK, Classification
from syllabuscal.errors import EventValidationError
from syllabuscal.model import EVENT_TYPES, SyllabusEvent


TITLE_MAX_LENGTH = 140
DEFAULT_DURATION_MINUTES = 60
DEFAULT_EVENT_TYPE = FALLBACK.type
DEFAULT_CONFIDENCE = FALLBACK.confidence

_WHITESPACE_RE = re.compile(r"\s+")


def new_event_id() -> str:
    return str(uuid.uuid4())


def make_title(line: str) -> str:
    """
    Collapse whitespace runs and cut to TITLE_MAX_LENGTH characters.
    """
    return _WHITESPACE_RE.sub(" ", line).strip()[:TITLE_MAX_LENGTH]


def assemble_events(
    line: str,
    dates: Iterable[date],
    classification: Classification,
) -> List[SyllabusEvent]:
    """
    One event per extracted date, all sharing the line's classification.

    `description` and `source_line` keep the original, untruncated line.
    """
    title = make_title(line)
    return [
        SyllabusEvent(
            id=new_event_id(),
            title=title,
            date=d.isoformat(),
            time=None,
            duration_minutes=DEFAULT_DURATION_MINUTES,
            type=classification.type,
            confidence=classification.confidence,
            description=line,
            source_line=line,
        )
        for d in dates
    ]


# ---------------------------------------------------------------------------
# External records
# ---------------------------------------------------------------------------


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _optional_str(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise EventValidationError(f"Field '{field}' must be a string, got {type(value).__name__}")
    value = value.strip()
    return value or None


def event_from_dict(record: Any, event_id: Optional[str] = None) -> SyllabusEvent:
    """
    Validate and normalize one externally supplied record.

    Accepts camelCase (durationMinutes, sourceLine) or snake_case keys.
    `title` and `date` are required; the rest falls back to the assembler
    defaults. Raises EventValidationError for anything that does not fit.
    """
    if not isinstance(record, Mapping):
        raise EventValidationError(f"Event record must be an object, got {type(record).__name__}")

    title = _optional_str(record.get("title"), "title")
    day = _optional_str(record.get("date"), "date")
    if not title or not day:
        raise EventValidationError("Each event must have a 'date' (YYYY-MM-DD) and 'title' string")
    try:
        day = datetime.strptime(day.strip(), "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise EventValidationError(f"Invalid event date: {day!r}") from None

    event_type = _optional_str(record.get("type"), "type") or DEFAULT_EVENT_TYPE
    event_type = event_type.lower()
    if event_type not in EVENT_TYPES:
        raise EventValidationError(f"Invalid event type: {event_type!r}")

    confidence = record.get("confidence")
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
    elif isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise EventValidationError(f"Confidence must be a number, got {confidence!r}")

    duration = _pick(record, "durationMinutes", "duration_minutes")
    if duration is None:
        duration = DEFAULT_DURATION_MINUTES
    elif isinstance(duration, bool) or not isinstance(duration, (int, float)) or duration != int(duration):
        raise EventValidationError(f"Duration must be whole minutes, got {duration!r}")

    clock = _optional_str(record.get("time"), "time")
    if clock and re.match(r"^\d:\d\d$", clock):
        clock = "0" + clock

    source_line = _optional_str(_pick(record, "sourceLine", "source_line"), "sourceLine") or title
    description = _optional_str(record.get("description"), "description") or source_line

    return SyllabusEvent(
        id=event_id or _optional_str(record.get("id"), "id") or new_event_id(),
        title=make_title(title),
        date=day,
        time=clock,
        duration_minutes=int(duration),
        type=event_type,
        confidence=float(confidence),
        description=description,
        source_line=source_line,
    )
