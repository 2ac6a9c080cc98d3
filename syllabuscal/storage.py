"""
JSON files of extracted events.

The CLI hands event lists between commands through a file the user picks:

    syllabuscal parse syllabus.pdf --json events.json
    syllabuscal export events.json out.ics

File format:

    {"events": [ {id, title, date, time, durationMinutes, type, ...}, ... ]}

Loading runs every record through event_from_dict(), so a hand-edited file
is validated the same way as any other external record.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from syllabuscal.assemble import event_from_dict
from syllabuscal.errors import EventValidationError
from syllabuscal.model import SyllabusEvent


def save_events(events: Iterable[SyllabusEvent], path: str | Path) -> None:
    """
    Write events to `path`. Creates parent directories if needed.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    payload = {"events": [ev.to_dict() for ev in events]}
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def load_events(path: str | Path) -> List[SyllabusEvent]:
    """
    Read events from `path` (an {"events": [...]} object or a bare list).

    A missing file raises FileNotFoundError; anything that is not a valid
    event list raises EventValidationError.
    """
    src = Path(path)
    try:
        data = json.loads(src.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise EventValidationError(f"{src} is not a valid events file: {exc}") from exc

    records = data.get("events") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise EventValidationError(f"{src} does not contain an events list")

    return [event_from_dict(record) for record in records]
