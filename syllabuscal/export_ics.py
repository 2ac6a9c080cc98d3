"""
iCalendar (.ics) export.

We convert extracted events into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

Events with a time become timed entries (start + duration); events without
one become all-day entries.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from syllabuscal.assemble import DEFAULT_DURATION_MINUTES
from syllabuscal.model import SyllabusEvent

logger = logging.getLogger(__name__)


PRODID = "-//syllabuscal//EN"
UID_DOMAIN = "syllabuscal"

# RFC 5545 content lines are limited to 75 octets
MAX_LINE_OCTETS = 75


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _fold(line: str) -> List[str]:
    """
    Split a content line into 75-octet chunks without breaking UTF-8 characters.
    Continuation lines start with one space.
    """
    out: List[str] = []
    current = ""
    for ch in line:
        if len((current + ch).encode("utf-8")) > MAX_LINE_OCTETS:
            out.append(current)
            current = " "
        current += ch
    out.append(current)
    return out


def _dt_local(date_yyyy_mm_dd: str, time_hh_mm: str) -> datetime:
    return datetime.strptime(f"{date_yyyy_mm_dd} {time_hh_mm}", "%Y-%m-%d %H:%M")


def _event_lines(ev: SyllabusEvent, dtstamp: str) -> List[str]:
    lines = ["BEGIN:VEVENT", f"UID:{_ics_escape(ev.id)}@{UID_DOMAIN}", f"DTSTAMP:{dtstamp}"]

    if ev.time is not None:
        start = _dt_local(ev.date, ev.time)
        end = start + timedelta(minutes=ev.duration_minutes or DEFAULT_DURATION_MINUTES)
        lines.append(f"DTSTART:{start.strftime('%Y%m%dT%H%M00')}")
        lines.append(f"DTEND:{end.strftime('%Y%m%dT%H%M00')}")
    else:
        day = datetime.strptime(ev.date, "%Y-%m-%d")
        # DTEND is exclusive for all-day entries
        lines.append(f"DTSTART;VALUE=DATE:{day.strftime('%Y%m%d')}")
        lines.append(f"DTEND;VALUE=DATE:{(day + timedelta(days=1)).strftime('%Y%m%d')}")

    lines.append(f"SUMMARY:{_ics_escape(ev.title or 'Syllabus Event')}")
    if ev.description:
        lines.append(f"DESCRIPTION:{_ics_escape(ev.description)}")
    lines.append(f"CATEGORIES:{ev.type.upper()}")
    lines.append("END:VEVENT")
    return lines


def build_ics(events: Iterable[SyllabusEvent], now: Optional[datetime] = None) -> str:
    """
    Render events as one VCALENDAR string (CRLF line endings).
    """
    dtstamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")

    lines: List[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append(f"PRODID:{PRODID}")
    lines.append("CALSCALE:GREGORIAN")

    for ev in events:
        lines.extend(_event_lines(ev, dtstamp))

    lines.append("END:VCALENDAR")

    folded: List[str] = []
    for line in lines:
        folded.extend(_fold(line))

    # ICS standard uses CRLF
    return "\r\n".join(folded) + "\r\n"


def export_events_to_ics(events: Iterable[SyllabusEvent], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    events = list(events)
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    out.write_bytes(build_ics(events).encode("utf-8"))
    logger.info("Exported %d events to %s", len(events), out)
    return len(events)
