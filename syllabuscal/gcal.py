"""
Google Calendar sync.

Pushes extracted events to a calendar through the Calendar v3 REST API.
Getting an OAuth access token is the caller's job; this module only needs
the bearer token.

Mapping:
- time present -> start/end dateTime (end = start + duration)
- time absent  -> all-day: start.date, end.date = next day (exclusive)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import requests

from syllabuscal.assemble import DEFAULT_DURATION_MINUTES
from syllabuscal.config import DEFAULT_CALENDAR_ID
from syllabuscal.errors import CalendarAuthError, CalendarSyncError
from syllabuscal.model import SyllabusEvent

logger = logging.getLogger(__name__)


API_BASE = "https://www.googleapis.com/calendar/v3"
REQUEST_TIMEOUT = 30


@dataclass
class SyncResult:
    event_id: str
    ok: bool
    remote_id: Optional[str] = None
    error: Optional[str] = None


def event_to_resource(ev: SyllabusEvent, time_zone: Optional[str] = None) -> Dict[str, Any]:
    """
    Map one SyllabusEvent to a Calendar API event resource.
    """
    resource: Dict[str, Any] = {
        "summary": ev.title,
        "description": ev.description or ev.source_line,
        "status": "confirmed",
    }

    if ev.time is not None:
        start = datetime.strptime(f"{ev.date} {ev.time}", "%Y-%m-%d %H:%M")
        end = start + timedelta(minutes=ev.duration_minutes or DEFAULT_DURATION_MINUTES)
        resource["start"] = {"dateTime": start.isoformat()}
        resource["end"] = {"dateTime": end.isoformat()}
        if time_zone:
            resource["start"]["timeZone"] = time_zone
            resource["end"]["timeZone"] = time_zone
    else:
        day = datetime.strptime(ev.date, "%Y-%m-%d").date()
        resource["start"] = {"date": day.isoformat()}
        resource["end"] = {"date": (day + timedelta(days=1)).isoformat()}

    return resource


def _error_message(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text[:200]}"
    message = (payload.get("error") or {}).get("message") if isinstance(payload, dict) else None
    return f"HTTP {resp.status_code}: {message or resp.reason}"


def _remote_id(resp: requests.Response) -> Optional[str]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    return payload.get("id") if isinstance(payload, dict) else None


def insert_events(
    events: Iterable[SyllabusEvent],
    access_token: str,
    calendar_id: str = DEFAULT_CALENDAR_ID,
    time_zone: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> List[SyncResult]:
    """
    Insert events one by one and report a SyncResult per event (input order).

    A rejected token stops the run with CalendarAuthError; a network failure
    with CalendarSyncError. Any other HTTP error is recorded and the loop
    moves on to the next event.
    """
    if not access_token:
        raise CalendarAuthError("No Google access token configured (set GOOGLE_ACCESS_TOKEN)")

    http = session or requests.Session()
    url = f"{API_BASE}/calendars/{quote(calendar_id, safe='@.')}/events"
    headers = {"Authorization": f"Bearer {access_token}"}

    results: List[SyncResult] = []
    for ev in events:
        try:
            resp = http.post(url, json=event_to_resource(ev, time_zone), headers=headers, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise CalendarSyncError(f"Google Calendar request failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise CalendarAuthError(_error_message(resp))

        if resp.ok:
            remote_id = _remote_id(resp)
            results.append(SyncResult(event_id=ev.id, ok=True, remote_id=remote_id))
        else:
            message = _error_message(resp)
            logger.warning("Insert failed for event %s: %s", ev.id, message)
            results.append(SyncResult(event_id=ev.id, ok=False, error=message))

    logger.info("Synced %d/%d events to calendar %s", sum(r.ok for r in results), len(results), calendar_id)
    return results
