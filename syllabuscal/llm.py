"""
Language-model extraction (alternative to the heuristic pipeline).

Sends the syllabus text to the OpenAI chat completions endpoint and asks for
a JSON array of events. The reply is never trusted as-is: every record goes
through assemble.event_from_dict() and gets a fresh id when its own id is
missing or already taken.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

import requests

from syllabuscal.assemble import event_from_dict, new_event_id
from syllabuscal.config import DEFAULT_OPENAI_MODEL
from syllabuscal.errors import LlmExtractionError
from syllabuscal.model import SyllabusEvent

logger = logging.getLogger(__name__)


OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
MAX_PROMPT_CHARS = 23000
MAX_TOKENS = 1600
REQUEST_TIMEOUT = 120

SYSTEM_PROMPT = "You are an assistant that extracts calendar events from course syllabi."

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def build_prompt(text: str, fallback_year: Optional[int] = None) -> str:
    """
    User prompt asking for a bare JSON array of SyllabusEvent objects.
    """
    year_hint = f"Assume year {fallback_year} for dates lacking a year." if fallback_year else ""
    snippet = text[:MAX_PROMPT_CHARS]
    return f"""
You will be given the plain text of an academic syllabus. Extract calendar-relevant items (lectures, readings with due dates, assignments, quizzes, midterms/finals, and other dated events) and RETURN ONLY a JSON array of objects with these fields (no commentary, no code fences):

  id: string            short unique id such as "e1", "e2"
  title: string
  date: string          ISO yyyy-mm-dd
  time: string          optional "HH:MM" (24h)
  durationMinutes: int  optional
  type: string          one of "assignment", "reading", "exam", "lecture", "other"
  description: string   optional
  sourceLine: string    original text line from the syllabus
  confidence: number    0..1

{year_hint}

Rules:
- Return strictly valid JSON ONLY. Do not include any explanatory text.
- Include an item for every explicit calendar date or clear date range. For a range (e.g. "April 3-4") output one event on the start date and mention the range in description.
- Put the original sentence/line in "sourceLine".
- Confidence: 0.9+ for explicit dates/types; 0.4-0.7 for inferred or ambiguous items.

Syllabus text (begin):
---
{snippet}
---
Return the JSON array now.
""".strip()


def parse_llm_response(content: str) -> List[SyllabusEvent]:
    """
    Turn the assistant's reply into validated events.

    Raises LlmExtractionError when the reply is not a JSON array and
    EventValidationError when a record breaks the schema.
    """
    cleaned = _FENCE_RE.sub("", (content or "").strip())
    try:
        records: Any = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LlmExtractionError(f"Failed to parse JSON returned by LLM: {exc}", raw=content) from exc

    if not isinstance(records, list):
        raise LlmExtractionError("Parsed JSON is not an array", raw=content)

    events: List[SyllabusEvent] = []
    seen: set[str] = set()
    for record in records:
        ev = event_from_dict(record)
        if ev.id in seen:
            ev = event_from_dict(record, event_id=new_event_id())
        seen.add(ev.id)
        events.append(ev)
    return events


def extract_events_with_llm(
    text: str,
    api_key: Optional[str],
    fallback_year: Optional[int] = None,
    model: str = DEFAULT_OPENAI_MODEL,
    session: Optional[requests.Session] = None,
) -> List[SyllabusEvent]:
    """
    Ask the model for events in `text` and return them validated.
    """
    if not api_key:
        raise LlmExtractionError("OpenAI API key not configured (set OPENAI_API_KEY)")

    http = session or requests.Session()
    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(text, fallback_year)},
        ],
        "temperature": 0.0,
        "max_tokens": MAX_TOKENS,
    }

    try:
        resp = http.post(
            OPENAI_CHAT_URL,
            json=payload,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise LlmExtractionError(f"LLM request failed: {exc}") from exc

    if not resp.ok:
        raise LlmExtractionError(f"LLM request failed with HTTP {resp.status_code}", raw=resp.text)

    try:
        body = resp.json()
        content = body["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        content = None

    if not isinstance(content, str) or not content.strip():
        raise LlmExtractionError("Empty LLM response", raw=resp.text)

    events = parse_llm_response(content)
    logger.info("LLM returned %d events", len(events))
    return events
