"""
Parsing (syllabus text -> SyllabusEvent list).

Pipeline per call:
- (documents only) decode the file and normalize the text
- pick a reference date: Jan 1 of the given year, or today
- for every non-empty line: find dates -> classify -> one event per date

Important rules (DO NOT CHANGE):
- a line without a date produces no event
- 1 (line, date) pair = 1 event
- output follows line order, then left-to-right date order
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from syllabuscal.assemble import assemble_events
from syllabuscal.classify import classify_line
from syllabuscal.config import ExtractOptions
from syllabuscal.dates import find_dates_in_line
from syllabuscal.documents import extract_text
from syllabuscal.errors import InvalidArgumentError
from syllabuscal.model import SyllabusEvent
from syllabuscal.normalize import normalize_syllabus_text
from syllabuscal.year import infer_academic_year, validate_reference_year

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def reference_date_for(reference_year: Optional[int], today: Optional[date] = None) -> date:
    """
    Anchor for partial dates: Jan 1 of `reference_year`, else today.
    """
    if reference_year is None:
        return today or date.today()
    return date(validate_reference_year(reference_year), 1, 1)


def _content_lines(text: str) -> List[str]:
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line]


# ---------------------------------------------------------------------------
# Core pipeline
# ---------------------------------------------------------------------------


def parse_syllabus_text(
    text: str,
    reference_year: Optional[int] = None,
    *,
    today: Optional[date] = None,
) -> List[SyllabusEvent]:
    """
    Extract calendar events from plain syllabus text.

    Empty text gives an empty list. Only a non-string `text` or an invalid
    `reference_year` raises (InvalidArgumentError).
    """
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Syllabus text must be a string, got {type(text).__name__}")

    anchor = reference_date_for(reference_year, today=today)

    events: List[SyllabusEvent] = []
    for line in _content_lines(text):
        dates = find_dates_in_line(line, anchor)
        if not dates:
            continue
        events.extend(assemble_events(line, dates, classify_line(line)))

    logger.info("Extracted %d events (reference date %s)", len(events), anchor.isoformat())
    return events


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def parse_document(
    source: Union[str, Path, bytes],
    filename: Optional[str] = None,
    options: Optional[ExtractOptions] = None,
    *,
    today: Optional[date] = None,
) -> List[SyllabusEvent]:
    """
    Decode a syllabus file and run the pipeline on it.

    Without an explicit reference year, the year is inferred from the
    decoded text first.
    """
    options = options or ExtractOptions()

    # fail on a bad year before touching the file
    reference_year = options.reference_year
    if reference_year is not None:
        reference_year = validate_reference_year(reference_year)

    raw = extract_text(source, filename)
    text = normalize_syllabus_text(raw, remove_header_footer=options.remove_header_footer)

    if reference_year is None:
        reference_year = infer_academic_year(raw, today=today)
        logger.debug("Inferred reference year %d", reference_year)

    return parse_syllabus_text(text, reference_year, today=today)
