"""
Date detection inside one syllabus line.

Candidate expressions are located with a single regular expression so that
matches come back left to right and never overlap. Natural-language month
dates and numeric dates are then handed to dateparser, anchored on a
reference date; weekday phrases ("next Monday") and bare ordinals
("the 15th") are resolved against the same anchor.

Supported shapes:
    2025-01-15
    Jan 15 / January 15th, 2025 / Sept. 3 / Mon, Jan 15
    15 January / 3rd of March 2025
    1/15 / 1/15/25 / Tue 1/16/2025
    next Monday / this Friday / last Wed
    Quiz Monday (one bare weekday per line)
    the 15th
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import List, NamedTuple, Optional, Union

import dateparser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# "5 may be skipped" is not a date; only a capitalized May counts day-first
_MONTH_DAY_FIRST = _MONTH.replace("|may|", "|(?-i:May)|")

_WEEKDAY = (
    r"(?:mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?|thu(?:r(?:s(?:day)?)?)?"
    r"|fri(?:day)?|sat(?:urday)?|sun(?:day)?)"
)

_ORD = r"(?:st|nd|rd|th)?"
# only 19xx/20xx counts as a year; "Jan 15 1030-1145" is a time range
_YEAR_TAIL = r"(?:(?:,\s*|\s+)(?:19|20)\d{2}\b(?![-:]\d))?"
_WEEKDAY_PREFIX = rf"(?:\b{_WEEKDAY}\.?,?\s+)?"

_ISO = r"\b\d{4}-\d{1,2}-\d{1,2}\b"
_NAMED = rf"\b{_MONTH}\.?\s+\d{{1,2}}{_ORD}\b{_YEAR_TAIL}"
# "Week 3 Jan 15" must not read as Jan 3
_DAY_FIRST = (
    rf"\b\d{{1,2}}{_ORD}\s+(?:of\s+)?{_MONTH_DAY_FIRST}\b"
    rf"(?!\.?\s+\d{{1,2}}(?:st|nd|rd|th)?\b)\.?{_YEAR_TAIL}"
)
_NUMERIC = r"\b\d{1,2}/\d{1,2}(?:/(?:\d{4}|\d{2}))?\b"
_RELATIVE = rf"\b(?:next|this|last)\s+{_WEEKDAY}\b"
_ORDINAL = r"\bthe\s+\d{1,2}(?:st|nd|rd|th)\b"
_BARE_WEEKDAY = r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b"

DATE_RE = re.compile(
    rf"(?P<iso>{_ISO})"
    rf"|{_WEEKDAY_PREFIX}(?:(?P<named>{_NAMED})|(?P<dayfirst>{_DAY_FIRST})|(?P<numeric>{_NUMERIC}))"
    rf"|(?P<relative>{_RELATIVE})"
    rf"|(?P<ordinal>{_ORDINAL})"
    rf"|(?P<weekday>{_BARE_WEEKDAY})",
    re.IGNORECASE,
)

_HAS_YEAR_RE = re.compile(r"\b\d{4}\b")
# a year joined by whitespace only, as in "Mar 3 2000 words"
_LOOSE_YEAR_RE = re.compile(r"(?<![,\s])\s+((?:19|20)\d{2})$")
LOOSE_YEAR_WINDOW = 5
_ORDINAL_SUFFIX_RE = re.compile(r"(\d)(?:st|nd|rd|th)\b", re.IGNORECASE)

_WEEKDAYS = {"mo": MO, "tu": TU, "we": WE, "th": TH, "fr": FR, "sa": SA, "su": SU}

DATEPARSER_LANGUAGES = ["en"]


class DateMatch(NamedTuple):
    text: str
    value: date


# ---------------------------------------------------------------------------
# Resolution helpers
# ---------------------------------------------------------------------------


def _anchor_date(reference: Union[date, datetime]) -> date:
    return reference.date() if isinstance(reference, datetime) else reference


def _dateparser_settings(anchor: date) -> dict:
    return {
        "RELATIVE_BASE": datetime.combine(anchor, time.min),
        "DATE_ORDER": "MDY",
        "PREFER_DAY_OF_MONTH": "first",
        "RETURN_AS_TIMEZONE_AWARE": False,
    }


def _parse_with_dateparser(text: str, anchor: date) -> Optional[date]:
    parsed = dateparser.parse(text, languages=DATEPARSER_LANGUAGES, settings=_dateparser_settings(anchor))
    if parsed is None:
        return None
    return parsed.date()


def _resolve_named(raw: str, anchor: date) -> Optional[date]:
    """
    "Sept. 3rd" -> "Sept 3 2025" -> dateparser.
    """
    loose = _LOOSE_YEAR_RE.search(raw)
    if loose and abs(int(loose.group(1)) - anchor.year) > LOOSE_YEAR_WINDOW:
        raw = raw[: loose.start()]
    text = _ORDINAL_SUFFIX_RE.sub(r"\1", raw)
    text = re.sub(r"\bof\b", " ", text, flags=re.IGNORECASE)
    text = text.replace(".", " ").replace(",", " ")
    text = " ".join(text.split())
    if not _HAS_YEAR_RE.search(text):
        text = f"{text} {anchor.year}"
    return _parse_with_dateparser(text, anchor)


def _resolve_numeric(raw: str, anchor: date) -> Optional[date]:
    parts = raw.split("/")
    if len(parts) == 2:
        raw = f"{raw}/{anchor.year}"
    return _parse_with_dateparser(raw, anchor)


def _resolve_iso(raw: str) -> Optional[date]:
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        return None


def _resolve_relative(raw: str, anchor: date) -> Optional[date]:
    """
    this X -> first X on or after the anchor
    next X -> first X strictly after the anchor
    last X -> last X strictly before the anchor
    """
    qualifier, day_name = raw.lower().split()
    weekday = _WEEKDAYS[day_name[:2]]
    if qualifier == "this":
        return anchor + relativedelta(weekday=weekday(+1))
    if qualifier == "next":
        return anchor + relativedelta(days=+1, weekday=weekday(+1))
    return anchor + relativedelta(days=-1, weekday=weekday(-1))


def _resolve_weekday(raw: str, anchor: date) -> date:
    """
    Bare "Monday" reads like "this Monday".
    """
    return anchor + relativedelta(weekday=_WEEKDAYS[raw.lower()[:2]](+1))


def _resolve_ordinal(raw: str, anchor: date) -> Optional[date]:
    day = int(re.search(r"\d{1,2}", raw).group(0))
    try:
        return anchor.replace(day=day)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_date_matches(line: str, reference: Union[date, datetime]) -> List[DateMatch]:
    """
    Scan one line and return every resolvable date expression, left to right.

    Expressions without a year take the reference date's year. Bare weekday
    names are skipped on lines that list several of them, since
    "Class meets Monday and Wednesday" is a meeting pattern, not a date.
    """
    anchor = _anchor_date(reference)
    out: List[DateMatch] = []

    candidates = list(DATE_RE.finditer(line or ""))
    meeting_pattern = sum(1 for m in candidates if m.lastgroup == "weekday") > 1

    for m in candidates:
        kind = m.lastgroup
        raw = m.group(kind)

        if kind == "iso":
            value = _resolve_iso(raw)
        elif kind in ("named", "dayfirst"):
            value = _resolve_named(raw, anchor)
        elif kind == "numeric":
            value = _resolve_numeric(raw, anchor)
        elif kind == "relative":
            value = _resolve_relative(raw, anchor)
        elif kind == "weekday":
            if meeting_pattern:
                continue
            value = _resolve_weekday(raw, anchor)
        else:
            value = _resolve_ordinal(raw, anchor)

        if value is None:
            logger.debug("Unresolvable date candidate %r in line %r", raw, line)
            continue
        out.append(DateMatch(text=m.group(0).strip(), value=value))

    return out


def find_dates_in_line(line: str, reference: Union[date, datetime]) -> List[date]:
    """
    Concrete dates mentioned in `line`, in the order they appear.
    """
    return [m.value for m in find_date_matches(line, reference)]
