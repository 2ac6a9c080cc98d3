"""
Academic-year inference.

Syllabi rarely print the year next to each date ("Jan 15", "Sept 3"), so the
pipeline needs a default year. infer_academic_year() guesses it from which
month names appear in the text. This is a heuristic, not an authority:
a caller that knows the year should pass it explicitly.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Optional

from syllabuscal.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


# Substring keys; only Sept/Oct/Nov/Dec have abbreviations
MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

FALL_MONTHS = range(8, 13)
SPRING_MONTHS = range(1, 6)

MIN_REFERENCE_YEAR = 1900
MAX_REFERENCE_YEAR = 2100


def _median_month(months: list[int]) -> int:
    ordered = sorted(months)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    # round half up
    return int(math.floor((ordered[mid - 1] + ordered[mid]) / 2 + 0.5))


def months_mentioned(text: str) -> set[int]:
    """
    Month numbers whose name (or abbreviation) occurs anywhere in the text.
    """
    lower = text.lower()
    return {num for name, num in MONTHS.items() if name in lower}


def infer_academic_year(text: str, today: Optional[date] = None) -> int:
    """
    Guess the year that undated expressions in `text` refer to.

    - no month names           -> current year
    - median month Aug..Dec    -> fall term: current year until July, next year from August
    - median month Jan..May    -> spring term: next year from August, else current year
    - median month Jun/Jul     -> current year
    """
    today = today or date.today()
    found = months_mentioned(text or "")
    if not found:
        return today.year

    median = _median_month(list(found))

    if median in FALL_MONTHS:
        year = today.year if today.month <= 7 else today.year + 1
        term = "fall"
    elif median in SPRING_MONTHS:
        year = today.year + 1 if today.month >= 8 else today.year
        term = "spring"
    else:
        year = today.year
        term = "none"

    logger.debug("Months %s -> median %d (%s term) -> year %d", sorted(found), median, term, year)
    return year


def validate_reference_year(value: Any) -> int:
    """
    Check a caller-supplied reference year and return it as int.

    Accepts ints and numeric strings. Raises InvalidArgumentError otherwise,
    before any extraction work happens.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid reference year: {value!r}")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidArgumentError(f"Reference year is not a number: {value!r}") from None
    if not isinstance(value, int):
        raise InvalidArgumentError(f"Invalid reference year: {value!r}")
    if not MIN_REFERENCE_YEAR <= value <= MAX_REFERENCE_YEAR:
        raise InvalidArgumentError(
            f"Reference year {value} outside {MIN_REFERENCE_YEAR}-{MAX_REFERENCE_YEAR}"
        )
    return value
