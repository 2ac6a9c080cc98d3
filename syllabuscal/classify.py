"""
Keyword classification of syllabus lines.

Rules are checked in a fixed order and the first match wins:

    1. homework / hw / assignment / due  -> assignment (0.90)
    2. read / reading / readings / chapter -> reading  (0.90)
    3. midterm / final / exam / quiz      -> exam       (0.95)
    4. lecture / class / topic            -> lecture    (0.70)
    5. anything else                      -> other      (0.40)

Known quirk: the order beats specificity. "Reading due for the midterm exam"
is an assignment, not an exam, because rule 1 fires first. Keep it that way
unless the whole policy is redesigned.
"""

from __future__ import annotations

import re
from typing import NamedTuple


class Classification(NamedTuple):
    type: str
    confidence: float


ASSIGNMENT_CONFIDENCE = 0.90
READING_CONFIDENCE = 0.90
EXAM_CONFIDENCE = 0.95
LECTURE_CONFIDENCE = 0.70
OTHER_CONFIDENCE = 0.40

RULES = (
    (re.compile(r"\b(?:homework|hw|assignment|due)\b", re.IGNORECASE), "assignment", ASSIGNMENT_CONFIDENCE),
    (re.compile(r"\b(?:read|reading|readings|chapter)\b", re.IGNORECASE), "reading", READING_CONFIDENCE),
    (re.compile(r"\b(?:midterm|final|exam|quiz)\b", re.IGNORECASE), "exam", EXAM_CONFIDENCE),
    (re.compile(r"\b(?:lecture|class|topic)\b", re.IGNORECASE), "lecture", LECTURE_CONFIDENCE),
)

FALLBACK = Classification("other", OTHER_CONFIDENCE)


def classify_line(line: str) -> Classification:
    """
    Category and confidence for one line (first matching rule wins).
    """
    for pattern, event_type, confidence in RULES:
        if pattern.search(line):
            return Classification(event_type, confidence)
    return FALLBACK
