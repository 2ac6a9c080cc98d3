"""
Text normalization for decoded documents.

PDF and Word decoders return text with mixed newlines, stray tabs and one
copy of every running header/footer per page. normalize_syllabus_text()
cleans that up before line-by-line parsing. Applying it twice gives the
same result as applying it once.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import List


# Lines longer than this are compared by their prefix only
DEDUP_KEY_LENGTH = 200

# A line must repeat more than this many times to count as boilerplate
BOILERPLATE_MIN_REPEATS = 2

# Longer lines are real content even when repeated
BOILERPLATE_MAX_LENGTH = 120

_SPACES_RE = re.compile(r"[ \u00a0]{2,}")
_DIGITS_PUNCT_RE = re.compile(r"^[\d\W]+$")
_PAGE_LABEL_RE = re.compile(r"^page\s*\d+$", re.IGNORECASE)
_BARE_PAGE_NUMBER_RE = re.compile(r"^\d{1,3}$")


def _dedup_key(line: str) -> str:
    return line[:DEDUP_KEY_LENGTH]


def _boilerplate_lines(lines: List[str]) -> set[str]:
    """
    Find lines that repeat often enough to be page headers/footers.
    """
    freq = Counter(_dedup_key(line) for line in lines if line)

    out: set[str] = set()
    for key, count in freq.items():
        if count <= BOILERPLATE_MIN_REPEATS:
            continue
        if len(key) > BOILERPLATE_MAX_LENGTH:
            continue
        # "1.", "---" and friends are left to the page-number rule
        if _DIGITS_PUNCT_RE.match(key):
            continue
        out.add(key)
    return out


def _is_page_number(line: str) -> bool:
    return bool(_PAGE_LABEL_RE.match(line) or _BARE_PAGE_NUMBER_RE.match(line))


def normalize_syllabus_text(text: str, remove_header_footer: bool = True) -> str:
    """
    Clean raw document text.

    Steps:
    1. unify newlines to "\\n"
    2. tabs and runs of spaces / NBSP -> single space
    3. trim every line, drop leading and trailing blank lines
    4. (optional) drop page numbers and repeated header/footer lines
    5. collapse consecutive blank lines
    """
    if not text:
        return ""

    t = text.replace("\r\n", "\n").replace("\r", "\n")
    t = t.replace("\t", " ")
    t = _SPACES_RE.sub(" ", t)

    lines = [line.strip() for line in t.split("\n")]

    while lines and lines[0] == "":
        lines.pop(0)
    while lines and lines[-1] == "":
        lines.pop()

    if remove_header_footer:
        repeated = _boilerplate_lines(lines)
        lines = [
            line
            for line in lines
            if not _is_page_number(line) and _dedup_key(line) not in repeated
        ]

    collapsed: List[str] = []
    prev_blank = False
    for line in lines:
        if line == "":
            if not prev_blank:
                collapsed.append("")
            prev_blank = True
        else:
            collapsed.append(line)
            prev_blank = False

    return "\n".join(collapsed).strip()
