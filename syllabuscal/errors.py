"""
Exception types raised by syllabuscal.

"No events found" is never an error; these only cover invalid arguments,
invalid records and failures of the collaborators around the pipeline.
"""

from __future__ import annotations

from typing import Optional


class SyllabusCalError(Exception):
    """Base class for all syllabuscal errors."""


class InvalidArgumentError(SyllabusCalError, ValueError):
    """A caller passed something the pipeline cannot run on (e.g. a bad year)."""


class EventValidationError(SyllabusCalError, ValueError):
    """A record does not satisfy the SyllabusEvent schema."""


class DocumentExtractionError(SyllabusCalError):
    """Text could not be decoded from an uploaded document."""

    def __init__(self, message: str, filename: Optional[str] = None) -> None:
        super().__init__(message)
        self.filename = filename


class CalendarSyncError(SyllabusCalError):
    """The calendar service could not be reached."""


class CalendarAuthError(CalendarSyncError):
    """The calendar service rejected the access token."""


class LlmExtractionError(SyllabusCalError):
    """The language-model extraction path failed; `raw` keeps the reply."""

    def __init__(self, message: str, raw: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw = raw
