"""
Configuration.

Two small containers:
- ExtractOptions: per-call switches for document extraction
- Settings: credentials and defaults for the external services, read from env
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_CALENDAR_ID = "primary"


@dataclass
class ExtractOptions:
    # strip page numbers / running headers from decoded documents
    remove_header_footer: bool = True
    # None means "infer it from the text"
    reference_year: Optional[int] = None


@dataclass
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    google_access_token: Optional[str] = None
    google_calendar_id: str = DEFAULT_CALENDAR_ID
    time_zone: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Empty values count as unset.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = (env.get(name) or "").strip()
            return value or None

        return cls(
            openai_api_key=_get("OPENAI_API_KEY"),
            openai_model=_get("SYLLABUSCAL_OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            google_access_token=_get("GOOGLE_ACCESS_TOKEN"),
            google_calendar_id=_get("SYLLABUSCAL_CALENDAR_ID") or DEFAULT_CALENDAR_ID,
            time_zone=_get("SYLLABUSCAL_TIME_ZONE"),
        )
