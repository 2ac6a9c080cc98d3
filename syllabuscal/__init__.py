"""
syllabuscal – turn syllabus text into calendar events.

The heuristic pipeline lives in syllabuscal.parse; everything else
(documents, ICS export, Google sync, LLM extraction) wraps around it.
"""

from syllabuscal.model import SyllabusEvent
from syllabuscal.parse import parse_document, parse_syllabus_text

__all__ = ["SyllabusEvent", "parse_document", "parse_syllabus_text"]
