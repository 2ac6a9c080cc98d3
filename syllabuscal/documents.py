"""
Plain-text extraction from uploaded syllabus files.

Supported:
- .txt / .md / .text  -> UTF-8 decode
- .pdf                -> pdfplumber, one chunk per page
- .docx               -> python-docx paragraphs, then table rows
- .html / .htm        -> BeautifulSoup text
- anything else       -> UTF-8 decode with replacement characters

The pipeline never sees file formats; it only gets the string returned here.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import docx
import pdfplumber
from bs4 import BeautifulSoup

from syllabuscal.errors import DocumentExtractionError, InvalidArgumentError

logger = logging.getLogger(__name__)


TEXT_EXTENSIONS = {"txt", "md", "text"}
HTML_EXTENSIONS = {"html", "htm"}


def _extension(filename: str) -> str:
    return Path(filename).suffix.lstrip(".").lower()


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _pdf_to_text(data: bytes) -> str:
    pages: List[str] = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text)
    return "\n".join(pages)


def _docx_to_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    lines = [para.text for para in document.paragraphs]

    # schedule tables: one line per row, cells separated by spaces
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            cells = [c for c in cells if c]
            if cells:
                lines.append("   ".join(cells))

    return "\n".join(lines)


def _html_to_text(data: bytes) -> str:
    soup = BeautifulSoup(data, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text("\n", strip=True)


def extract_text(source: Union[str, Path, bytes], filename: Optional[str] = None) -> str:
    """
    Read a path (or raw bytes plus a filename) and return its plain text.

    Bytes need a filename so the format can be detected. A decoder failure
    raises DocumentExtractionError; a missing path raises FileNotFoundError.
    """
    if isinstance(source, (bytes, bytearray)):
        if not filename:
            raise InvalidArgumentError(
                'When passing bytes you must provide a filename to detect the file type (e.g. "syllabus.pdf")'
            )
        data = bytes(source)
        name = filename
    else:
        path = Path(source)
        data = path.read_bytes()
        name = filename or path.name

    ext = _extension(name)
    logger.debug("Extracting text from %s (%d bytes, type %r)", name, len(data), ext or "unknown")

    if ext in TEXT_EXTENSIONS:
        return _decode_text(data)

    try:
        if ext == "pdf":
            return _pdf_to_text(data)
        if ext == "docx":
            return _docx_to_text(data)
        if ext in HTML_EXTENSIONS:
            return _html_to_text(data)
    except Exception as exc:
        raise DocumentExtractionError(f"Could not read {name}: {exc}", filename=name) from exc

    return _decode_text(data)
