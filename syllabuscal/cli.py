"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    syllabuscal parse syllabus.pdf [--year 2025] [--json events.json]
    syllabuscal year syllabus.pdf
    syllabuscal export syllabus.pdf out.ics
    syllabuscal export events.json out.ics
    syllabuscal sync events.json
    syllabuscal llm-parse syllabus.docx --json events.json

Credentials for `sync` and `llm-parse` come from the environment
(GOOGLE_ACCESS_TOKEN, OPENAI_API_KEY); see syllabuscal.config.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from syllabuscal.config import ExtractOptions, Settings
from syllabuscal.documents import extract_text
from syllabuscal.errors import SyllabusCalError
from syllabuscal.export_ics import export_events_to_ics
from syllabuscal.gcal import insert_events
from syllabuscal.llm import extract_events_with_llm
from syllabuscal.model import SyllabusEvent
from syllabuscal.normalize import normalize_syllabus_text
from syllabuscal.parse import parse_document
from syllabuscal.storage import load_events, save_events
from syllabuscal.view import render_events
from syllabuscal.year import infer_academic_year, validate_reference_year


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _reference_year(args: argparse.Namespace) -> Optional[int]:
    """
    Validated --year, or None. Raises InvalidArgumentError for bad input.
    """
    raw = getattr(args, "year", None)
    if raw is None:
        return None
    return validate_reference_year(raw)


def _options(args: argparse.Namespace) -> ExtractOptions:
    return ExtractOptions(
        remove_header_footer=not getattr(args, "no_clean", False),
        reference_year=_reference_year(args),
    )


def _collect_events(args: argparse.Namespace) -> List[SyllabusEvent]:
    """
    Events from an events .json file, or from a document run through the pipeline.
    """
    options = _options(args)
    source = Path(args.file)
    if source.suffix.lower() == ".json":
        return load_events(source)
    return parse_document(source, options=options)


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Extract events from a document and show them.
    """
    events = parse_document(Path(args.file), options=_options(args))
    render_events(events)

    if args.json:
        save_events(events, args.json)
        print(f"Saved {len(events)} events to: {args.json}")
    return 0


def _cmd_year(args: argparse.Namespace) -> int:
    """
    Print the academic year the heuristic picks for a document.
    """
    text = extract_text(Path(args.file))
    print(infer_academic_year(text))
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export events (from a document or an events .json) into an .ics file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    events = _collect_events(args)
    if not events:
        print("No events to export.")
        return 0

    n = export_events_to_ics(events, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def _cmd_sync(args: argparse.Namespace) -> int:
    """
    Insert events into Google Calendar.
    """
    settings = Settings.from_env()
    events = _collect_events(args)
    if not events:
        print("No events to sync.")
        return 0

    results = insert_events(
        events,
        access_token=settings.google_access_token or "",
        calendar_id=args.calendar_id or settings.google_calendar_id,
        time_zone=settings.time_zone,
    )

    failed = [r for r in results if not r.ok]
    print(f"Synced {len(results) - len(failed)} of {len(results)} events.")
    for r in failed:
        print(f"- {r.event_id}: {r.error}")
    return 1 if failed else 0


def _cmd_llm_parse(args: argparse.Namespace) -> int:
    """
    Extract events with the language model instead of the heuristics.
    """
    settings = Settings.from_env()
    year = _reference_year(args)

    raw = extract_text(Path(args.file))
    text = normalize_syllabus_text(raw)
    if year is None:
        year = infer_academic_year(raw)

    events = extract_events_with_llm(text, settings.openai_api_key, fallback_year=year, model=settings.openai_model)
    render_events(events)

    if args.json:
        save_events(events, args.json)
        print(f"Saved {len(events)} events to: {args.json}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="syllabuscal", description="Syllabus to calendar events")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Extract events from a syllabus file")
    p_parse.add_argument("file", type=str, help="Syllabus file (.txt, .md, .pdf, .docx, .html)")
    p_parse.add_argument("--year", type=str, help="Year for dates without one (default: inferred)")
    p_parse.add_argument("--no-clean", action="store_true", help="Keep page numbers and repeated headers")
    p_parse.add_argument("--json", type=str, help="Also write events to this JSON file")

    p_year = sub.add_parser("year", help="Show the inferred academic year of a syllabus")
    p_year.add_argument("file", type=str, help="Syllabus file")

    p_export = sub.add_parser("export", help="Export events to .ics")
    p_export.add_argument("file", type=str, help="Syllabus file or events .json")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument("--year", type=str, help="Year for dates without one (default: inferred)")
    p_export.add_argument("--no-clean", action="store_true", help="Keep page numbers and repeated headers")

    p_sync = sub.add_parser("sync", help="Insert events into Google Calendar")
    p_sync.add_argument("file", type=str, help="Syllabus file or events .json")
    p_sync.add_argument("--calendar-id", type=str, help="Target calendar (default: primary)")
    p_sync.add_argument("--year", type=str, help="Year for dates without one (default: inferred)")
    p_sync.add_argument("--no-clean", action="store_true", help="Keep page numbers and repeated headers")

    p_llm = sub.add_parser("llm-parse", help="Extract events with an OpenAI model")
    p_llm.add_argument("file", type=str, help="Syllabus file")
    p_llm.add_argument("--year", type=str, help="Year hint for the model (default: inferred)")
    p_llm.add_argument("--json", type=str, help="Also write events to this JSON file")

    return parser


COMMANDS = {
    "parse": _cmd_parse,
    "year": _cmd_year,
    "export": _cmd_export,
    "sync": _cmd_sync,
    "llm-parse": _cmd_llm_parse,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        code = handler(args)
    except FileNotFoundError as exc:
        print(f"File not found: {exc.filename}")
        code = 1
    except OSError as exc:
        print(f"Cannot read {exc.filename or 'file'}: {exc.strerror or exc}")
        code = 1
    except SyllabusCalError as exc:
        print(f"Error: {exc}")
        code = 1

    raise SystemExit(code)
