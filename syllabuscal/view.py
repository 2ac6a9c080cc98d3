"""
Terminal view of extracted events.

This is the one place that renders pipeline output for people; the CLI
commands all go through render_events().
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from syllabuscal.model import SyllabusEvent


TYPE_STYLES = {
    "assignment": "yellow",
    "reading": "cyan",
    "exam": "bold red",
    "lecture": "green",
    "other": "dim",
}


def events_table(events: Sequence[SyllabusEvent], title: Optional[str] = None) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Conf.", justify="right")
    table.add_column("Title", overflow="fold")

    for i, ev in enumerate(events, start=1):
        style = TYPE_STYLES.get(ev.type, "")
        table.add_row(
            str(i),
            ev.date,
            ev.time or "all day",
            f"[{style}]{ev.type}[/]" if style else ev.type,
            f"{ev.confidence:.2f}",
            escape(ev.title),
        )
    return table


def render_events(
    events: Sequence[SyllabusEvent],
    console: Optional[Console] = None,
    title: Optional[str] = None,
) -> None:
    """
    Print events as a table, or a short notice when there are none.
    """
    console = console or Console()
    if not events:
        console.print("No dated events found.")
        return
    console.print(events_table(events, title=title or f"Extracted events ({len(events)})"))
