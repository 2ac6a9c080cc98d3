import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from syllabuscal.export_ics import build_ics, export_events_to_ics
from syllabuscal.model import SyllabusEvent


ALL_DAY = SyllabusEvent(
    id="e1",
    title="Homework 1 due January 22",
    date="2025-01-22",
    type="assignment",
    confidence=0.9,
    description="Homework 1 due January 22; submit, on time",
    source_line="Homework 1 due January 22",
)
TIMED = SyllabusEvent(id="e2", title="Midterm", date="2025-02-10", time="23:30", duration_minutes=90, type="exam")


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_events_to_ics([ALL_DAY, TIMED], out)
            self.assertEqual(n, 2)
            raw = out.read_bytes()
            self.assertIn(b"\r\n", raw)
            self.assertNotIn(b"\r\r\n", raw)
            text = raw.decode("utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertEqual(text.count("BEGIN:VEVENT"), 2)

    def test_all_day_event(self) -> None:
        text = build_ics([ALL_DAY], now=datetime(2025, 1, 1, tzinfo=timezone.utc))
        self.assertIn("DTSTART;VALUE=DATE:20250122", text)
        self.assertIn("DTEND;VALUE=DATE:20250123", text)
        self.assertIn("UID:e1@syllabuscal", text)
        self.assertIn("DTSTAMP:20250101T000000Z", text)
        self.assertIn("SUMMARY:Homework 1 due January 22", text)
        self.assertIn("DESCRIPTION:Homework 1 due January 22\\; submit\\, on time", text)
        self.assertIn("CATEGORIES:ASSIGNMENT", text)

    def test_timed_event_uses_duration_across_midnight(self) -> None:
        text = build_ics([TIMED])
        self.assertIn("DTSTART:20250210T233000", text)
        self.assertIn("DTEND:20250211T010000", text)

    def test_long_lines_are_folded(self) -> None:
        ev = SyllabusEvent(id="e3", title="Reading", date="2025-03-01", description="ü" * 120)
        text = build_ics([ev])
        for line in text.split("\r\n"):
            self.assertLessEqual(len(line.encode("utf-8")), 75)
        unfolded = text.replace("\r\n ", "")
        self.assertIn("DESCRIPTION:" + "ü" * 120, unfolded)

    def test_empty_calendar(self) -> None:
        text = build_ics([])
        self.assertTrue(text.startswith("BEGIN:VCALENDAR\r\n"))
        self.assertNotIn("BEGIN:VEVENT", text)


if __name__ == "__main__":
    unittest.main()
