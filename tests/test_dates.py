"""
Unit tests for date detection inside a single line.

Dates without a year take the reference date's year; matches are returned
left to right.
"""

import unittest
from datetime import date, datetime

from syllabuscal.dates import find_date_matches, find_dates_in_line


REF = date(2025, 1, 1)


class TestFindDatesInLine(unittest.TestCase):
    def test_month_name_dates(self) -> None:
        self.assertEqual(find_dates_in_line("Lecture: Introduction — Jan 15", REF), [date(2025, 1, 15)])
        self.assertEqual(find_dates_in_line("Homework 1 due January 22", REF), [date(2025, 1, 22)])
        self.assertEqual(find_dates_in_line("Midterm exam on Feb 10", REF), [date(2025, 2, 10)])

    def test_ordinal_and_abbreviation_with_period(self) -> None:
        self.assertEqual(find_dates_in_line("Project due Sept. 3rd", REF), [date(2025, 9, 3)])

    def test_explicit_year_wins_over_reference(self) -> None:
        self.assertEqual(find_dates_in_line("Final: December 12, 2024", REF), [date(2024, 12, 12)])

    def test_day_first(self) -> None:
        self.assertEqual(find_dates_in_line("Quiz on 3 March", REF), [date(2025, 3, 3)])

    def test_week_number_is_not_a_day(self) -> None:
        self.assertEqual(find_dates_in_line("Week 3 Jan 15 Recursion", REF), [date(2025, 1, 15)])

    def test_modal_may_is_not_a_month(self) -> None:
        self.assertEqual(find_dates_in_line("Chapter 5 may be skipped", REF), [])

    def test_numeric_and_iso(self) -> None:
        self.assertEqual(find_dates_in_line("HW due 2/14", REF), [date(2025, 2, 14)])
        self.assertEqual(find_dates_in_line("Exam 2025-04-30", REF), [date(2025, 4, 30)])

    def test_weekday_prefix_is_absorbed(self) -> None:
        matches = find_date_matches("Mon, Jan 20: Lecture 2", REF)
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].value, date(2025, 1, 20))
        self.assertTrue(matches[0].text.startswith("Mon"))

    def test_multiple_dates_in_order(self) -> None:
        line = "Presentations Mar 4 and Feb 25"
        self.assertEqual(find_dates_in_line(line, REF), [date(2025, 3, 4), date(2025, 2, 25)])

    def test_relative_weekdays(self) -> None:
        wednesday = date(2025, 1, 1)
        self.assertEqual(find_dates_in_line("Quiz this Friday", wednesday), [date(2025, 1, 3)])
        self.assertEqual(find_dates_in_line("Lab next Wednesday", wednesday), [date(2025, 1, 8)])
        self.assertEqual(find_dates_in_line("Recap of last Monday", wednesday), [date(2024, 12, 30)])

    def test_numbers_after_a_date_are_not_years(self) -> None:
        self.assertEqual(find_dates_in_line("Lecture Jan 15 1030-1145", REF), [date(2025, 1, 15)])
        self.assertEqual(find_dates_in_line("Essay due Mar 3 2000 words", REF), [date(2025, 3, 3)])
        self.assertEqual(find_dates_in_line("Exam Jan 15 0000 room", REF), [date(2025, 1, 15)])
        self.assertEqual(find_dates_in_line("Quiz on 3 March 1200 noon", REF), [date(2025, 3, 3)])

    def test_plausible_year_after_a_date_is_kept(self) -> None:
        self.assertEqual(find_dates_in_line("Exam Jan 15 2026 room 4", REF), [date(2026, 1, 15)])
        self.assertEqual(find_dates_in_line("Ruling of December 12, 2000", REF), [date(2000, 12, 12)])

    def test_bare_weekday_resolves_on_or_after_reference(self) -> None:
        wednesday = date(2025, 1, 1)
        self.assertEqual(find_dates_in_line("Quiz Monday", wednesday), [date(2025, 1, 6)])
        self.assertEqual(find_dates_in_line("Review session Wednesday", wednesday), [date(2025, 1, 1)])

    def test_meeting_pattern_weekdays_are_skipped(self) -> None:
        self.assertEqual(find_dates_in_line("Class meets Monday and Wednesday", REF), [])
        self.assertEqual(
            find_dates_in_line("Lab Monday and Friday, first one Jan 13", REF), [date(2025, 1, 13)]
        )

    def test_bare_ordinal_uses_reference_month(self) -> None:
        self.assertEqual(find_dates_in_line("Paper due the 15th", date(2025, 3, 2)), [date(2025, 3, 15)])
        self.assertEqual(find_dates_in_line("Paper due the 31st", date(2025, 2, 2)), [])

    def test_no_date(self) -> None:
        self.assertEqual(find_dates_in_line("Office hours by appointment", REF), [])
        self.assertEqual(find_dates_in_line("", REF), [])

    def test_datetime_reference_is_accepted(self) -> None:
        self.assertEqual(find_dates_in_line("Quiz Feb 3", datetime(2026, 6, 1, 15, 30)), [date(2026, 2, 3)])


if __name__ == "__main__":
    unittest.main()
