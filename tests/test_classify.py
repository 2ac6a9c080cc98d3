"""
Unit tests for keyword classification.

The rules are ordered and the first match wins, so a line that mentions an
exam can still be an assignment (documented quirk, kept on purpose).
"""

import unittest

from syllabuscal.classify import classify_line


class TestClassifyLine(unittest.TestCase):
    def test_each_category(self) -> None:
        cases = {
            "Homework 3 posted": ("assignment", 0.90),
            "HW2 Jan 5": ("other", 0.40),  # "hw" needs word boundaries
            "HW 2 Jan 5": ("assignment", 0.90),
            "Read pages 10-20": ("reading", 0.90),
            "Chapter 4": ("reading", 0.90),
            "Quiz 2": ("exam", 0.95),
            "Final Exam": ("exam", 0.95),
            "Lecture 7: Graphs": ("lecture", 0.70),
            "No class (holiday)": ("lecture", 0.70),
            "Spring break": ("other", 0.40),
        }
        for line, (expected_type, expected_conf) in cases.items():
            result = classify_line(line)
            self.assertEqual(result.type, expected_type, msg=line)
            self.assertAlmostEqual(result.confidence, expected_conf, msg=line)

    def test_priority_beats_specificity(self) -> None:
        # Known quirk: "due" is an assignment keyword and is checked before "exam".
        result = classify_line("Reading due for the midterm exam")
        self.assertEqual(result.type, "assignment")
        self.assertAlmostEqual(result.confidence, 0.90)

    def test_reading_checked_before_exam(self) -> None:
        self.assertEqual(classify_line("Read chapter 5 before the quiz").type, "reading")

    def test_keywords_need_word_boundaries(self) -> None:
        # "dueling", "bread", "classic" contain keywords but are not matches
        self.assertEqual(classify_line("Dueling bread classics").type, "other")


if __name__ == "__main__":
    unittest.main()
