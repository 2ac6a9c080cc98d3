import unittest

from syllabuscal.config import ExtractOptions, Settings


class TestConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        self.assertIsNone(s.openai_api_key)
        self.assertEqual(s.openai_model, "gpt-4o-mini")
        self.assertEqual(s.google_calendar_id, "primary")
        self.assertTrue(ExtractOptions().remove_header_footer)
        self.assertIsNone(ExtractOptions().reference_year)

    def test_from_env(self) -> None:
        s = Settings.from_env(
            {
                "OPENAI_API_KEY": " sk-1 ",
                "GOOGLE_ACCESS_TOKEN": "tok",
                "SYLLABUSCAL_CALENDAR_ID": "",
                "SYLLABUSCAL_TIME_ZONE": "Europe/Zurich",
            }
        )
        self.assertEqual(s.openai_api_key, "sk-1")
        self.assertEqual(s.google_access_token, "tok")
        self.assertEqual(s.google_calendar_id, "primary")
        self.assertEqual(s.time_zone, "Europe/Zurich")


if __name__ == "__main__":
    unittest.main()
