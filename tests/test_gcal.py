"""
Tests for Google Calendar sync with a mocked HTTP session.

Contract:
- timed events -> dateTime start/end, all-day -> date start / next-day end
- 401/403 -> CalendarAuthError, network error -> CalendarSyncError
- other HTTP errors are reported per event, the run continues
"""

import unittest
from unittest import mock

import requests

from syllabuscal.errors import CalendarAuthError, CalendarSyncError
from syllabuscal.gcal import event_to_resource, insert_events
from syllabuscal.model import SyllabusEvent


ALL_DAY = SyllabusEvent(id="a", title="Essay", date="2025-12-31", description="Essay due Dec 31")
TIMED = SyllabusEvent(id="b", title="Exam", date="2025-02-10", time="10:00", duration_minutes=120, type="exam")


def _response(status: int, payload: dict) -> mock.Mock:
    resp = mock.Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = "Error"
    resp.json.return_value = payload
    resp.text = str(payload)
    return resp


class TestEventToResource(unittest.TestCase):
    def test_all_day(self) -> None:
        res = event_to_resource(ALL_DAY)
        self.assertEqual(res["start"], {"date": "2025-12-31"})
        self.assertEqual(res["end"], {"date": "2026-01-01"})
        self.assertEqual(res["summary"], "Essay")
        self.assertEqual(res["description"], "Essay due Dec 31")

    def test_timed_with_time_zone(self) -> None:
        res = event_to_resource(TIMED, time_zone="America/New_York")
        self.assertEqual(res["start"], {"dateTime": "2025-02-10T10:00:00", "timeZone": "America/New_York"})
        self.assertEqual(res["end"], {"dateTime": "2025-02-10T12:00:00", "timeZone": "America/New_York"})


class TestInsertEvents(unittest.TestCase):
    def test_results_per_event(self) -> None:
        session = mock.Mock()
        session.post.side_effect = [
            _response(200, {"id": "remote-1"}),
            _response(400, {"error": {"message": "Bad Request"}}),
        ]
        results = insert_events([ALL_DAY, TIMED], "token", calendar_id="primary", session=session)

        self.assertEqual([r.ok for r in results], [True, False])
        self.assertEqual(results[0].remote_id, "remote-1")
        self.assertIn("Bad Request", results[1].error)

        url = session.post.call_args_list[0].args[0]
        self.assertEqual(url, "https://www.googleapis.com/calendar/v3/calendars/primary/events")
        headers = session.post.call_args_list[0].kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer token")

    def test_non_json_success_body(self) -> None:
        resp = _response(200, {})
        resp.json.side_effect = ValueError("not json")
        session = mock.Mock()
        session.post.return_value = resp

        results = insert_events([ALL_DAY], "token", session=session)
        self.assertTrue(results[0].ok)
        self.assertIsNone(results[0].remote_id)

    def test_auth_failure_stops(self) -> None:
        session = mock.Mock()
        session.post.return_value = _response(401, {"error": {"message": "Invalid Credentials"}})
        with self.assertRaises(CalendarAuthError):
            insert_events([ALL_DAY, TIMED], "expired", session=session)
        self.assertEqual(session.post.call_count, 1)

    def test_missing_token(self) -> None:
        with self.assertRaises(CalendarAuthError):
            insert_events([ALL_DAY], "", session=mock.Mock())

    def test_network_failure(self) -> None:
        session = mock.Mock()
        session.post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(CalendarSyncError):
            insert_events([ALL_DAY], "token", session=session)


if __name__ == "__main__":
    unittest.main()
