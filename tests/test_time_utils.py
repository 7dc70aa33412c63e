import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from utils.time_utils import format_local_time, parse_timestamp

UTC = ZoneInfo("UTC")


class TestParseTimestamp(unittest.TestCase):
    def test_zulu_with_nanoseconds(self):
        parsed = parse_timestamp("2024-06-01T09:25:33.123456789Z")
        self.assertEqual(parsed, dt.datetime(2024, 6, 1, 9, 25, 33, 123456, tzinfo=dt.timezone.utc))

    def test_offset_preserved(self):
        parsed = parse_timestamp("2024-06-01T05:25:00-04:00")
        self.assertEqual(parsed.utcoffset(), dt.timedelta(hours=-4))

    def test_naive_is_utc(self):
        self.assertEqual(parse_timestamp("2024-06-01T09:25:00").tzinfo, dt.timezone.utc)

    def test_empty_is_none(self):
        self.assertIsNone(parse_timestamp(None))
        self.assertIsNone(parse_timestamp(""))

    def test_unparseable_is_none(self):
        self.assertIsNone(parse_timestamp("not-a-time"))
        self.assertIsNone(parse_timestamp("2024-13-45T99:00:00Z"))


class TestFormatLocalTime(unittest.TestCase):
    def test_afternoon_zero_padded(self):
        self.assertEqual(format_local_time(dt.datetime(2024, 1, 1, 14, 5, tzinfo=UTC), UTC), "2:05 PM")

    def test_midnight_and_noon_render_as_twelve(self):
        self.assertEqual(format_local_time(dt.datetime(2024, 1, 1, 0, 7, tzinfo=UTC), UTC), "12:07 AM")
        self.assertEqual(format_local_time(dt.datetime(2024, 1, 1, 12, 0, tzinfo=UTC), UTC), "12:00 PM")

    def test_converts_to_target_zone(self):
        moment = dt.datetime(2024, 1, 1, 17, 5, tzinfo=UTC)
        self.assertEqual(format_local_time(moment, ZoneInfo("America/New_York")), "12:05 PM")

    def test_defaults_to_process_local_zone(self):
        moment = dt.datetime(2024, 1, 1, 17, 5, tzinfo=UTC)
        local = moment.astimezone()
        expected_hour = local.hour % 12 or 12
        self.assertTrue(format_local_time(moment).startswith(f"{expected_hour}:05 "))


if __name__ == "__main__":
    unittest.main()
