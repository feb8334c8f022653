import unittest
from datetime import datetime, timedelta, timezone

from plansync.util.time import normalize_dt, now_iso, now_utc, parse_iso8601, to_iso8601


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.utcoffset(), timedelta(0))

    def test_to_iso8601_uses_z_and_milliseconds(self) -> None:
        dt = datetime(2024, 1, 1, 8, 30, 0, 123456, tzinfo=timezone.utc)
        self.assertEqual(to_iso8601(dt), "2024-01-01T08:30:00.123Z")

    def test_to_iso8601_converts_offsets_to_utc(self) -> None:
        jst = timezone(timedelta(hours=9))
        dt = datetime(2024, 1, 1, 9, 0, 0, tzinfo=jst)
        self.assertEqual(to_iso8601(dt), "2024-01-01T00:00:00.000Z")

    def test_parse_iso8601_accepts_z_and_offsets(self) -> None:
        a = parse_iso8601("2024-01-01T00:00:00.000Z")
        b = parse_iso8601("2024-01-01T09:00:00+09:00")
        self.assertEqual(a, b)
        self.assertEqual(a.tzinfo, timezone.utc)

    def test_parse_iso8601_rejects_empty(self) -> None:
        with self.assertRaises(ValueError):
            parse_iso8601("")

    def test_now_iso_round_trips(self) -> None:
        value = now_iso()
        self.assertTrue(value.endswith("Z"))
        self.assertEqual(to_iso8601(parse_iso8601(value)), value)

    def test_normalize_dt_rejects_naive(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dt(datetime(2024, 1, 1))
        with self.assertRaises(TypeError):
            normalize_dt("2024-01-01")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
