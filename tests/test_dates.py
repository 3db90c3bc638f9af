"""Date parsing, age arithmetic and the sweep timer."""

import unittest
from datetime import datetime

from vaxtrack.core.sweeper import seconds_until_next_run
from vaxtrack.core.workflow import age_band_check, age_in_months, parse_date
from vaxtrack.utils.clock import FixedClock


class TestParseDate(unittest.TestCase):

	def test_plain_dates_are_midnight(self):
		self.assertEqual(parse_date("2026-03-10"), datetime(2026, 3, 10))

	def test_timestamps_are_converted_to_utc(self):
		self.assertEqual(parse_date("2026-03-10T08:00:00Z"), datetime(2026, 3, 10, 8))
		self.assertEqual(parse_date("2026-03-10T08:00:00+05:30"), datetime(2026, 3, 10, 2, 30))

	def test_rejects_non_dates(self):
		for value in (None, "", "   ", "10/03/2026", "2026-13-01", 20260310):
			with self.subTest(value=value):
				self.assertIsNone(parse_date(value))

class TestAgeInMonths(unittest.TestCase):

	def test_counts_whole_months(self):
		dob = datetime(2025, 2, 20)
		self.assertEqual(age_in_months(dob, datetime(2026, 3, 10)), 12)
		self.assertEqual(age_in_months(dob, datetime(2026, 3, 20)), 13)
		self.assertEqual(age_in_months(dob, datetime(2025, 2, 20)), 0)

	def test_never_negative(self):
		self.assertEqual(age_in_months(datetime(2026, 5, 1), datetime(2026, 3, 1)), 0)

class TestAgeBand(unittest.TestCase):

	def test_band_edges_are_inclusive(self):
		vaccine = {"min_age_months": 12, "max_age_months": 15}
		self.assertFalse(age_band_check(11, vaccine))
		self.assertTrue(age_band_check(12, vaccine))
		self.assertTrue(age_band_check(15, vaccine))
		self.assertFalse(age_band_check(16, vaccine))

	def test_open_ended_band(self):
		self.assertTrue(age_band_check(200, {"min_age_months": 0, "max_age_months": None}))

	def test_unknown_inputs(self):
		self.assertIsNone(age_band_check(None, {"min_age_months": 0}))
		self.assertIsNone(age_band_check(4, None))

class TestSweepTimer(unittest.TestCase):

	def test_later_today(self):
		self.assertEqual(seconds_until_next_run(datetime(2026, 3, 10, 0, 30), 1), 1800)

	def test_tomorrow_once_the_hour_has_passed(self):
		self.assertEqual(seconds_until_next_run(datetime(2026, 3, 10, 1, 0), 1), 24 * 3600)
		self.assertEqual(seconds_until_next_run(datetime(2026, 3, 10, 23, 0), 1), 2 * 3600)

class TestFixedClock(unittest.TestCase):

	def test_advance_and_today(self):
		clock = FixedClock(datetime(2026, 3, 10, 9, 30))
		clock.advance(days=1, hours=15)
		self.assertEqual(clock.now(), datetime(2026, 3, 12, 0, 30))
		self.assertEqual(clock.today(), datetime(2026, 3, 12))

if __name__ == "__main__":
	unittest.main()
