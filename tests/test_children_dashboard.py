"""Child registration, per-role listings and dashboard counters."""

from datetime import datetime

from tests.helpers import DatabaseTestCase
from vaxtrack.core.children import add_child
from vaxtrack.core.dashboard import admin_stats, doctor_stats, parent_stats
from vaxtrack.core.errors import ValidationError
from vaxtrack.data.repositories.child import get_children


class TestAddChild(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.parent = self.make_user("parent")

	def test_registers_child(self):
		child = add_child(self.parent["_id"], " Kiran ", "2025-11-02", "Male", self.clock)
		self.assertEqual(child["name"], "Kiran")
		self.assertEqual(child["gender"], "male")
		self.assertEqual(child["dob"], datetime(2025, 11, 2))
		self.assertEqual(child["parent_id"], self.parent["_id"])
		self.assertEqual(len(get_children(self.parent["_id"])), 1)

	def test_born_today_is_accepted(self):
		add_child(self.parent["_id"], "Newborn", "2026-03-10", "other", self.clock)

	def test_rejections(self):
		cases = {
			"missing name": (None, "2025-01-01", "female"),
			"blank name": ("   ", "2025-01-01", "female"),
			"bad date": ("A", "2025-02-30", "female"),
			"future": ("A", "2026-03-11", "female"),
			"gender": ("A", "2025-01-01", "unknown"),
		}
		for label, (name, dob, gender) in cases.items():
			with self.subTest(label):
				with self.assertRaises(ValidationError):
					add_child(self.parent["_id"], name, dob, gender, self.clock)
		self.assertEqual(get_children(self.parent["_id"]), [])

class TestListings(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.make_world()

	def test_parent_sees_populated_own_schedules(self):
		self.request(date="2026-03-12")
		other_parent = self.make_user("parent")
		self.make_child(other_parent)

		[schedule] = self.workflow.parent_schedules(self.parent["_id"])
		self.assertEqual(schedule["child"]["name"], "Asha")
		self.assertEqual(schedule["vaccine"]["name"], "MMR")
		self.assertEqual(schedule["doctor"]["name"], "Dev Doctor")
		self.assertEqual(self.workflow.parent_schedules(other_parent["_id"]), [])

	def test_doctor_without_schedules_gets_an_empty_list(self):
		self.assertEqual(self.workflow.doctor_schedules(self.doctor["_id"]), [])

	def test_admin_listing_is_newest_first(self):
		self.request(date="2026-03-12")
		self.request(date="2026-04-01")
		dates = [s["date"] for s in self.workflow.all_schedules()]
		self.assertEqual(dates, [datetime(2026, 4, 1), datetime(2026, 3, 12)])

	def test_pending_listing_carries_age_advice(self):
		self.request(date="2026-03-10")
		self.request(date="2026-06-25")
		outside = {s["date"]: s for s in self.workflow.pending_schedules()}

		on_time = outside[datetime(2026, 3, 10)]
		self.assertEqual(on_time["childAgeInMonthsAtVaccination"], 12)
		self.assertEqual(on_time["vaccineRecommendedMinAge"], 12)
		self.assertEqual(on_time["vaccineRecommendedMaxAge"], 15)
		self.assertTrue(on_time["ageWithinRecommendedRange"])

		late = outside[datetime(2026, 6, 25)]
		self.assertEqual(late["childAgeInMonthsAtVaccination"], 16)
		self.assertFalse(late["ageWithinRecommendedRange"])

class TestDashboards(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.make_world()

	def test_parent_counters(self):
		pending = self.request(date="2026-03-12")
		upcoming = self.request(date="2026-03-13")
		self.workflow.review_schedule(str(upcoming["_id"]), "approve")

		stats = parent_stats(self.parent["_id"], self.clock)
		self.assertEqual(stats, {"childrenCount": 1, "upcomingVaccinations": 1, "pendingApproval": 1})
		self.assertIsNotNone(pending)

	def test_doctor_counters(self):
		today = self.request(date="2026-03-10T14:00:00Z")
		later = self.request(date="2026-03-11")
		for schedule in (today, later):
			self.workflow.review_schedule(str(schedule["_id"]), "approve")

		self.assertEqual(doctor_stats(self.doctor["_id"], self.clock)["todaysAppointments"], 1)

		self.workflow.complete_schedule(self.doctor["_id"], str(later["_id"]))
		stats = doctor_stats(self.doctor["_id"], self.clock)
		self.assertEqual(stats["completedThisWeek"], 1)

	def test_admin_counters(self):
		self.request()
		stats = admin_stats()
		self.assertEqual(stats["pendingSchedules"], 1)
		self.assertEqual(stats["totalUsers"], 3)
		self.assertEqual(stats["totalDoctors"], 1)
		self.assertEqual(stats["totalVaccines"], 1)
		self.assertEqual(stats["totalRegions"], 1)
		self.assertEqual(stats["totalVenues"], 1)
