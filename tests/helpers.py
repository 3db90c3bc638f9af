"""Shared fixtures: an in-memory database, a fixed clock and record factories."""

import itertools
import unittest
from datetime import datetime
from typing import Any

import mongomock

from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.data import connection as db_conn
from vaxtrack.data.repositories.account import create_user
from vaxtrack.data.repositories.child import create_child
from vaxtrack.data.repositories.region import create_region
from vaxtrack.data.repositories.vaccine import create_vaccine
from vaxtrack.data.repositories.venue import create_venue
from vaxtrack.utils.clock import FixedClock

# Tuesday morning
NOW = datetime(2026, 3, 10, 9, 30)

_counter = itertools.count(1)

class DatabaseTestCase(unittest.TestCase):
	"""Gives every test a fresh in-memory database and a clock stopped at `NOW`."""

	def setUp(self):
		db_conn.set_client(mongomock.MongoClient())
		db_conn.ensure_indexes()
		self.clock = FixedClock(NOW)
		self.workflow = ScheduleWorkflow(self.clock)

	def tearDown(self):
		db_conn.set_client(None)

	# ─────────────────────────────────────────── factories

	def make_user(self, role: str, name: str | None = None, email: str | None = None) -> dict[str, Any]:
		name = name or f"{role.title()} {next(_counter)}"
		email = email or f"{name.lower().replace(' ', '.')}@example.com"
		return create_user(name, email, "not-a-real-hash", role)

	def make_vaccine(self, name: str = "MMR", min_age: int = 12, max_age: int | None = 15) -> dict[str, Any]:
		return create_vaccine({
			"name": name,
			"description": "Measles, mumps and rubella",
			"doses": 2,
			"min_age_months": min_age,
			"max_age_months": max_age,
		})

	def make_venue(self, name: str = "Village Clinic") -> dict[str, Any]:
		return create_venue(name, "+91 555 0100")

	def make_region(self, doctor: dict[str, Any], venue: dict[str, Any], name: str = "Rampur") -> dict[str, Any]:
		return create_region(name, doctor["_id"], venue["_id"])

	def make_child(self, parent: dict[str, Any], dob: datetime = datetime(2025, 2, 20), name: str = "Asha") -> dict[str, Any]:
		return create_child(parent["_id"], name, dob, "female")

	def make_world(self) -> None:
		"""Parent P with child C, doctor D at venue Ve serving region R, vaccine V."""
		self.parent = self.make_user("parent", "Priya Parent")
		self.doctor = self.make_user("doctor", "Dev Doctor")
		self.admin = self.make_user("admin", "Ada Admin")
		self.venue = self.make_venue()
		self.region = self.make_region(self.doctor, self.venue)
		self.vaccine = self.make_vaccine()
		self.child = self.make_child(self.parent)

	def request(self, date: str = "2026-03-10", **overrides: Any) -> dict[str, Any]:
		args = {
			"child": str(self.child["_id"]),
			"vaccine": str(self.vaccine["_id"]),
			"region": str(self.region["_id"]),
			"date": date,
		}
		args.update(overrides)
		return self.workflow.request_schedule(self.parent["_id"], **args)
