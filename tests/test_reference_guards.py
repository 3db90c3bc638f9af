"""Reference data management and the deletion guards that protect live schedules."""

from bson import ObjectId

from tests.helpers import DatabaseTestCase
from vaxtrack.core import reference
from vaxtrack.core.errors import ConflictingState, NotFound, ValidationError
from vaxtrack.data.repositories.region import get_region_by_id
from vaxtrack.data.repositories.vaccine import get_vaccine_by_id
from vaxtrack.data.repositories.venue import get_venue_by_id


class TestDeletionGuards(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.make_world()

	def test_unreferenced_reference_data_is_deleted(self):
		spare_vaccine = self.make_vaccine("Polio", 0, None)
		spare_venue = self.make_venue("Old School")
		reference.delete_vaccine(str(spare_vaccine["_id"]))
		reference.delete_venue(str(spare_venue["_id"]))
		self.assertIsNone(get_vaccine_by_id(spare_vaccine["_id"]))
		self.assertIsNone(get_venue_by_id(spare_venue["_id"]))

	def test_live_schedules_block_deletion(self):
		for status in ("pending_approval", "scheduled"):
			with self.subTest(status=status):
				schedule = self.request()
				if status == "scheduled":
					self.workflow.review_schedule(str(schedule["_id"]), "approve")

				with self.assertRaises(ConflictingState) as ctx:
					reference.delete_vaccine(str(self.vaccine["_id"]))
				self.assertIn(str(schedule["_id"]), ctx.exception.msg)
				with self.assertRaises(ConflictingState):
					reference.delete_region(str(self.region["_id"]))

				self.assertIsNotNone(get_vaccine_by_id(self.vaccine["_id"]))
				self.assertIsNotNone(get_region_by_id(self.region["_id"]))
				self.workflow.cancel_schedule(self.parent["_id"], str(schedule["_id"]))

	def test_finished_schedules_do_not_block_deletion(self):
		schedule = self.request()
		self.workflow.cancel_schedule(self.parent["_id"], str(schedule["_id"]))

		reference.delete_region(str(self.region["_id"]))
		reference.delete_vaccine(str(self.vaccine["_id"]))
		reference.delete_venue(str(self.venue["_id"]))

		self.assertIsNone(get_region_by_id(self.region["_id"]))
		self.assertIsNone(get_venue_by_id(self.venue["_id"]))

	def test_venue_used_by_a_region_is_kept(self):
		with self.assertRaises(ConflictingState) as ctx:
			reference.delete_venue(str(self.venue["_id"]))
		self.assertIn("Rampur", ctx.exception.msg)

	def test_venue_of_a_live_schedule_is_kept_after_region_moves(self):
		schedule = self.request()
		other_venue = self.make_venue("Town Hall")
		reference.update_region(str(self.region["_id"]), None, None, str(other_venue["_id"]))

		with self.assertRaises(ConflictingState) as ctx:
			reference.delete_venue(str(self.venue["_id"]))
		self.assertIn(str(schedule["_id"]), ctx.exception.msg)

	def test_unknown_or_malformed_ids_are_not_found(self):
		for delete in (reference.delete_vaccine, reference.delete_venue, reference.delete_region):
			with self.subTest(delete=delete.__name__):
				with self.assertRaises(NotFound):
					delete(str(ObjectId()))
				with self.assertRaises(NotFound):
					delete("garbage")

class TestVaccines(DatabaseTestCase):

	def test_create_and_list(self):
		reference.create_vaccine("Rotavirus", "Oral drops", 3, 2, 8)
		reference.create_vaccine("BCG", None, 1, 0)
		names = [v["name"] for v in reference.list_vaccines()]
		self.assertEqual(names, ["BCG", "Rotavirus"])

	def test_duplicate_name_is_rejected(self):
		reference.create_vaccine("BCG", None, 1, 0)
		with self.assertRaises(ValidationError):
			reference.create_vaccine("BCG", "again", 1, 0)

	def test_field_validation(self):
		cases = [
			(None, None, 1, 0, None),
			("X", None, 0, 0, None),
			("X", None, 1, -1, None),
			("X", None, 1, 6, 3),
			("X", None, True, 0, None),
			("X", None, 1, 0, True),
			("   ", None, 1, 0, None),
		]
		for args in cases:
			with self.subTest(args=args):
				with self.assertRaises(ValidationError):
					reference.create_vaccine(*args)

	def test_update_keeps_unsent_fields(self):
		vaccine = reference.create_vaccine("Hep B", "Hepatitis B", 3, 0, 6)
		updated = reference.update_vaccine(str(vaccine["_id"]), {"doses": 4})
		self.assertEqual(updated["doses"], 4)
		self.assertEqual(updated["name"], "Hep B")
		self.assertEqual(updated["max_age_months"], 6)

	def test_update_can_clear_the_upper_age_bound(self):
		vaccine = reference.create_vaccine("Hep B", "Hepatitis B", 3, 0, 6)
		updated = reference.update_vaccine(str(vaccine["_id"]), {"max_age_months": None})
		self.assertIsNone(updated["max_age_months"])
		self.assertEqual(updated["min_age_months"], 0)

	def test_update_cannot_clear_required_fields(self):
		vaccine = reference.create_vaccine("Hep B", "Hepatitis B", 3, 0, 6)
		for field in ("name", "doses", "min_age_months"):
			with self.subTest(field=field):
				with self.assertRaises(ValidationError):
					reference.update_vaccine(str(vaccine["_id"]), {field: None})

	def test_update_cannot_take_another_vaccines_name(self):
		reference.create_vaccine("BCG", None, 1, 0)
		other = reference.create_vaccine("OPV", None, 4, 0)
		with self.assertRaises(ValidationError):
			reference.update_vaccine(str(other["_id"]), {"name": "BCG"})

class TestVenuesAndRegions(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.doctor = self.make_user("doctor")
		self.parent = self.make_user("parent")

	def test_venue_requires_name_and_contact(self):
		with self.assertRaises(ValidationError):
			reference.create_venue("Clinic", None)
		venue = reference.create_venue(" Clinic ", "555")
		self.assertEqual(venue["name"], "Clinic")
		with self.assertRaises(ValidationError):
			reference.create_venue("Clinic", "556")

	def test_blank_names_are_rejected(self):
		with self.assertRaises(ValidationError):
			reference.create_venue("   ", "555")
		venue = reference.create_venue("Clinic", "555")
		with self.assertRaises(ValidationError):
			reference.create_region("  ", str(self.doctor["_id"]), str(venue["_id"]))
		with self.assertRaises(ValidationError):
			reference.update_venue(str(venue["_id"]), " ", None)
		self.assertEqual(reference.list_venues()[0]["name"], "Clinic")

	def test_region_needs_a_real_doctor(self):
		venue = reference.create_venue("Clinic", "555")
		with self.assertRaises(ValidationError):
			reference.create_region("North", str(self.parent["_id"]), str(venue["_id"]))
		with self.assertRaises(ValidationError):
			reference.create_region("North", str(ObjectId()), str(venue["_id"]))

	def test_region_needs_an_existing_venue(self):
		with self.assertRaises(NotFound):
			reference.create_region("North", str(self.doctor["_id"]), str(ObjectId()))

	def test_region_listing_names_doctor_and_venue(self):
		venue = reference.create_venue("Clinic", "555")
		reference.create_region("North", str(self.doctor["_id"]), str(venue["_id"]))

		[region] = reference.list_regions()
		self.assertEqual(region["doctor"], {"_id": self.doctor["_id"], "name": self.doctor["name"]})
		self.assertEqual(region["venue"], {"_id": venue["_id"], "name": "Clinic"})

	def test_duplicate_region_name_is_rejected(self):
		venue = reference.create_venue("Clinic", "555")
		reference.create_region("North", str(self.doctor["_id"]), str(venue["_id"]))
		with self.assertRaises(ValidationError):
			reference.create_region("North", str(self.doctor["_id"]), str(venue["_id"]))

class TestAccounts(DatabaseTestCase):

	def setUp(self):
		super().setUp()
		self.admin = self.make_user("admin")

	def test_create_doctor(self):
		doctor = reference.create_doctor("Meera", "Meera@Example.com", "s3cret")
		self.assertEqual(doctor["role"], "doctor")
		self.assertEqual(doctor["email"], "meera@example.com")
		self.assertNotIn("password", doctor)
		with self.assertRaises(ValidationError):
			reference.create_doctor("Meera", "meera@example.com", "other")
		with self.assertRaises(ValidationError):
			reference.create_doctor("  ", "blank@example.com", "pw")

	def test_list_users_by_role(self):
		self.make_user("parent")
		self.make_user("doctor")
		self.assertEqual(len(reference.list_users()), 3)
		self.assertEqual([u["role"] for u in reference.list_users("doctor")], ["doctor"])
		with self.assertRaises(ValidationError):
			reference.list_users("nurse")

	def test_listed_users_never_carry_password_hashes(self):
		self.make_user("parent")
		for user in reference.list_users():
			self.assertNotIn("password", user)

	def test_delete_rules(self):
		parent = self.make_user("parent")
		other_admin = self.make_user("admin")

		with self.assertRaises(ValidationError):
			reference.delete_user(self.admin["_id"], str(self.admin["_id"]))
		with self.assertRaises(ValidationError):
			reference.delete_user(self.admin["_id"], str(other_admin["_id"]))
		with self.assertRaises(NotFound):
			reference.delete_user(self.admin["_id"], str(ObjectId()))

		reference.delete_user(self.admin["_id"], str(parent["_id"]))
		self.assertEqual(len(reference.list_users("parent")), 0)
