import unittest

from vaxtrack.core.errors import Forbidden
from vaxtrack.core.permissions import PERMISSIONS, Operation, authorize, is_allowed
from vaxtrack.models.user import Role


class TestPermissions(unittest.TestCase):

	def test_every_operation_has_an_entry(self):
		self.assertEqual(set(PERMISSIONS), set(Operation))

	def test_each_role_owns_its_operations(self):
		expected = {
			Role.PARENT: {
				Operation.ADD_CHILD, Operation.LIST_CHILDREN, Operation.REQUEST_SCHEDULE,
				Operation.LIST_OWN_SCHEDULES, Operation.CANCEL_SCHEDULE, Operation.PARENT_DASHBOARD,
			},
			Role.DOCTOR: {
				Operation.LIST_DOCTOR_SCHEDULES, Operation.COMPLETE_SCHEDULE, Operation.DOCTOR_DASHBOARD,
			},
			Role.ADMIN: {
				Operation.REVIEW_SCHEDULE, Operation.LIST_PENDING_SCHEDULES, Operation.LIST_ALL_SCHEDULES,
				Operation.DELETE_SCHEDULE, Operation.MANAGE_REFERENCE_DATA, Operation.MANAGE_USERS,
				Operation.ADMIN_DASHBOARD, Operation.RUN_SWEEP,
			},
		}
		for role, owned in expected.items():
			with self.subTest(role=role.value):
				allowed = {op for op in Operation if is_allowed(role, op)}
				self.assertEqual(allowed, owned | {Operation.VIEW_PROFILE})

	def test_roles_as_strings(self):
		self.assertTrue(is_allowed("admin", Operation.REVIEW_SCHEDULE))
		self.assertFalse(is_allowed("parent", Operation.REVIEW_SCHEDULE))

	def test_unknown_role_is_denied_everything(self):
		for role in (None, "", "superuser"):
			with self.subTest(role=role):
				self.assertFalse(any(is_allowed(role, op) for op in Operation))

	def test_authorize_raises_forbidden(self):
		authorize("doctor", Operation.COMPLETE_SCHEDULE)
		with self.assertRaises(Forbidden) as ctx:
			authorize("parent", Operation.COMPLETE_SCHEDULE)
		self.assertEqual(ctx.exception.msg, "Access Denied.")
		self.assertEqual(ctx.exception.status_code, 403)

if __name__ == "__main__":
	unittest.main()
