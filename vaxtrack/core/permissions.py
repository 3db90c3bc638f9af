# core/permissions.py
"""
Which role may call which operation.

Every role-gated route declares its `Operation` through `require()` in
`vaxtrack/core/auth.py`, which checks it against `PERMISSIONS`.
"""

from enum import Enum

from vaxtrack.core.errors import Forbidden
from vaxtrack.models.user import Role


class Operation(str, Enum):
	# parent
	ADD_CHILD = "add_child"
	LIST_CHILDREN = "list_children"
	REQUEST_SCHEDULE = "request_schedule"
	LIST_OWN_SCHEDULES = "list_own_schedules"
	CANCEL_SCHEDULE = "cancel_schedule"
	PARENT_DASHBOARD = "parent_dashboard"
	# doctor
	LIST_DOCTOR_SCHEDULES = "list_doctor_schedules"
	COMPLETE_SCHEDULE = "complete_schedule"
	DOCTOR_DASHBOARD = "doctor_dashboard"
	# admin
	REVIEW_SCHEDULE = "review_schedule"
	LIST_PENDING_SCHEDULES = "list_pending_schedules"
	LIST_ALL_SCHEDULES = "list_all_schedules"
	DELETE_SCHEDULE = "delete_schedule"
	MANAGE_REFERENCE_DATA = "manage_reference_data"
	MANAGE_USERS = "manage_users"
	ADMIN_DASHBOARD = "admin_dashboard"
	RUN_SWEEP = "run_sweep"
	# everyone signed in
	VIEW_PROFILE = "view_profile"

_PARENT = frozenset({Role.PARENT})
_DOCTOR = frozenset({Role.DOCTOR})
_ADMIN = frozenset({Role.ADMIN})
_ANY = frozenset(Role)

PERMISSIONS: dict[Operation, frozenset[Role]] = {
	Operation.ADD_CHILD: _PARENT,
	Operation.LIST_CHILDREN: _PARENT,
	Operation.REQUEST_SCHEDULE: _PARENT,
	Operation.LIST_OWN_SCHEDULES: _PARENT,
	Operation.CANCEL_SCHEDULE: _PARENT,
	Operation.PARENT_DASHBOARD: _PARENT,
	Operation.LIST_DOCTOR_SCHEDULES: _DOCTOR,
	Operation.COMPLETE_SCHEDULE: _DOCTOR,
	Operation.DOCTOR_DASHBOARD: _DOCTOR,
	Operation.REVIEW_SCHEDULE: _ADMIN,
	Operation.LIST_PENDING_SCHEDULES: _ADMIN,
	Operation.LIST_ALL_SCHEDULES: _ADMIN,
	Operation.DELETE_SCHEDULE: _ADMIN,
	Operation.MANAGE_REFERENCE_DATA: _ADMIN,
	Operation.MANAGE_USERS: _ADMIN,
	Operation.ADMIN_DASHBOARD: _ADMIN,
	Operation.RUN_SWEEP: _ADMIN,
	Operation.VIEW_PROFILE: _ANY,
}

def is_allowed(role: str | Role | None, operation: Operation) -> bool:
	try:
		role = Role(role)
	except ValueError:
		return False
	return role in PERMISSIONS.get(operation, frozenset())

def authorize(role: str | Role | None, operation: Operation) -> None:
	"""Raises `Forbidden` unless `role` may perform `operation`."""
	if not is_allowed(role, operation):
		raise Forbidden("Access Denied.")
