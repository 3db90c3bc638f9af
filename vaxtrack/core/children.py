# core/children.py

from typing import Any

from bson import ObjectId

from vaxtrack.core.errors import ValidationError
from vaxtrack.core.workflow import parse_date
from vaxtrack.data.repositories.child import create_child
from vaxtrack.models.user import Gender
from vaxtrack.utils.clock import Clock
from vaxtrack.utils.logger import logger


def add_child(
	parent_id: ObjectId,
	name: str | None,
	dob: str | None,
	gender: str | None,
	clock: Clock
) -> dict[str, Any]:
	"""Registers a child under `parent_id`. The date of birth may be today but not later."""
	name = name.strip() if name else ""
	if not name or not dob or not gender:
		raise ValidationError("Please provide all details.")
	date_of_birth = parse_date(dob)
	if date_of_birth is None:
		raise ValidationError("Invalid date of birth.")
	if date_of_birth > clock.now():
		raise ValidationError("Date of birth cannot be in the future.")
	try:
		child_gender = Gender(gender.strip().lower())
	except ValueError:
		raise ValidationError("Gender must be one of male, female or other.")
	child = create_child(parent_id, name, date_of_birth, child_gender.value)
	logger().info(f"Added child {child['_id']} for parent {parent_id}")
	return child
