# core/reference.py
"""
Admin-managed reference data: vaccines, venues, regions and accounts.

Deleting a vaccine, venue or region is refused while a pending or scheduled
appointment still points at it. A venue is also kept while any region uses it.
"""

from typing import Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from vaxtrack.core.auth import hash_password
from vaxtrack.core.errors import ConflictingState, NotFound, ValidationError
from vaxtrack.data.repositories import account as account_repo
from vaxtrack.data.repositories import region as region_repo
from vaxtrack.data.repositories import schedule as schedule_repo
from vaxtrack.data.repositories import vaccine as vaccine_repo
from vaxtrack.data.repositories import venue as venue_repo
from vaxtrack.data.utils import project, to_object_id
from vaxtrack.models.user import Role
from vaxtrack.utils.logger import logger


def _text(value: str | None) -> str:
	return value.strip() if isinstance(value, str) else ""

def _require_id(value: str, what: str) -> ObjectId:
	oid = to_object_id(value)
	if oid is None:
		raise NotFound(f"{what} not found.")
	return oid

def _blocking_schedule(field: str, ref_id: ObjectId, what: str) -> None:
	blocking = schedule_repo.find_live_reference(field, ref_id)
	if blocking:
		raise ConflictingState(
			f"{what} cannot be deleted. It is part of active or pending vaccination schedules "
			f"(schedule {blocking['_id']}, status '{blocking['status']}')."
		)

# ──────────────────────────────────────────────────────────────── vaccines

VACCINE_FIELDS = ("name", "description", "doses", "min_age_months", "max_age_months")

def _whole(value: Any) -> bool:
	return isinstance(value, int) and not isinstance(value, bool)

def _vaccine_fields(
	name: str | None,
	description: str | None,
	doses: int | None,
	min_age_months: int | None,
	max_age_months: int | None
) -> dict[str, Any]:
	name = _text(name)
	if not name or doses is None or min_age_months is None:
		raise ValidationError("Please provide all required details (name, doses, minAgeInMonths).")
	if not _whole(doses) or doses < 1:
		raise ValidationError("Doses must be a positive whole number.")
	if not _whole(min_age_months) or min_age_months < 0:
		raise ValidationError("Minimum age must be zero or more months.")
	if max_age_months is not None and (not _whole(max_age_months) or max_age_months < min_age_months):
		raise ValidationError("Maximum age must not be lower than the minimum age.")
	return {
		"name": name,
		"description": description,
		"doses": doses,
		"min_age_months": min_age_months,
		"max_age_months": max_age_months,
	}

def create_vaccine(
	name: str | None,
	description: str | None,
	doses: int | None,
	min_age_months: int | None,
	max_age_months: int | None = None
) -> dict[str, Any]:
	fields = _vaccine_fields(name, description, doses, min_age_months, max_age_months)
	if vaccine_repo.get_vaccine_by_name(fields["name"]):
		raise ValidationError("Vaccine already exists.")
	try:
		vaccine = vaccine_repo.create_vaccine(fields)
	except DuplicateKeyError:
		raise ValidationError("Vaccine already exists.")
	logger(tag="vaccine").info(f"Created vaccine {vaccine['name']} id={vaccine['_id']}")
	return vaccine

def update_vaccine(vaccine_id: str, changes: dict[str, Any]) -> dict[str, Any]:
	"""
	Applies the fields present in `changes` to a vaccine.

	Omitted fields keep their stored value. A field sent as None is cleared, so
	`{"max_age_months": None}` removes the upper age bound while a None for a
	required field fails validation.
	"""
	oid = _require_id(vaccine_id, "Vaccine")
	current = vaccine_repo.get_vaccine_by_id(oid)
	if not current:
		raise NotFound("Vaccine not found.")
	merged = {field: current.get(field) for field in VACCINE_FIELDS}
	merged.update({k: v for k, v in changes.items() if k in VACCINE_FIELDS})
	fields = _vaccine_fields(**merged)
	other = vaccine_repo.get_vaccine_by_name(fields["name"])
	if other and other["_id"] != oid:
		raise ValidationError("Vaccine already exists.")
	updated = vaccine_repo.update_vaccine(oid, fields)
	if updated is None:
		raise NotFound("Vaccine not found.")
	return updated

def delete_vaccine(vaccine_id: str) -> None:
	oid = _require_id(vaccine_id, "Vaccine")
	if not vaccine_repo.get_vaccine_by_id(oid):
		raise NotFound("Vaccine not found.")
	_blocking_schedule("vaccine", oid, "Vaccine")
	vaccine_repo.delete_vaccine(oid)
	logger(tag="vaccine").info(f"Deleted vaccine {oid}")

def list_vaccines() -> list[dict[str, Any]]:
	return vaccine_repo.get_vaccines()

# ────────────────────────────────────────────────────────────────── venues

def create_venue(name: str | None, contact: str | None) -> dict[str, Any]:
	name, contact = _text(name), _text(contact)
	if not name or not contact:
		raise ValidationError("Please provide all required details.")
	if venue_repo.get_venue_by_name(name):
		raise ValidationError("Venue already exists.")
	try:
		venue = venue_repo.create_venue(name, contact)
	except DuplicateKeyError:
		raise ValidationError("Venue already exists.")
	logger(tag="venue").info(f"Created venue {venue['name']} id={venue['_id']}")
	return venue

def update_venue(venue_id: str, name: str | None, contact: str | None) -> dict[str, Any]:
	oid = _require_id(venue_id, "Venue")
	if not venue_repo.get_venue_by_id(oid):
		raise NotFound("Venue not found.")
	name, contact = _text(name), _text(contact)
	updates: dict[str, Any] = {}
	if name:
		other = venue_repo.get_venue_by_name(name)
		if other and other["_id"] != oid:
			raise ValidationError("Venue already exists.")
		updates["name"] = name
	if contact:
		updates["contact"] = contact
	if not updates:
		raise ValidationError("Nothing to update.")
	updated = venue_repo.update_venue(oid, updates)
	if updated is None:
		raise NotFound("Venue not found.")
	return updated

def delete_venue(venue_id: str) -> None:
	oid = _require_id(venue_id, "Venue")
	if not venue_repo.get_venue_by_id(oid):
		raise NotFound("Venue not found.")
	region = region_repo.find_region_using_venue(oid)
	if region:
		raise ConflictingState(
			f"Venue cannot be deleted. It is assigned to region '{region['name']}'."
		)
	_blocking_schedule("venue", oid, "Venue")
	venue_repo.delete_venue(oid)
	logger(tag="venue").info(f"Deleted venue {oid}")

def list_venues() -> list[dict[str, Any]]:
	return venue_repo.get_venues()

# ───────────────────────────────────────────────────────────────── regions

def _region_refs(doctor: str | None, venue: str | None) -> tuple[ObjectId, ObjectId]:
	doctor_id = to_object_id(doctor)
	if doctor_id is None or not account_repo.get_doctor(doctor_id):
		raise ValidationError("Assigned doctor not found or is not a valid doctor.")
	venue_id = to_object_id(venue)
	if venue_id is None or not venue_repo.get_venue_by_id(venue_id):
		raise NotFound("Venue not found.")
	return doctor_id, venue_id

def create_region(name: str | None, doctor: str | None, venue: str | None) -> dict[str, Any]:
	name = _text(name)
	if not name or not doctor or not venue:
		raise ValidationError("Please provide all required details.")
	if region_repo.get_region_by_name(name):
		raise ValidationError("Region already exists.")
	doctor_id, venue_id = _region_refs(doctor, venue)
	try:
		region = region_repo.create_region(name, doctor_id, venue_id)
	except DuplicateKeyError:
		raise ValidationError("Region already exists.")
	logger(tag="region").info(f"Created region {name} id={region['_id']}")
	return region

def update_region(
	region_id: str,
	name: str | None,
	doctor: str | None,
	venue: str | None
) -> dict[str, Any]:
	"""Edits a region. Schedules already requested keep the doctor and venue they were given."""
	oid = _require_id(region_id, "Region")
	current = region_repo.get_region_by_id(oid)
	if not current:
		raise NotFound("Region not found.")
	name = _text(name)
	updates: dict[str, Any] = {}
	if name:
		other = region_repo.get_region_by_name(name)
		if other and other["_id"] != oid:
			raise ValidationError("Region already exists.")
		updates["name"] = name
	if doctor or venue:
		doctor_id, venue_id = _region_refs(
			doctor or str(current["doctor"]),
			venue or str(current["venue"])
		)
		updates.update({"doctor": doctor_id, "venue": venue_id})
	if not updates:
		raise ValidationError("Nothing to update.")
	updated = region_repo.update_region(oid, updates)
	if updated is None:
		raise NotFound("Region not found.")
	return updated

def delete_region(region_id: str) -> None:
	oid = _require_id(region_id, "Region")
	if not region_repo.get_region_by_id(oid):
		raise NotFound("Region not found.")
	_blocking_schedule("region", oid, "Region")
	region_repo.delete_region(oid)
	logger(tag="region").info(f"Deleted region {oid}")

def list_regions() -> list[dict[str, Any]]:
	"""Regions with the doctor's and venue's names filled in."""
	regions = []
	for region in region_repo.get_regions():
		region = dict(region)
		region["doctor"] = project(account_repo.get_user_by_id(region["doctor"]), ("name",)) or region["doctor"]
		region["venue"] = project(venue_repo.get_venue_by_id(region["venue"]), ("name",)) or region["venue"]
		regions.append(region)
	return regions

# ──────────────────────────────────────────────────────────────── accounts

def create_doctor(name: str | None, email: str | None, password: str | None) -> dict[str, Any]:
	name, email = _text(name), _text(email).lower()
	if not name or not email or not password:
		raise ValidationError("Please provide all required details.")
	if account_repo.get_user_by_email(email):
		raise ValidationError("Doctor already exists.")
	try:
		doctor = account_repo.create_user(name, email, hash_password(password), Role.DOCTOR.value)
	except DuplicateKeyError:
		raise ValidationError("Doctor already exists.")
	return {
		"id": doctor["_id"],
		"name": doctor["name"],
		"email": doctor["email"],
		"role": doctor["role"],
	}

def list_users(role: str | None = None) -> list[dict[str, Any]]:
	if role is not None:
		try:
			role = Role(role).value
		except ValueError:
			raise ValidationError("Unknown role.")
	return account_repo.get_users(role)

def delete_user(acting_admin_id: ObjectId, user_id: str) -> None:
	oid = _require_id(user_id, "User")
	user = account_repo.get_user_by_id(oid)
	if not user:
		raise NotFound("User not found.")
	if oid == acting_admin_id:
		raise ValidationError("You cannot delete your own account.")
	if user["role"] == Role.ADMIN.value:
		raise ValidationError("Cannot delete admin.")
	account_repo.delete_user(oid)
	logger(tag="user").info(f"Deleted {user['role']} account {oid}")
