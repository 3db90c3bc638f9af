# data/repositories/schedule.py
"""
Vaccination schedules and their status field.

## Fields
	_id: index
	child: children._id
	parent: users._id of the requesting parent
	doctor: users._id copied from the region when the schedule was requested
	venue: venues._id copied from the region when the schedule was requested
	region: regions._id
	vaccine: vaccines._id
	date: Appointment date, naive UTC
	status: pending_approval | scheduled | completed | missed | cancelled | rejected_by_admin
	created_at / updated_at: timestamps

Status changes go through `set_status`, which only writes when the stored status is still
one of the expected values.
"""

from datetime import datetime
from typing import Any, Iterable

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from vaxtrack.data.connection import SCHEDULES_COLLECTION, get_collection
from vaxtrack.data.repositories.base import insert_document, update_document
from vaxtrack.models.schedule import LIVE_STATUSES, ScheduleStatus
from vaxtrack.utils.clock import utcnow


def create_schedule(
	schedule_data: dict[str, Any],
	/, *,
	collection_name: str = SCHEDULES_COLLECTION
) -> dict[str, Any]:
	return insert_document(collection_name, dict(schedule_data))

def get_schedule_by_id(
	schedule_id: ObjectId,
	/, *,
	parent: ObjectId | None = None,
	doctor: ObjectId | None = None,
	collection_name: str = SCHEDULES_COLLECTION
) -> dict[str, Any] | None:
	"""Finds a schedule, optionally scoped to the parent or doctor it belongs to."""
	query: dict[str, Any] = {"_id": schedule_id}
	if parent is not None:
		query["parent"] = parent
	if doctor is not None:
		query["doctor"] = doctor
	return get_collection(collection_name).find_one(query)

def get_schedules(
	query: dict[str, Any] | None = None,
	*,
	newest_first: bool = False,
	collection_name: str = SCHEDULES_COLLECTION
) -> list[dict[str, Any]]:
	cursor = get_collection(collection_name).find(query or {}).sort(
		"date", DESCENDING if newest_first else ASCENDING
	)
	return list(cursor)

def count_schedules(
	query: dict[str, Any] | None = None,
	*,
	collection_name: str = SCHEDULES_COLLECTION
) -> int:
	return get_collection(collection_name).count_documents(query or {})

def set_status(
	schedule_id: ObjectId,
	new_status: str,
	/,
	expected: Iterable[str],
	*,
	collection_name: str = SCHEDULES_COLLECTION
) -> dict[str, Any] | None:
	"""
	Moves a schedule to `new_status` if its current status is in `expected`.

	Returns the updated schedule, or None if the status changed since it was read.
	"""
	return update_document(
		collection_name,
		schedule_id,
		{"status": new_status},
		match={"status": {"$in": list(expected)}}
	)

def delete_schedule(
	schedule_id: ObjectId,
	/,
	allowed: Iterable[str],
	*,
	collection_name: str = SCHEDULES_COLLECTION
) -> bool:
	"""Deletes a schedule only while its status is one of `allowed`."""
	result = get_collection(collection_name).delete_one(
		{"_id": schedule_id, "status": {"$in": list(allowed)}}
	)
	return result.deleted_count > 0

def mark_missed(
	now: datetime,
	*,
	collection_name: str = SCHEDULES_COLLECTION
) -> int:
	"""Moves every scheduled appointment dated before `now` to missed. Returns how many changed."""
	result = get_collection(collection_name).update_many(
		{"status": ScheduleStatus.SCHEDULED.value, "date": {"$lt": now}},
		{"$set": {"status": ScheduleStatus.MISSED.value, "updated_at": utcnow()}}
	)
	return result.modified_count

def find_live_reference(
	field: str,
	ref_id: ObjectId,
	/, *,
	collection_name: str = SCHEDULES_COLLECTION
) -> dict[str, Any] | None:
	"""Returns one pending or scheduled appointment whose `field` points at `ref_id`."""
	return get_collection(collection_name).find_one(
		{field: ref_id, "status": {"$in": list(LIVE_STATUSES)}}
	)
