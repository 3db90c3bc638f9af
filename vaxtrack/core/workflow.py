# core/workflow.py
"""
Lifecycle of a vaccination schedule.

	(request) ──> pending_approval ──approve──> scheduled ──complete──> completed
	                     │                          │
	                     ├──reject──> rejected_by_admin
	                     │                          └──sweep (date passed)──> missed
	                     └──cancel──> cancelled <──cancel── scheduled

Every status change is written with the status it is leaving in the update filter, so
a change that raced with another request fails with `ConflictingState` instead of
overwriting it.
"""

from datetime import datetime
from typing import Any, Callable

from bson import ObjectId

from vaxtrack.core.errors import ConflictingState, NotFound, ValidationError
from vaxtrack.data.repositories import schedule as schedule_repo
from vaxtrack.data.repositories.account import get_doctor, get_user_by_id
from vaxtrack.data.repositories.child import (get_child_by_id,
                                              get_child_for_parent)
from vaxtrack.data.repositories.region import get_region_by_id
from vaxtrack.data.repositories.vaccine import get_vaccine_by_id
from vaxtrack.data.repositories.venue import get_venue_by_id
from vaxtrack.data.utils import project, to_object_id
from vaxtrack.models.schedule import (FINISHED_STATUSES, LIVE_STATUSES,
                                      ReviewDecision, ScheduleStatus)
from vaxtrack.utils.clock import Clock, to_naive_utc
from vaxtrack.utils.logger import logger

_LOOKUPS: dict[str, Callable[[ObjectId], dict[str, Any] | None]] = {
	"child": get_child_by_id,
	"parent": get_user_by_id,
	"doctor": get_user_by_id,
	"venue": get_venue_by_id,
	"region": get_region_by_id,
	"vaccine": get_vaccine_by_id,
}

# Field projections for each listing; None keeps the whole referenced document
PARENT_VIEW = {
	"child": ("name", "dob"),
	"doctor": ("name", "email"),
	"venue": ("name",),
	"region": ("name",),
	"vaccine": ("name",),
}
DOCTOR_VIEW = {
	"child": ("name", "dob", "gender"),
	"parent": ("name", "email"),
	"venue": ("name", "contact"),
	"region": ("name",),
	"vaccine": None,
}
ADMIN_VIEW = {
	"child": ("name", "dob"),
	"parent": ("name", "email"),
	"doctor": ("name",),
	"venue": ("name",),
	"region": ("name",),
	"vaccine": ("name",),
}
REVIEW_VIEW = {
	"child": ("name", "dob", "gender"),
	"parent": ("name", "email"),
	"doctor": ("name", "email"),
	"venue": ("name", "contact"),
	"region": ("name",),
	"vaccine": None,
}

def parse_date(value: str) -> datetime | None:
	"""Parses `YYYY-MM-DD` or an ISO-8601 timestamp into naive UTC. None if it is not a date."""
	if not isinstance(value, str) or not value.strip():
		return None
	text = value.strip()
	if text.endswith(("Z", "z")):
		text = text[:-1] + "+00:00"
	try:
		parsed = datetime.fromisoformat(text)
	except ValueError:
		return None
	return to_naive_utc(parsed)

def age_in_months(dob: datetime, at: datetime) -> int:
	"""Whole months between `dob` and `at`, counting a month only once its day is reached. Never negative."""
	months = (at.year - dob.year) * 12 + (at.month - dob.month)
	if at.day < dob.day:
		months -= 1
	return max(months, 0)

def age_band_check(age: int | None, vaccine: dict[str, Any] | None) -> bool | None:
	"""Whether `age` falls in the vaccine's recommended band. Advisory only, None when unknown."""
	if age is None or not vaccine:
		return None
	min_age = vaccine.get("min_age_months") or 0
	max_age = vaccine.get("max_age_months")
	if age < min_age:
		return False
	if max_age is not None and age > max_age:
		return False
	return True

class ScheduleWorkflow:
	"""Creates schedules and moves them through their statuses."""

	def __init__(self, clock: Clock | None = None):
		self.clock = clock or Clock()

	# ---------------------------------------------------------------- creation

	def request_schedule(
		self,
		parent_id: ObjectId,
		child: str | None,
		vaccine: str | None,
		region: str | None,
		date: str | None
	) -> dict[str, Any]:
		"""
		Creates a `pending_approval` schedule for one of the parent's children.

		Checks run in order and the first failure is raised; nothing is written unless
		all of them pass. The region's doctor and venue are copied onto the schedule and
		are not updated if the region changes later.
		"""
		if not child or not vaccine or not region or not date:
			raise ValidationError("Please provide all required details (child, vaccine, region, date).")

		schedule_date = parse_date(date)
		if schedule_date is None:
			raise ValidationError("Invalid schedule date.")
		if schedule_date < self.clock.today():
			raise ValidationError("Schedule date cannot be in the past.")

		child_id = to_object_id(child)
		child_doc = get_child_for_parent(child_id, parent_id) if child_id else None
		if not child_doc:
			raise NotFound("Child not found or doesn't belong to the parent")

		region_id = to_object_id(region)
		region_doc = get_region_by_id(region_id) if region_id else None
		if not region_doc:
			raise NotFound("Region not found")

		if not get_doctor(region_doc["doctor"]):
			raise ValidationError("Doctor assigned to the region not found or is not a valid doctor.")

		vaccine_id = to_object_id(vaccine)
		vaccine_doc = get_vaccine_by_id(vaccine_id) if vaccine_id else None
		if not vaccine_doc:
			raise NotFound("Vaccine not found")

		schedule = schedule_repo.create_schedule({
			"child": child_doc["_id"],
			"parent": parent_id,
			"doctor": region_doc["doctor"],
			"venue": region_doc["venue"],
			"region": region_doc["_id"],
			"vaccine": vaccine_doc["_id"],
			"date": schedule_date,
			"status": ScheduleStatus.PENDING_APPROVAL.value,
		})
		logger(tag="request").info(f"Schedule {schedule['_id']} requested by parent {parent_id}")
		return schedule

	# ------------------------------------------------------------- transitions

	def _transition(
		self,
		schedule: dict[str, Any],
		new_status: ScheduleStatus,
		expected: tuple[str, ...],
		action: str
	) -> dict[str, Any]:
		if schedule["status"] not in expected:
			raise ConflictingState.transition(schedule["status"], action)
		updated = schedule_repo.set_status(schedule["_id"], new_status.value, expected)
		if updated is None:
			current = schedule_repo.get_schedule_by_id(schedule["_id"])
			if current is None:
				raise NotFound("Vaccination schedule not found.")
			raise ConflictingState.transition(current["status"], action)
		logger(tag=action).info(
			f"Schedule {schedule['_id']}: {schedule['status']} -> {new_status.value}"
		)
		return updated

	def review_schedule(self, schedule_id: str, decision: str | None) -> dict[str, Any]:
		"""Approves (`scheduled`) or rejects (`rejected_by_admin`) a pending schedule."""
		try:
			choice = ReviewDecision(decision)
		except ValueError:
			raise ValidationError("Invalid decision. Must be 'approve' or 'reject'.")

		schedule = self._find(schedule_id)
		if choice is ReviewDecision.APPROVE:
			target = ScheduleStatus.SCHEDULED
		else:
			target = ScheduleStatus.REJECTED_BY_ADMIN
		return self._transition(
			schedule,
			target,
			(ScheduleStatus.PENDING_APPROVAL.value,),
			choice.value
		)

	def complete_schedule(self, doctor_id: ObjectId, schedule_id: str) -> dict[str, Any]:
		"""Marks one of the doctor's scheduled appointments as completed."""
		schedule = self._find(schedule_id, doctor=doctor_id)
		return self._transition(
			schedule,
			ScheduleStatus.COMPLETED,
			(ScheduleStatus.SCHEDULED.value,),
			"complete"
		)

	def cancel_schedule(self, parent_id: ObjectId, schedule_id: str) -> dict[str, Any]:
		"""Cancels one of the parent's pending or scheduled appointments."""
		schedule = self._find(schedule_id, parent=parent_id)
		return self._transition(
			schedule,
			ScheduleStatus.CANCELLED,
			LIVE_STATUSES,
			"cancel"
		)

	def delete_schedule(self, schedule_id: str) -> None:
		"""Permanently removes a finished schedule."""
		schedule = self._find(schedule_id)
		if schedule["status"] not in FINISHED_STATUSES:
			raise ValidationError(
				f"Vaccination schedule cannot be deleted. Current status: {schedule['status']}"
			)
		if not schedule_repo.delete_schedule(schedule["_id"], FINISHED_STATUSES):
			current = schedule_repo.get_schedule_by_id(schedule["_id"])
			if current is None:
				raise NotFound("Vaccination schedule not found.")
			raise ValidationError(
				f"Vaccination schedule cannot be deleted. Current status: {current['status']}"
			)
		logger(tag="delete").info(f"Schedule {schedule['_id']} deleted ({schedule['status']})")

	def sweep_missed(self) -> int:
		"""Marks every `scheduled` appointment dated before now as `missed`."""
		modified = schedule_repo.mark_missed(self.clock.now())
		logger(tag="sweep").info(f"Missed vaccinations updated for {modified} schedules.")
		return modified

	# ---------------------------------------------------------------- listings

	def parent_schedules(self, parent_id: ObjectId) -> list[dict[str, Any]]:
		return self.populate(schedule_repo.get_schedules({"parent": parent_id}), PARENT_VIEW)

	def doctor_schedules(self, doctor_id: ObjectId) -> list[dict[str, Any]]:
		return self.populate(schedule_repo.get_schedules({"doctor": doctor_id}), DOCTOR_VIEW)

	def all_schedules(self) -> list[dict[str, Any]]:
		return self.populate(schedule_repo.get_schedules(newest_first=True), ADMIN_VIEW)

	def pending_schedules(self) -> list[dict[str, Any]]:
		"""
		Pending schedules with decision-support data for the reviewing admin.

		Adds the child's age in months on the appointment date and the vaccine's
		recommended band. The band is never enforced.
		"""
		pending = schedule_repo.get_schedules({"status": ScheduleStatus.PENDING_APPROVAL.value})
		results = []
		for schedule in self.populate(pending, REVIEW_VIEW):
			child = schedule.get("child") or {}
			vaccine = schedule.get("vaccine") or {}
			dob = child.get("dob")
			age = age_in_months(dob, schedule["date"]) if dob else None
			schedule["childAgeInMonthsAtVaccination"] = age
			schedule["vaccineRecommendedMinAge"] = vaccine.get("min_age_months")
			schedule["vaccineRecommendedMaxAge"] = vaccine.get("max_age_months")
			schedule["ageWithinRecommendedRange"] = age_band_check(age, vaccine)
			results.append(schedule)
		return results

	# ----------------------------------------------------------------- helpers

	def _find(self, schedule_id: str, **scope: ObjectId) -> dict[str, Any]:
		oid = to_object_id(schedule_id)
		schedule = schedule_repo.get_schedule_by_id(oid, **scope) if oid else None
		if not schedule:
			if scope:
				raise NotFound("Vaccination schedule not found or not authorized.")
			raise NotFound("Vaccination schedule not found.")
		return schedule

	@staticmethod
	def populate(
		schedules: list[dict[str, Any]],
		view: dict[str, tuple[str, ...] | None]
	) -> list[dict[str, Any]]:
		"""Replaces reference ids with the referenced documents, projected per `view`."""
		cache: dict[tuple[str, ObjectId], dict[str, Any] | None] = {}
		populated = []
		for schedule in schedules:
			doc = dict(schedule)
			for field, fields in view.items():
				ref = schedule.get(field)
				if ref is None:
					continue
				key = (field, ref)
				if key not in cache:
					cache[key] = _LOOKUPS[field](ref)
				target = cache[key]
				doc[field] = target if fields is None else project(target, fields)
			populated.append(doc)
		return populated