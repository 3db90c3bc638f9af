# core/dashboard.py
"""Counters shown on each role's landing page."""

from datetime import timedelta

from bson import ObjectId

from vaxtrack.data.repositories.account import count_users
from vaxtrack.data.repositories.child import count_children
from vaxtrack.data.repositories.region import count_regions
from vaxtrack.data.repositories.schedule import count_schedules
from vaxtrack.data.repositories.vaccine import count_vaccines
from vaxtrack.data.repositories.venue import count_venues
from vaxtrack.models.schedule import ScheduleStatus
from vaxtrack.models.user import Role
from vaxtrack.utils.clock import Clock


def parent_stats(parent_id: ObjectId, clock: Clock) -> dict[str, int]:
	return {
		"childrenCount": count_children(parent_id),
		"upcomingVaccinations": count_schedules({
			"parent": parent_id,
			"status": ScheduleStatus.SCHEDULED.value,
			"date": {"$gte": clock.now()},
		}),
		"pendingApproval": count_schedules({
			"parent": parent_id,
			"status": ScheduleStatus.PENDING_APPROVAL.value,
		}),
	}

def doctor_stats(doctor_id: ObjectId, clock: Clock) -> dict[str, int]:
	today = clock.today()
	week_start = today - timedelta(days=today.weekday())
	return {
		"todaysAppointments": count_schedules({
			"doctor": doctor_id,
			"status": ScheduleStatus.SCHEDULED.value,
			"date": {"$gte": today, "$lt": today + timedelta(days=1)},
		}),
		"completedThisWeek": count_schedules({
			"doctor": doctor_id,
			"status": ScheduleStatus.COMPLETED.value,
			"updated_at": {"$gte": week_start},
		}),
	}

def admin_stats() -> dict[str, int]:
	return {
		"pendingSchedules": count_schedules({"status": ScheduleStatus.PENDING_APPROVAL.value}),
		"totalUsers": count_users(),
		"totalDoctors": count_users(Role.DOCTOR.value),
		"totalVaccines": count_vaccines(),
		"totalRegions": count_regions(),
		"totalVenues": count_venues(),
	}
