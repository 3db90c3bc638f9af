# models/schedule.py

from enum import Enum

from pydantic import BaseModel


class ScheduleStatus(str, Enum):
	PENDING_APPROVAL = "pending_approval"
	SCHEDULED = "scheduled"
	COMPLETED = "completed"
	MISSED = "missed"
	CANCELLED = "cancelled"
	REJECTED_BY_ADMIN = "rejected_by_admin"

# Schedules that still hold a doctor, venue and vaccine slot
LIVE_STATUSES = (ScheduleStatus.PENDING_APPROVAL.value, ScheduleStatus.SCHEDULED.value)

# Schedules an admin may delete
FINISHED_STATUSES = (
	ScheduleStatus.COMPLETED.value,
	ScheduleStatus.CANCELLED.value,
	ScheduleStatus.MISSED.value,
	ScheduleStatus.REJECTED_BY_ADMIN.value
)

class ReviewDecision(str, Enum):
	APPROVE = "approve"
	REJECT = "reject"

class ScheduleCreateRequest(BaseModel):
	# Optional so missing fields reach the workflow and get its error message
	child: str | None = None
	vaccine: str | None = None
	region: str | None = None
	date: str | None = None

class ScheduleReviewRequest(BaseModel):
	decision: str | None = None
