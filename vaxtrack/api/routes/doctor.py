# api/routes/doctor.py

from typing import Any

from fastapi import APIRouter, Depends

from vaxtrack.core.auth import require
from vaxtrack.core.dashboard import doctor_stats
from vaxtrack.core.permissions import Operation
from vaxtrack.core.state import get_clock, get_workflow
from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.data.utils import serialize
from vaxtrack.utils.clock import Clock
from vaxtrack.utils.logger import logger

router = APIRouter(prefix="/doctor", tags=["Doctor"])

@router.get("/vaccinations")
async def list_vaccinations(
	user: dict[str, Any] = Depends(require(Operation.LIST_DOCTOR_SCHEDULES)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"GET /doctor/vaccinations doctor={user['_id']}")
	schedules = workflow.doctor_schedules(user["_id"])
	logger().info(f"Retrieved {len(schedules)} schedules")
	return serialize(schedules)

@router.put("/complete-vaccination/{schedule_id}")
async def complete_vaccination(
	schedule_id: str,
	user: dict[str, Any] = Depends(require(Operation.COMPLETE_SCHEDULE)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"PUT /doctor/complete-vaccination/{schedule_id} doctor={user['_id']}")
	workflow.complete_schedule(user["_id"], schedule_id)
	return {"msg": "Vaccination completed successfully."}

@router.get("/dashboard-stats")
async def dashboard_stats(
	user: dict[str, Any] = Depends(require(Operation.DOCTOR_DASHBOARD)),
	clock: Clock = Depends(get_clock)
):
	return doctor_stats(user["_id"], clock)
