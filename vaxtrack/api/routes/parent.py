# api/routes/parent.py

from typing import Any

from fastapi import APIRouter, Depends

from vaxtrack.core.auth import require
from vaxtrack.core.children import add_child as register_child
from vaxtrack.core.dashboard import parent_stats
from vaxtrack.core.permissions import Operation
from vaxtrack.core.state import get_clock, get_workflow
from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.data.repositories.child import get_children
from vaxtrack.data.utils import serialize
from vaxtrack.models.schedule import ScheduleCreateRequest
from vaxtrack.models.user import ChildCreateRequest
from vaxtrack.utils.clock import Clock
from vaxtrack.utils.logger import logger

router = APIRouter(prefix="/parent", tags=["Parent"])

@router.post("/add-child", status_code=201)
async def add_child(
	req: ChildCreateRequest,
	user: dict[str, Any] = Depends(require(Operation.ADD_CHILD)),
	clock: Clock = Depends(get_clock)
):
	logger().info(f"POST /parent/add-child parent={user['_id']}")
	child = register_child(user["_id"], req.name, req.dob, req.gender, clock)
	return serialize(child)

@router.get("/children")
async def list_children(user: dict[str, Any] = Depends(require(Operation.LIST_CHILDREN))):
	logger().info(f"GET /parent/children parent={user['_id']}")
	return serialize(get_children(user["_id"]))

@router.post("/schedule", status_code=201)
async def schedule_vaccination(
	req: ScheduleCreateRequest,
	user: dict[str, Any] = Depends(require(Operation.REQUEST_SCHEDULE)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"POST /parent/schedule parent={user['_id']} child={req.child} date={req.date}")
	schedule = workflow.request_schedule(user["_id"], req.child, req.vaccine, req.region, req.date)
	return serialize(schedule)

@router.get("/vaccination")
async def list_vaccinations(
	user: dict[str, Any] = Depends(require(Operation.LIST_OWN_SCHEDULES)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"GET /parent/vaccination parent={user['_id']}")
	return serialize(workflow.parent_schedules(user["_id"]))

@router.delete("/cancel-vaccination/{schedule_id}")
async def cancel_vaccination(
	schedule_id: str,
	user: dict[str, Any] = Depends(require(Operation.CANCEL_SCHEDULE)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"DELETE /parent/cancel-vaccination/{schedule_id} parent={user['_id']}")
	workflow.cancel_schedule(user["_id"], schedule_id)
	return {"msg": "Vaccination schedule cancelled successfully."}

@router.get("/dashboard-stats")
async def dashboard_stats(
	user: dict[str, Any] = Depends(require(Operation.PARENT_DASHBOARD)),
	clock: Clock = Depends(get_clock)
):
	return parent_stats(user["_id"], clock)
