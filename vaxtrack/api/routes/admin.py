# api/routes/admin.py

from typing import Any

from fastapi import APIRouter, Depends

from vaxtrack.core import reference
from vaxtrack.core.auth import require
from vaxtrack.core.dashboard import admin_stats
from vaxtrack.core.errors import ServerError
from vaxtrack.core.permissions import Operation
from vaxtrack.core.state import AppState, get_state, get_workflow
from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.data.utils import serialize
from vaxtrack.models.reference import RegionRequest, VaccineRequest, VenueRequest
from vaxtrack.models.schedule import ScheduleReviewRequest
from vaxtrack.models.user import DoctorCreateRequest
from vaxtrack.utils.logger import logger

router = APIRouter(prefix="/admin", tags=["Admin"])

_reference_admin = require(Operation.MANAGE_REFERENCE_DATA)
_user_admin = require(Operation.MANAGE_USERS)

# ─────────────────────────────────────────────────────────── schedules

@router.get("/vaccinations/pending")
async def pending_vaccinations(
	_: dict[str, Any] = Depends(require(Operation.LIST_PENDING_SCHEDULES)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info("GET /admin/vaccinations/pending")
	schedules = workflow.pending_schedules()
	logger().info(f"Retrieved {len(schedules)} pending schedules")
	return serialize(schedules)

@router.get("/vaccinations/all-details")
async def all_vaccinations(
	_: dict[str, Any] = Depends(require(Operation.LIST_ALL_SCHEDULES)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info("GET /admin/vaccinations/all-details")
	return serialize(workflow.all_schedules())

@router.put("/vaccination/{schedule_id}/review")
async def review_vaccination(
	schedule_id: str,
	req: ScheduleReviewRequest,
	user: dict[str, Any] = Depends(require(Operation.REVIEW_SCHEDULE)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"PUT /admin/vaccination/{schedule_id}/review decision={req.decision} admin={user['_id']}")
	schedule = workflow.review_schedule(schedule_id, req.decision)
	verb = "approved" if schedule["status"] == "scheduled" else "rejected"
	return {"msg": f"Vaccination schedule {verb} successfully.", "schedule": serialize(schedule)}

@router.delete("/vaccination/{schedule_id}")
async def delete_vaccination(
	schedule_id: str,
	_: dict[str, Any] = Depends(require(Operation.DELETE_SCHEDULE)),
	workflow: ScheduleWorkflow = Depends(get_workflow)
):
	logger().info(f"DELETE /admin/vaccination/{schedule_id}")
	workflow.delete_schedule(schedule_id)
	return {"msg": "Vaccination schedule deleted successfully."}

@router.post("/sweep")
async def run_sweep(
	_: dict[str, Any] = Depends(require(Operation.RUN_SWEEP)),
	state: AppState = Depends(get_state)
):
	logger(tag="sweep").info("POST /admin/sweep")
	modified = state.sweeper.run_once()
	if modified is None:
		raise ServerError("Error updating missed vaccination statuses.")
	return {"msg": f"Marked {modified} vaccination schedules as missed.", "modified": modified}

# ─────────────────────────────────────────────────────────────── users

@router.get("/users")
async def list_users(role: str | None = None, _: dict[str, Any] = Depends(_user_admin)):
	logger().info(f"GET /admin/users role={role}")
	return serialize(reference.list_users(role))

@router.delete("/user/{user_id}")
async def delete_user(user_id: str, user: dict[str, Any] = Depends(_user_admin)):
	logger().info(f"DELETE /admin/user/{user_id}")
	reference.delete_user(user["_id"], user_id)
	return {"msg": "User deleted successfully."}

@router.post("/doctor", status_code=201)
async def create_doctor(req: DoctorCreateRequest, _: dict[str, Any] = Depends(_user_admin)):
	logger().info(f"POST /admin/doctor email={req.email}")
	return serialize(reference.create_doctor(req.name, req.email, req.password))

# ──────────────────────────────────────────────────────────── vaccines

@router.post("/vaccine", status_code=201)
async def create_vaccine(req: VaccineRequest, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"POST /admin/vaccine name={req.name}")
	vaccine = reference.create_vaccine(
		req.name, req.description, req.doses, req.min_age_months, req.max_age_months
	)
	return serialize(vaccine)

@router.put("/vaccine/{vaccine_id}")
async def update_vaccine(
	vaccine_id: str,
	req: VaccineRequest,
	_: dict[str, Any] = Depends(_reference_admin)
):
	logger().info(f"PUT /admin/vaccine/{vaccine_id}")
	# Only the fields the client sent; an explicit null clears the field
	vaccine = reference.update_vaccine(vaccine_id, req.model_dump(exclude_unset=True))
	return serialize(vaccine)

@router.delete("/vaccine/{vaccine_id}")
async def delete_vaccine(vaccine_id: str, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"DELETE /admin/vaccine/{vaccine_id}")
	reference.delete_vaccine(vaccine_id)
	return {"msg": "Vaccine deleted successfully."}

# ────────────────────────────────────────────────────────────── venues

@router.get("/venues-list")
async def list_venues(_: dict[str, Any] = Depends(_reference_admin)):
	return serialize(reference.list_venues())

@router.post("/venue", status_code=201)
async def create_venue(req: VenueRequest, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"POST /admin/venue name={req.name}")
	return serialize(reference.create_venue(req.name, req.contact))

@router.put("/venue/{venue_id}")
async def update_venue(venue_id: str, req: VenueRequest, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"PUT /admin/venue/{venue_id}")
	return serialize(reference.update_venue(venue_id, req.name, req.contact))

@router.delete("/venue/{venue_id}")
async def delete_venue(venue_id: str, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"DELETE /admin/venue/{venue_id}")
	reference.delete_venue(venue_id)
	return {"msg": "Venue deleted successfully."}

# ───────────────────────────────────────────────────────────── regions

@router.get("/regions")
async def list_regions(_: dict[str, Any] = Depends(_reference_admin)):
	return serialize(reference.list_regions())

@router.post("/region", status_code=201)
async def create_region(req: RegionRequest, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"POST /admin/region name={req.region_name}")
	return serialize(reference.create_region(req.region_name, req.doctor, req.venue))

@router.put("/region/{region_id}")
async def update_region(region_id: str, req: RegionRequest, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"PUT /admin/region/{region_id}")
	return serialize(reference.update_region(region_id, req.region_name, req.doctor, req.venue))

@router.delete("/region/{region_id}")
async def delete_region(region_id: str, _: dict[str, Any] = Depends(_reference_admin)):
	logger().info(f"DELETE /admin/region/{region_id}")
	reference.delete_region(region_id)
	return {"msg": "Region deleted successfully."}

# ──────────────────────────────────────────────────────────── dashboard

@router.get("/dashboard-stats")
async def dashboard_stats(_: dict[str, Any] = Depends(require(Operation.ADMIN_DASHBOARD))):
	return admin_stats()
