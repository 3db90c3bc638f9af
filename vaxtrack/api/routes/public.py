# api/routes/public.py

from fastapi import APIRouter

from vaxtrack.core.reference import list_vaccines
from vaxtrack.data.repositories.region import get_regions
from vaxtrack.data.utils import serialize

router = APIRouter(tags=["Public"])

@router.get("/vaccines")
async def vaccines():
	"""Vaccine options for the scheduling form."""
	return serialize(list_vaccines())

@router.get("/regions")
async def regions():
	"""Region options for the scheduling form, names only."""
	return serialize([{"_id": r["_id"], "name": r["name"]} for r in get_regions()])
