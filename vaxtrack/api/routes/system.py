# api/routes/system.py

import time

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from vaxtrack.config.settings import settings
from vaxtrack.core.state import AppState, get_state
from vaxtrack.data.connection import ALL_COLLECTIONS, get_collection, get_database
from vaxtrack.utils.logger import logger

router = APIRouter(prefix="/system", tags=["System"])

@router.get("/health")
async def health_check(state: AppState = Depends(get_state)):
	"""Health check endpoint"""
	try:
		get_database().command("ping")
		database = "operational"
	except PyMongoError as e:
		logger(tag="health").error(f"Database ping failed: {e}")
		database = "unreachable"
	return {
		"status": "healthy" if database == "operational" else "degraded",
		"timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
		"components": {
			"database": database,
			"sweeper": "enabled" if settings.SWEEPER_ENABLED else "disabled",
			"sweep_hour_utc": state.sweeper.hour
		}
	}

@router.get("/database")
async def get_database_info():
	"""List meta information about all collections in the database."""
	result = {}
	for name in ALL_COLLECTIONS:
		collection = get_collection(name)
		indexes = []
		for idx in collection.list_indexes():
			indexes.append({
				"name": idx["name"],
				"keys": list(idx["key"].items())
			})

		result[name] = {
			"document_count": collection.count_documents({}),
			"indexes": indexes
		}

	return {
		"timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
		"collections": result
	}
