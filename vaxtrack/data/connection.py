# data/connection.py

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from vaxtrack.config.settings import settings
from vaxtrack.utils.logger import logger

USERS_COLLECTION = "users"
CHILDREN_COLLECTION = "children"
VACCINES_COLLECTION = "vaccines"
REGIONS_COLLECTION = "regions"
VENUES_COLLECTION = "venues"
SCHEDULES_COLLECTION = "vaccination_schedules"

ALL_COLLECTIONS = [
	USERS_COLLECTION,
	CHILDREN_COLLECTION,
	VACCINES_COLLECTION,
	REGIONS_COLLECTION,
	VENUES_COLLECTION,
	SCHEDULES_COLLECTION
]

_mongo_client: MongoClient | None = None

def set_client(client: MongoClient | None) -> None:
	"""Replaces the shared client, e.g. with an in-memory one in tests."""
	global _mongo_client
	_mongo_client = client

def get_database(db_name: str | None = None) -> Database:
	"""Gets the database instance, managing a single connection."""
	global _mongo_client
	if _mongo_client is None:
		try:
			logger().info("Initializing MongoDB connection.")
			_mongo_client = MongoClient(settings.MONGO_URL)
		except Exception as e:
			logger().error(f"Failed to connect to MongoDB: {e}")
			raise
	return _mongo_client[db_name or settings.DB_NAME]

def close_connection():
	"""Closes the MongoDB connection."""
	global _mongo_client
	if _mongo_client:
		logger().info("Closing MongoDB connection.")
		_mongo_client.close()
		_mongo_client = None

def get_collection(name: str) -> Collection:
	"""Retrieves a MongoDB collection by name. Mongo creates it on first write."""
	return get_database().get_collection(name)

def ensure_indexes() -> None:
	"""Creates the unique and lookup indexes every collection relies on."""
	get_collection(USERS_COLLECTION).create_index([("email", ASCENDING)], unique=True)
	get_collection(VACCINES_COLLECTION).create_index([("name", ASCENDING)], unique=True)
	get_collection(REGIONS_COLLECTION).create_index([("name", ASCENDING)], unique=True)
	get_collection(VENUES_COLLECTION).create_index([("name", ASCENDING)], unique=True)
	get_collection(CHILDREN_COLLECTION).create_index([("parent_id", ASCENDING)])
	schedules = get_collection(SCHEDULES_COLLECTION)
	for field in ("parent", "doctor", "status"):
		schedules.create_index([(field, ASCENDING)])
	logger(tag="indexes").info("Indexes ensured")
