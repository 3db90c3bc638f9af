# data/utils.py
"""
Utility functions for MongoDB documents.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


def to_object_id(value: Any) -> ObjectId | None:
	"""Parses an id coming from a request. Returns None when it is not a valid ObjectId."""
	if isinstance(value, ObjectId):
		return value
	if not isinstance(value, str):
		return None
	try:
		return ObjectId(value)
	except (InvalidId, TypeError):
		return None

def serialize(value: Any) -> Any:
	"""Makes a document JSON-friendly: ObjectIds become strings, nested values are walked."""
	if isinstance(value, ObjectId):
		return str(value)
	if isinstance(value, dict):
		return {k: serialize(v) for k, v in value.items()}
	if isinstance(value, (list, tuple)):
		return [serialize(v) for v in value]
	if isinstance(value, datetime):
		return value.isoformat()
	return value

def project(doc: dict[str, Any] | None, fields: tuple[str, ...]) -> dict[str, Any] | None:
	"""Keeps `_id` and the given fields of a referenced document, like a populate projection."""
	if doc is None:
		return None
	return {"_id": doc["_id"], **{f: doc.get(f) for f in fields}}
