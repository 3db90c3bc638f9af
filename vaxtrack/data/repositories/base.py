# data/repositories/base.py

from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument

from vaxtrack.data.connection import get_collection
from vaxtrack.utils.clock import utcnow


def insert_document(collection_name: str, doc: dict[str, Any]) -> dict[str, Any]:
	"""Inserts a document with creation timestamps and returns it with its `_id`."""
	now = utcnow()
	doc.update({"created_at": now, "updated_at": now})
	result = get_collection(collection_name).insert_one(doc)
	doc["_id"] = result.inserted_id
	return doc

def update_document(
	collection_name: str,
	doc_id: ObjectId,
	updates: dict[str, Any],
	/,
	match: dict[str, Any] | None = None
) -> dict[str, Any] | None:
	"""
	Sets fields on one document and returns the updated version.

	`match` adds conditions to the filter, so the write only happens if the document
	still looks the way the caller read it. Returns None when nothing matched.
	"""
	updates.pop("created_at", None)
	updates["updated_at"] = utcnow()
	return get_collection(collection_name).find_one_and_update(
		{"_id": doc_id, **(match or {})},
		{"$set": updates},
		return_document=ReturnDocument.AFTER
	)

def delete_document(collection_name: str, doc_id: ObjectId) -> bool:
	return get_collection(collection_name).delete_one({"_id": doc_id}).deleted_count > 0
