# data/repositories/child.py
"""
Children registered by parents.

## Fields
	_id: index
	name: The child's name
	dob: Date of birth, naive UTC midnight
	gender: male | female | other
	parent_id: The owning parent account
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING

from vaxtrack.data.connection import CHILDREN_COLLECTION, get_collection
from vaxtrack.data.repositories.base import insert_document


def create_child(
	parent_id: ObjectId,
	name: str,
	dob: datetime,
	gender: str,
	*,
	collection_name: str = CHILDREN_COLLECTION
) -> dict[str, Any]:
	return insert_document(collection_name, {
		"name": name,
		"dob": dob,
		"gender": gender,
		"parent_id": parent_id
	})

def get_child_for_parent(
	child_id: ObjectId,
	parent_id: ObjectId,
	*,
	collection_name: str = CHILDREN_COLLECTION
) -> dict[str, Any] | None:
	"""Looks a child up scoped to its owner, so another parent's child reads as missing."""
	return get_collection(collection_name).find_one({"_id": child_id, "parent_id": parent_id})

def get_child_by_id(
	child_id: ObjectId,
	/, *,
	collection_name: str = CHILDREN_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": child_id})

def get_children(
	parent_id: ObjectId,
	/, *,
	collection_name: str = CHILDREN_COLLECTION
) -> list[dict[str, Any]]:
	return list(get_collection(collection_name).find({"parent_id": parent_id}).sort("name", ASCENDING))

def count_children(
	parent_id: ObjectId,
	/, *,
	collection_name: str = CHILDREN_COLLECTION
) -> int:
	return get_collection(collection_name).count_documents({"parent_id": parent_id})
