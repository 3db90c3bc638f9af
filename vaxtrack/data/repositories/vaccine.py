# data/repositories/vaccine.py
"""
Vaccine catalogue.

## Fields
	_id: index
	name: Unique vaccine name
	description: Optional free text
	doses: Number of doses, at least 1
	min_age_months: Youngest recommended age
	max_age_months: Oldest recommended age, optional
"""

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING

from vaxtrack.data.connection import VACCINES_COLLECTION, get_collection
from vaxtrack.data.repositories.base import (delete_document, insert_document,
                                             update_document)


def create_vaccine(
	vaccine_data: dict[str, Any],
	/, *,
	collection_name: str = VACCINES_COLLECTION
) -> dict[str, Any]:
	return insert_document(collection_name, dict(vaccine_data))

def get_vaccine_by_id(
	vaccine_id: ObjectId,
	/, *,
	collection_name: str = VACCINES_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": vaccine_id})

def get_vaccine_by_name(
	name: str,
	/, *,
	collection_name: str = VACCINES_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"name": name})

def get_vaccines(*, collection_name: str = VACCINES_COLLECTION) -> list[dict[str, Any]]:
	return list(get_collection(collection_name).find().sort("name", ASCENDING))

def count_vaccines(*, collection_name: str = VACCINES_COLLECTION) -> int:
	return get_collection(collection_name).count_documents({})

def update_vaccine(
	vaccine_id: ObjectId,
	updates: dict[str, Any],
	/, *,
	collection_name: str = VACCINES_COLLECTION
) -> dict[str, Any] | None:
	return update_document(collection_name, vaccine_id, updates)

def delete_vaccine(
	vaccine_id: ObjectId,
	/, *,
	collection_name: str = VACCINES_COLLECTION
) -> bool:
	return delete_document(collection_name, vaccine_id)
