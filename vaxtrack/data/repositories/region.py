# data/repositories/region.py
"""
Regions bind one doctor and one venue as the place a schedule is fulfilled.

## Fields
	_id: index
	name: Unique region (village) name
	doctor: users._id of an account with role doctor
	venue: venues._id
"""

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING

from vaxtrack.data.connection import REGIONS_COLLECTION, get_collection
from vaxtrack.data.repositories.base import (delete_document, insert_document,
                                             update_document)


def create_region(
	name: str,
	doctor_id: ObjectId,
	venue_id: ObjectId,
	*,
	collection_name: str = REGIONS_COLLECTION
) -> dict[str, Any]:
	return insert_document(collection_name, {"name": name, "doctor": doctor_id, "venue": venue_id})

def get_region_by_id(
	region_id: ObjectId,
	/, *,
	collection_name: str = REGIONS_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": region_id})

def get_region_by_name(
	name: str,
	/, *,
	collection_name: str = REGIONS_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"name": name})

def find_region_using_venue(
	venue_id: ObjectId,
	/, *,
	collection_name: str = REGIONS_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"venue": venue_id})

def get_regions(*, collection_name: str = REGIONS_COLLECTION) -> list[dict[str, Any]]:
	return list(get_collection(collection_name).find().sort("name", ASCENDING))

def count_regions(*, collection_name: str = REGIONS_COLLECTION) -> int:
	return get_collection(collection_name).count_documents({})

def update_region(
	region_id: ObjectId,
	updates: dict[str, Any],
	/, *,
	collection_name: str = REGIONS_COLLECTION
) -> dict[str, Any] | None:
	return update_document(collection_name, region_id, updates)

def delete_region(
	region_id: ObjectId,
	/, *,
	collection_name: str = REGIONS_COLLECTION
) -> bool:
	return delete_document(collection_name, region_id)
