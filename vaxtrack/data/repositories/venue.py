# data/repositories/venue.py
"""
Venues where vaccinations take place.

## Fields
	_id: index
	name: Unique venue name
	contact: Address or phone number
"""

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING

from vaxtrack.data.connection import VENUES_COLLECTION, get_collection
from vaxtrack.data.repositories.base import (delete_document, insert_document,
                                             update_document)


def create_venue(
	name: str,
	contact: str,
	*,
	collection_name: str = VENUES_COLLECTION
) -> dict[str, Any]:
	return insert_document(collection_name, {"name": name, "contact": contact})

def get_venue_by_id(
	venue_id: ObjectId,
	/, *,
	collection_name: str = VENUES_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": venue_id})

def get_venue_by_name(
	name: str,
	/, *,
	collection_name: str = VENUES_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"name": name})

def get_venues(*, collection_name: str = VENUES_COLLECTION) -> list[dict[str, Any]]:
	return list(get_collection(collection_name).find().sort("name", ASCENDING))

def count_venues(*, collection_name: str = VENUES_COLLECTION) -> int:
	return get_collection(collection_name).count_documents({})

def update_venue(
	venue_id: ObjectId,
	updates: dict[str, Any],
	/, *,
	collection_name: str = VENUES_COLLECTION
) -> dict[str, Any] | None:
	return update_document(collection_name, venue_id, updates)

def delete_venue(
	venue_id: ObjectId,
	/, *,
	collection_name: str = VENUES_COLLECTION
) -> bool:
	return delete_document(collection_name, venue_id)
