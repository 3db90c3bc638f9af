# data/repositories/account.py
"""
User accounts. Every account has exactly one role: parent, doctor or admin.

## Fields
	_id: index
	name: Display name
	email: Unique login
	password: bcrypt hash, never returned by the listing functions
	role: parent | doctor | admin
	created_at / updated_at: timestamps
"""

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from vaxtrack.data.connection import USERS_COLLECTION, get_collection
from vaxtrack.data.repositories.base import delete_document, insert_document
from vaxtrack.utils.logger import logger

_PUBLIC_FIELDS = {"password": 0}

def create_user(
	name: str,
	email: str,
	password_hash: str,
	role: str,
	*,
	collection_name: str = USERS_COLLECTION
) -> dict[str, Any]:
	"""Creates a user and returns it without the password hash."""
	try:
		user = insert_document(collection_name, {
			"name": name,
			"email": email,
			"password": password_hash,
			"role": role
		})
	except DuplicateKeyError:
		logger().warning(f"Account with email '{email}' already exists")
		raise
	logger().info(f"Created {role} account {user['_id']}")
	user.pop("password", None)
	return user

def get_user_by_id(
	user_id: ObjectId,
	/, *,
	collection_name: str = USERS_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": user_id}, _PUBLIC_FIELDS)

def get_user_by_email(
	email: str,
	/, *,
	collection_name: str = USERS_COLLECTION
) -> dict[str, Any] | None:
	"""Includes the password hash, only for sign-in."""
	return get_collection(collection_name).find_one({"email": email})

def get_doctor(
	user_id: ObjectId,
	/, *,
	collection_name: str = USERS_COLLECTION
) -> dict[str, Any] | None:
	return get_collection(collection_name).find_one({"_id": user_id, "role": "doctor"}, _PUBLIC_FIELDS)

def get_users(
	role: str | None = None,
	*,
	collection_name: str = USERS_COLLECTION
) -> list[dict[str, Any]]:
	query = {"role": role} if role else {}
	cursor = get_collection(collection_name).find(query, _PUBLIC_FIELDS).sort("name", ASCENDING)
	return list(cursor)

def count_users(
	role: str | None = None,
	*,
	collection_name: str = USERS_COLLECTION
) -> int:
	return get_collection(collection_name).count_documents({"role": role} if role else {})

def delete_user(
	user_id: ObjectId,
	/, *,
	collection_name: str = USERS_COLLECTION
) -> bool:
	return delete_document(collection_name, user_id)
