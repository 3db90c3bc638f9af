# core/auth.py

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt
from fastapi import Request
from passlib.context import CryptContext

from vaxtrack.config.settings import settings
from vaxtrack.core.errors import Unauthorized
from vaxtrack.core.permissions import Operation, authorize
from vaxtrack.data.repositories.account import (create_user, get_user_by_email,
                                              get_user_by_id)
from vaxtrack.data.utils import to_object_id
from vaxtrack.models.user import Role
from vaxtrack.utils.logger import logger

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
	return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
	return pwd_context.verify(password, password_hash)

def create_token(user_id: str, role: str) -> str:
	now = datetime.now(timezone.utc)
	payload = {
		"sub": user_id,
		"role": role,
		"iat": now,
		"exp": now + timedelta(days=settings.JWT_EXPIRE_DAYS),
	}
	return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_token(token: str) -> dict[str, Any]:
	try:
		return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
	except jwt.ExpiredSignatureError:
		raise Unauthorized("Token expired")
	except jwt.InvalidTokenError:
		raise Unauthorized("Couldn't authorize")

def _read_token(request: Request) -> str | None:
	header = request.headers.get("Authorization", "")
	if header.startswith("Bearer "):
		token = header.split(" ", 1)[1].strip()
		if token:
			return token
	return request.cookies.get("token")

def get_current_user(request: Request) -> dict[str, Any]:
	"""Resolves the signed-in user from the bearer token or the `token` cookie."""
	token = _read_token(request)
	if not token:
		raise Unauthorized("Couldn't authorize, no token found.")
	payload = decode_token(token)
	user_id = to_object_id(payload.get("sub"))
	user = get_user_by_id(user_id) if user_id else None
	if not user:
		raise Unauthorized("User not found")
	return user

def require(operation: Operation) -> Callable[[Request], dict[str, Any]]:
	"""Route dependency: the current user, once their role is cleared for `operation`."""
	def dependency(request: Request) -> dict[str, Any]:
		user = get_current_user(request)
		authorize(user.get("role"), operation)
		logger(tag="auth").debug(f"{user['role']} {user['_id']} cleared for {operation.value}")
		return user
	return dependency

def ensure_admin(name: str, email: str | None, password: str | None) -> bool:
	"""Creates the bootstrap admin account if it is configured and missing. Returns True if created."""
	if not email or not password:
		return False
	email = email.strip().lower()
	if get_user_by_email(email):
		return False
	create_user(name, email, hash_password(password), Role.ADMIN.value)
	logger(tag="bootstrap").info(f"Created admin account {email}")
	return True
