# api/routes/auth.py

from typing import Any

from fastapi import APIRouter, Depends, Response
from pymongo.errors import DuplicateKeyError

from vaxtrack.config.settings import settings
from vaxtrack.core.auth import (create_token, hash_password, require,
                                verify_password)
from vaxtrack.core.errors import Unauthorized, ValidationError
from vaxtrack.core.permissions import Operation
from vaxtrack.data.repositories.account import create_user, get_user_by_email
from vaxtrack.models.user import Role, SigninRequest, SignupRequest
from vaxtrack.utils.logger import logger

router = APIRouter(prefix="/auth", tags=["Auth"])

_COOKIE_MAX_AGE = settings.JWT_EXPIRE_DAYS * 24 * 60 * 60

def _public_user(user: dict[str, Any]) -> dict[str, Any]:
	return {
		"id": str(user["_id"]),
		"name": user["name"],
		"email": user["email"],
		"role": user["role"],
	}

@router.post("/signup", status_code=201)
async def signup(req: SignupRequest):
	"""Registers a parent account. Doctors are created by admins."""
	name = (req.name or "").strip()
	email = (req.email or "").strip().lower()
	if not name or not email or not req.password:
		raise ValidationError("Please provide name, email and password.")
	logger().info(f"POST /auth/signup email={email}")
	if get_user_by_email(email):
		raise ValidationError("User already exists")
	try:
		user = create_user(name, email, hash_password(req.password), Role.PARENT.value)
	except DuplicateKeyError:
		raise ValidationError("User already exists")
	token = create_token(str(user["_id"]), user["role"])
	return {"token": token, "user": _public_user(user)}

@router.post("/signin")
async def signin(req: SigninRequest, response: Response):
	if not req.email or not req.password:
		raise ValidationError("Please provide email and password.")
	email = req.email.strip().lower()
	logger().info(f"POST /auth/signin email={email}")
	user = get_user_by_email(email)
	if not user or not verify_password(req.password, user["password"]):
		logger().warning(f"Failed sign-in for {email}")
		raise Unauthorized("Invalid Credentials")
	token = create_token(str(user["_id"]), user["role"])
	response.set_cookie(
		"token",
		token,
		httponly=True,
		secure=settings.COOKIE_SECURE,
		samesite="strict",
		max_age=_COOKIE_MAX_AGE
	)
	return {"token": token, "user": _public_user(user)}

@router.post("/logout")
async def logout(response: Response):
	response.delete_cookie("token", httponly=True, secure=settings.COOKIE_SECURE, samesite="strict")
	return {"msg": "Logged out successfully"}

@router.get("/profile")
async def profile(user: dict[str, Any] = Depends(require(Operation.VIEW_PROFILE))):
	return _public_user(user)
