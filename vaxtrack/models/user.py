# models/user.py

from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
	PARENT = "parent"
	DOCTOR = "doctor"
	ADMIN = "admin"

class Gender(str, Enum):
	MALE = "male"
	FEMALE = "female"
	OTHER = "other"

class SignupRequest(BaseModel):
	name: str | None = None
	email: str | None = None
	password: str | None = None

class SigninRequest(BaseModel):
	email: str | None = None
	password: str | None = None

class DoctorCreateRequest(BaseModel):
	name: str | None = None
	email: str | None = None
	password: str | None = None

class ChildCreateRequest(BaseModel):
	name: str | None = None
	dob: str | None = None
	gender: str | None = None
