# main.py
# Run with: uvicorn vaxtrack.main:app  (or `python start.py`)

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from vaxtrack.utils.logger import logger, setup_logging

# Needs to be called before any logs are sent
setup_logging()

# Load environment variables from .env file
if load_dotenv():
	logger(tag="env").info("Environment variables loaded from .env file")

# Import project modules after loading environment variables
from vaxtrack.api.routes import admin as admin_route
from vaxtrack.api.routes import auth as auth_route
from vaxtrack.api.routes import doctor as doctor_route
from vaxtrack.api.routes import parent as parent_route
from vaxtrack.api.routes import public as public_route
from vaxtrack.api.routes import system as system_route
from vaxtrack.config.settings import settings
from vaxtrack.core.auth import ensure_admin
from vaxtrack.core.errors import VaxTrackError
from vaxtrack.core.state import AppState, get_state
from vaxtrack.data.connection import close_connection, ensure_indexes

logging.getLogger().setLevel(settings.LOG_LEVEL)


def startup_event(state: AppState):
	"""Initialize application on startup"""
	logger(tag="startup").info("Starting VaxTrack API...")

	try:
		ensure_indexes()
		ensure_admin(settings.ADMIN_NAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
	except PyMongoError as e:
		logger(tag="startup").error(f"Database initialisation failed: {e}")
		raise

	if settings.SWEEPER_ENABLED:
		state.sweeper.start()
		logger(tag="startup").info(f"Missed-vaccination sweeper scheduled daily at {settings.SWEEP_HOUR:02d}:00 UTC")
	else:
		logger(tag="startup").warning("Missed-vaccination sweeper disabled")

	logger(tag="startup").info("VaxTrack API startup complete")

async def shutdown_event(state: AppState):
	"""Cleanup on shutdown"""
	logger(tag="shutdown").info("Shutting down VaxTrack API...")
	await state.sweeper.stop()
	close_connection()

@asynccontextmanager
async def lifespan(app: FastAPI):
	state = get_state()
	startup_event(state)
	yield
	await shutdown_event(state)

# Initialize FastAPI app
app = FastAPI(
	lifespan=lifespan,
	title="VaxTrack",
	description="Child vaccination scheduling for parents, doctors and administrators",
	version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.CORS_ORIGINS,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

# Every error leaves the API as {"msg": "..."}
@app.exception_handler(VaxTrackError)
async def vaxtrack_error_handler(request: Request, exc: VaxTrackError):
	if exc.status_code >= 500:
		logger(tag="error").error(f"{request.method} {request.url.path} failed: {exc.msg}")
	else:
		logger(tag="error").info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.msg}")
	return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	errors = exc.errors()
	detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
	location = ".".join(str(p) for p in errors[0].get("loc", ())[1:]) if errors else ""
	msg = f"Invalid request: {location} {detail}".strip() if location else f"Invalid request: {detail}"
	return JSONResponse(status_code=400, content={"msg": msg})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
	return JSONResponse(status_code=exc.status_code, content={"msg": str(exc.detail)}, headers=exc.headers)

@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
	logger(tag="error").error(f"{request.method} {request.url.path} database error: {exc}")
	return JSONResponse(status_code=500, content={"msg": "Server error"})

# Include routers
app.include_router(auth_route.router)
app.include_router(parent_route.router)
app.include_router(doctor_route.router)
app.include_router(admin_route.router)
app.include_router(public_route.router)
app.include_router(system_route.router)

@app.get("/")
async def root():
	return {"msg": "API is running..."}

@app.get("/api/info")
async def get_api_info():
	"""Get API information and capabilities, lists all paths available in the api."""
	return {
		"name": "VaxTrack",
		"version": "1.0.0",
		"description": "Child vaccination scheduling for parents, doctors and administrators",
		"features": [
			"Parent, doctor and admin roles",
			"Vaccination request review workflow",
			"Reference data management with deletion guards",
			"Daily sweep of missed appointments"
		],
		"endpoints": [route.path for route in app.routes if isinstance(route, APIRoute)]
	}
