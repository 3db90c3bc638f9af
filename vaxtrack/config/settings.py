# config/settings.py

import os


def _env_bool(name: str, default: bool) -> bool:
	value = os.getenv(name)
	if value is None:
		return default
	return value.strip().lower() in ("1", "true", "yes", "on")

class Settings:
	# Database
	MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://127.0.0.1:27017/")
	DB_NAME: str = os.getenv("DB_NAME", "vaxtrack")

	# Auth
	JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
	JWT_ALGORITHM: str = "HS256"
	JWT_EXPIRE_DAYS: int = int(os.getenv("JWT_EXPIRE_DAYS", "7"))
	COOKIE_SECURE: bool = os.getenv("ENV", "development") == "production"

	# Bootstrap admin, created on startup when both are set
	ADMIN_NAME: str = os.getenv("ADMIN_NAME", "Administrator")
	ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL")
	ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")

	# Missed-appointment sweeper
	SWEEPER_ENABLED: bool = _env_bool("SWEEPER_ENABLED", True)
	SWEEP_HOUR: int = int(os.getenv("SWEEP_HOUR", "1"))

	# HTTP
	CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
	LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Create singleton instance
settings = Settings()
