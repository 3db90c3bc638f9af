#!/usr/bin/env python3
"""
VaxTrack - Startup Script
Checks the environment and starts the API with uvicorn
"""

import os
import sys

import uvicorn
from dotenv import load_dotenv


def main():
	"""Start the VaxTrack API"""
	print("💉 VaxTrack API")
	print("=" * 50)

	if not os.path.exists(os.path.join("vaxtrack", "main.py")):
		print("❌ Error: vaxtrack/main.py not found!")
		print("Please run this script from the project root directory.")
		sys.exit(1)

	load_dotenv()

	if not os.getenv("MONGO_URL"):
		print("⚠️  Warning: MONGO_URL not set, falling back to mongodb://127.0.0.1:27017/")
	else:
		print("✅ MongoDB connection string found")

	if not os.getenv("JWT_SECRET"):
		print("⚠️  Warning: JWT_SECRET not set, tokens are signed with the development secret.")

	if not (os.getenv("ADMIN_EMAIL") and os.getenv("ADMIN_PASSWORD")):
		print("ℹ️  ADMIN_EMAIL/ADMIN_PASSWORD not set, no bootstrap admin will be created.")

	port = int(os.getenv("PORT", "5000"))
	print(f"\n📱 Starting VaxTrack API on http://localhost:{port}")
	print(f"📚 API documentation at: http://localhost:{port}/docs")
	print(f"🔍 Health check at: http://localhost:{port}/system/health")
	print("\nPress Ctrl+C to stop the server")
	print("=" * 50)

	uvicorn.run(
		"vaxtrack.main:app",
		host="0.0.0.0",
		port=port,
		log_level="info",
		reload=os.getenv("ENV", "development") == "development"
	)

if __name__ == "__main__":
	main()
