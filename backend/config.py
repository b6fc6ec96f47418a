import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=(Path(__file__).parent / ".env"))

# CORS settings
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Schedule engine: "topological" (default) or "declaration" (source-compatible ordering)
SCHEDULE_ORDERING = os.getenv("SCHEDULE_ORDERING", "topological").strip().lower()

# Calendar days advanced per nominal duration unit (durations are stored in weeks)
SCHEDULE_DAYS_PER_UNIT = int(os.getenv("SCHEDULE_DAYS_PER_UNIT", "1"))

# Template used when a request names an unknown project type
DEFAULT_PROJECT_TYPE = os.getenv("DEFAULT_PROJECT_TYPE", "new-build")

# Uvicorn server settings
UVICORN_HOST = os.getenv("UVICORN_HOST", "0.0.0.0")
UVICORN_PORT = int(os.getenv("UVICORN_PORT", "8000"))
