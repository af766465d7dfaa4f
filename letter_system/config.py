# letter_system/config.py
from __future__ import annotations

import os
from urllib.parse import quote_plus

PORT: int = int(os.getenv("PORT", "5000"))

DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "3306"))
DB_USER: str = os.getenv("DB_USER", "root")
DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
DB_NAME: str = os.getenv("DB_NAME", "letter_system")

# Full URL wins over the DB_* parts (tests point this at SQLite)
DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{quote_plus(DB_USER)}:{quote_plus(DB_PASSWORD)}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# Bounded pool; callers beyond capacity wait up to DB_POOL_TIMEOUT seconds
DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))

FRONTEND_URL: str = os.getenv("FRONTEND_URL", "")
CORS_ORIGINS: list[str] = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:5175",
    "http://localhost:5176",
] + ([FRONTEND_URL] if FRONTEND_URL else [])

# Prefix the HTML pages put in front of /api calls; empty means same origin
API_BASE_URL: str = os.getenv("API_BASE_URL", "").rstrip("/")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
