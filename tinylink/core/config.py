import os

APP_NAME = "TinyLink"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tinylink.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Generated codes: at most this many insert attempts before giving up
CODE_MAX_ATTEMPTS = int(os.getenv("CODE_MAX_ATTEMPTS", "10"))

CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

STATS_TOP_LIMIT = int(os.getenv("STATS_TOP_LIMIT", "10"))
STATS_RECENT_LIMIT = int(os.getenv("STATS_RECENT_LIMIT", "10"))
