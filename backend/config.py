"""Runtime configuration read from the environment."""

import os
from zoneinfo import ZoneInfo


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Use DATABASE_PATH env var for Docker, default to local path for development
DATABASE_PATH = os.environ.get("DATABASE_PATH", "./db.sqlite3")

SECRET_KEY = os.environ.get("SECRET_KEY", "your-secret-key-keep-it-secret")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# Set to false when the deployed schema is missing the ledger indexes
LEDGER_USE_INDEXES = _env_bool("LEDGER_USE_INDEXES", True)

# Seconds to wait on a locked database before giving up
STORE_TIMEOUT_SECONDS = float(os.environ.get("STORE_TIMEOUT_SECONDS", "5"))

# Year and month boundaries for spending statistics are computed in this zone
LEDGER_TIMEZONE = ZoneInfo(os.environ.get("LEDGER_TIMEZONE", "UTC"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
