"""Settings read from environment variables."""

import os


def _canon_prefix(val: str | None) -> str:
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///./bowling.db"
SQL_ECHO = _as_bool(os.getenv("SQL_ECHO"))
API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
