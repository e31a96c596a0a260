"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "ecosystem.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_UPDATE_INTERVAL = 30.0  # seconds between simulated updates

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def update_interval_from_env() -> float:
    """Read UPDATE_INTERVAL_SECONDS, falling back to the default interval."""
    raw = os.getenv("UPDATE_INTERVAL_SECONDS")
    if not raw:
        return DEFAULT_UPDATE_INTERVAL

    interval = float(raw)
    if interval <= 0:
        raise ValueError("UPDATE_INTERVAL_SECONDS must be positive")
    return interval
