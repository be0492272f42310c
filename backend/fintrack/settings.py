from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str | None
    request_delay_sec: float
    http_timeout_sec: float
    history_days: int
    log_level: str


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("FINTRACK_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # fintrack/settings.py -> fintrack/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    # le dossier data peut être créé automatiquement
    p.mkdir(parents=True, exist_ok=True)

    db_url = os.getenv("FINTRACK_DATABASE_URL")
    return Settings(
        data_dir=p,
        database_url=db_url.strip() if db_url and db_url.strip() else None,
        request_delay_sec=_env_float("FINTRACK_REQUEST_DELAY_SEC", 0.5),
        http_timeout_sec=_env_float("FINTRACK_HTTP_TIMEOUT_SEC", 15.0),
        history_days=_env_int("FINTRACK_HISTORY_DAYS", 365),
        log_level=os.getenv("FINTRACK_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
