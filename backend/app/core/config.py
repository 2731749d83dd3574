from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_DEFAULT_MODEL_ID = "gemini-2.0-flash-001"


def _load_dotenv() -> None:
    if os.getenv("TUTOR_SKIP_DOTENV") == "1":
        return

    env_path = Path(__file__).resolve().parents[2] / ".env"
    if not env_path.exists():
        return

    from dotenv import load_dotenv

    load_dotenv(env_path, override=False)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_positive_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_positive_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    env: str
    app_name: str
    port: int
    log_level: str
    cors_origins: list[str]
    llm_backend: str
    google_api_key: str | None
    model_id: str
    llm_timeout_seconds: float
    api_base: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv()

    env = os.getenv("TUTOR_ENV", "development")
    cors = os.getenv("TUTOR_CORS_ORIGINS", "*")
    llm_backend = os.getenv("TUTOR_LLM_BACKEND", "gemini").strip().lower() or "gemini"
    # The key is not validated here; a missing key only fails at the first provider call.
    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or None

    return Settings(
        env=env,
        app_name="AI Teacher Relay",
        port=_parse_positive_int(os.getenv("PORT"), default=4000),
        log_level=(os.getenv("TUTOR_LOG_LEVEL") or "INFO").strip().upper(),
        cors_origins=_split_csv(cors) or ["*"],
        llm_backend=llm_backend,
        google_api_key=api_key,
        model_id=(os.getenv("MODEL_ID") or "").strip() or _DEFAULT_MODEL_ID,
        llm_timeout_seconds=_parse_positive_float(os.getenv("TUTOR_LLM_TIMEOUT_SECONDS"), default=60.0),
        api_base=(os.getenv("TUTOR_API_BASE") or "http://localhost:4000").rstrip("/"),
    )
