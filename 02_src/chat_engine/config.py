"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "chat_engine.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


@dataclass
class EngineConfig:
    """Runtime settings for the chat engine."""

    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    remote_timeout_seconds: float = 15.0
    remote_min_confidence: float = 50.0
    remote_default_confidence: float = 80.0
    confidence_threshold: float = 70.0
    auto_analysis_enabled: bool = True
    insight_interval_seconds: float = 30.0
    insight_confidence: float = 85.0
    refresh_interval_seconds: float = 30.0
    usefulness_floor: float = 30.0
    snapshot_path: str | None = None
    db_path: str | None = None
    user_id: str = "demo-user"
    sport: str = "soccer"
    language: str = "en"
    is_premium: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            anthropic_model=os.getenv("ANTHROPIC_MODEL", defaults.anthropic_model),
            remote_timeout_seconds=_env_float(
                "REMOTE_TIMEOUT_SECONDS", defaults.remote_timeout_seconds
            ),
            remote_min_confidence=_env_float(
                "REMOTE_MIN_CONFIDENCE", defaults.remote_min_confidence
            ),
            remote_default_confidence=_env_float(
                "REMOTE_DEFAULT_CONFIDENCE", defaults.remote_default_confidence
            ),
            confidence_threshold=_env_float(
                "CONFIDENCE_THRESHOLD", defaults.confidence_threshold
            ),
            auto_analysis_enabled=_env_bool(
                "AUTO_ANALYSIS_ENABLED", defaults.auto_analysis_enabled
            ),
            insight_interval_seconds=_env_float(
                "INSIGHT_INTERVAL_SECONDS", defaults.insight_interval_seconds
            ),
            insight_confidence=_env_float(
                "INSIGHT_CONFIDENCE", defaults.insight_confidence
            ),
            refresh_interval_seconds=_env_float(
                "REFRESH_INTERVAL_SECONDS", defaults.refresh_interval_seconds
            ),
            usefulness_floor=_env_float("USEFULNESS_FLOOR", defaults.usefulness_floor),
            snapshot_path=os.getenv("SNAPSHOT_PATH") or None,
            db_path=os.getenv("DATABASE_URL") or None,
            user_id=os.getenv("USER_ID", defaults.user_id),
            sport=os.getenv("SPORT", defaults.sport),
            language=os.getenv("CHAT_LANGUAGE", defaults.language),
            is_premium=_env_bool("PREMIUM_USER", defaults.is_premium),
        )
