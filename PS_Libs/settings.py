"""
Runtime settings for Packshot Studio.

Defaults come from ``PS_Libs.constants``; ``EditorSettings.from_env`` lets a
deployment override them through environment variables (a ``.env`` file is
honoured via python-dotenv).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from PS_Libs.constants import (
    DEFAULT_STATE_FILE,
    INITIAL_DAILY_CREDITS,
    MINUTE_CREDIT_LIMIT,
    STATUS_DURATION_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Tunable limits and locations used when wiring an editor session.

    Attributes:
        daily_limit: Initial daily AI budget
        minute_limit: AI calls allowed per rolling minute
        status_seconds: How long a status notification stays visible
        state_file: JSON file backing the persistence store
        gemini_api_key: API key for the Gemini collaborator (optional)
    """
    daily_limit: int = INITIAL_DAILY_CREDITS
    minute_limit: int = MINUTE_CREDIT_LIMIT
    status_seconds: float = STATUS_DURATION_SECONDS
    state_file: Path = Path(DEFAULT_STATE_FILE)
    gemini_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EditorSettings":
        """Build settings from the environment, falling back to defaults."""
        load_dotenv()
        settings = cls(
            daily_limit=_int_env("PACKSHOT_DAILY_LIMIT", INITIAL_DAILY_CREDITS),
            minute_limit=_int_env("PACKSHOT_MINUTE_LIMIT", MINUTE_CREDIT_LIMIT),
            status_seconds=_float_env("PACKSHOT_STATUS_SECONDS", STATUS_DURATION_SECONDS),
            state_file=Path(os.getenv("PACKSHOT_STATE_FILE", DEFAULT_STATE_FILE)),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
        )
        logger.debug(
            f"Loaded settings: daily={settings.daily_limit}, "
            f"minute={settings.minute_limit}, state_file={settings.state_file}"
        )
        return settings


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return default


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={value!r}")
        return default
