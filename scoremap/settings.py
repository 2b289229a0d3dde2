"""Application settings with JSON persistence.

Settings are stored at:
    ~/.local/share/ScoreMap/settings.json

Usage::

    settings = load_settings()
    settings.num_weeks = 20
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .database.db import APP_SUPPORT_DIR
from .database.query import SCORE_TAG
from .heatmap.range import NAVIGATION_WEEKS, NUM_WEEKS

logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── heatmap ───────────────────────────────────────────────────────
    num_weeks: int = NUM_WEEKS
    navigation_weeks: int = NAVIGATION_WEEKS
    score_tag: str = SCORE_TAG

    # ── storage ───────────────────────────────────────────────────────
    database_url: str | None = None        # None → default SQLite file

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 560


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError):
        logger.warning("unreadable settings at %s, using defaults", path)
    return Settings()


def save_settings(settings: Settings, path: Path = SETTINGS_PATH) -> None:
    """Write settings to disk as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
