"""
Session statistics and settings persistence.

The engine only emits increment signals (StatKind). SessionStats
accumulates them, and SessionStore keeps settings and stats in a JSON
file between runs, merging stored values over defaults so that older or
partial files still load.
"""

import json
import logging
import os
import time
from dataclasses import asdict, dataclass, field
from enum import Enum, auto

from . import config
from .settings import Settings

logger = logging.getLogger(__name__)


class StatKind(Enum):
    """Counters the engine can increment."""
    BLINK = auto()
    SCROLL = auto()
    NAVIGATION = auto()


@dataclass
class SessionStats:
    """Accumulated counters for one session."""
    blink_count: int = 0
    scroll_count: int = 0
    navigation_count: int = 0
    session_start: float = field(default_factory=time.time)

    def record(self, kind: StatKind):
        """Apply one increment signal from the engine."""
        if kind == StatKind.BLINK:
            self.blink_count += 1
        elif kind == StatKind.SCROLL:
            self.scroll_count += 1
        elif kind == StatKind.NAVIGATION:
            self.navigation_count += 1

    def session_duration(self, now: float = None) -> float:
        """Seconds since the session started."""
        if now is None:
            now = time.time()
        return max(0.0, now - self.session_start)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> "SessionStats":
        stats = cls()
        for key in ("blink_count", "scroll_count", "navigation_count"):
            try:
                setattr(stats, key, int(data.get(key, 0)))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid stored {key}: {data.get(key)!r}")
        if "session_start" in data:
            try:
                stats.session_start = float(data["session_start"])
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid stored session_start")
        return stats


class SessionStore:
    """
    JSON-backed store for settings and stats.

    File layout:
        {"settings": {...}, "stats": {...}}
    """

    def __init__(self, path=None):
        self.path = path or config.SESSION_FILE

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Session file {self.path} is not a JSON object, ignoring")
            return {}
        return data

    def load(self) -> tuple[Settings, SessionStats]:
        """Load settings and stats, falling back to defaults."""
        data = self._read()
        settings_data = data.get("settings")
        stats_data = data.get("stats")
        settings = Settings.from_dict(settings_data if isinstance(settings_data, dict) else {})
        stats = (SessionStats.from_dict(stats_data) if isinstance(stats_data, dict)
                 else SessionStats())
        logger.info(f"Loaded session from {self.path}")
        return settings, stats

    def save(self, settings: Settings, stats: SessionStats):
        """Write settings and stats."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"settings": settings.to_dict(), "stats": stats.to_dict()},
                      f, indent=2)
        logger.info(f"Session saved to {self.path}")

    def reset(self) -> tuple[Settings, SessionStats]:
        """Restore default settings and start a fresh stats session."""
        settings, stats = Settings(), SessionStats()
        self.save(settings, stats)
        logger.info("Session reset to defaults")
        return settings, stats
