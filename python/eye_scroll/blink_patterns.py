"""
Blink pattern classification: single blink vs double blink.

  Single blink → CLICK
  Double blink → NAVIGATE_BACK  (two blinks at most DOUBLE_BLINK_WINDOW_MS apart)

Actions are decided immediately on each blink. A lone blink is never held
back waiting for a possible partner, so with both gestures enabled the
first blink of a double fires CLICK and the second fires NAVIGATE_BACK.
"""

import logging
from enum import Enum, auto

from . import config

logger = logging.getLogger(__name__)


class Action(Enum):
    """Discrete actions produced from blink patterns."""
    NONE = auto()
    CLICK = auto()           # → click at gaze point
    NAVIGATE_BACK = auto()   # → browser back


class BlinkPatternDetector:
    """
    Classifies confirmed blinks using a short rolling history.

    History keeps blink timestamps younger than BLINK_HISTORY_WINDOW_MS
    (relative to the newest blink) and is cleared whenever a double blink
    fires, so a rapid third blink starts a fresh cycle.
    """

    def __init__(self):
        self.history = []
        self.last_blink_ms = None
        self.blink_count = 0

    def update(self, event, double_blink_enabled: bool, single_blink_enabled: bool) -> Action:
        """
        Classify one confirmed blink.

        Args:
            event: BlinkEvent from BlinkClassifier
            double_blink_enabled: Double blink → NAVIGATE_BACK allowed
            single_blink_enabled: Single blink → CLICK allowed

        Returns:
            Action.NAVIGATE_BACK, Action.CLICK, or Action.NONE
        """
        now = event.timestamp_ms
        self.blink_count += 1
        self.last_blink_ms = now

        self.history.append(now)
        self.history = [t for t in self.history
                        if now - t < config.BLINK_HISTORY_WINDOW_MS]

        if double_blink_enabled and len(self.history) >= 2:
            gap = self.history[-1] - self.history[-2]
            if gap <= config.DOUBLE_BLINK_WINDOW_MS:
                self.history = []
                logger.debug(f"Double blink detected (gap {gap}ms)")
                return Action.NAVIGATE_BACK

        if single_blink_enabled:
            logger.debug("Single blink detected")
            return Action.CLICK

        return Action.NONE

    def reset(self):
        self.history = []
        self.last_blink_ms = None
        self.blink_count = 0
