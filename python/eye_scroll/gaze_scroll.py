"""
Edge-dwell auto-scroll.

While the gaze rests near the top or bottom edge of the viewport, the
page scrolls in that direction at a fixed cadence. The scroll loop is not
timer-driven here: an external scheduler calls tick() every
SCROLL_TICK_MS, and each tick re-checks the dwell condition against the
settings passed in at that moment. A failed check ends the loop on that
same tick.

  threshold = SCROLL_THRESHOLD * (gaze_sensitivity / 5)   pixels from edge
  amount    = SCROLL_SPEED * (gaze_sensitivity / 2)       pixels per tick
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto

from . import config

logger = logging.getLogger(__name__)


class ScrollState(Enum):
    """Scroll state machine states."""
    IDLE = auto()
    SCROLLING_UP = auto()
    SCROLLING_DOWN = auto()


class ScrollDirection(Enum):
    UP = auto()
    DOWN = auto()


@dataclass(frozen=True)
class ScrollTick:
    """One scroll step to be applied by the host."""
    direction: ScrollDirection
    amount: float


def edge_threshold(gaze_sensitivity) -> float:
    """Distance from an edge (pixels) that counts as dwelling on it."""
    return config.SCROLL_THRESHOLD * (gaze_sensitivity / config.SCROLL_THRESHOLD_SCALE)


def scroll_amount(gaze_sensitivity) -> float:
    """Pixels scrolled per tick."""
    return config.SCROLL_SPEED * (gaze_sensitivity / config.SCROLL_SPEED_SCALE)


def _valid_viewport(viewport_height) -> bool:
    try:
        return math.isfinite(viewport_height) and viewport_height > 0
    except TypeError:
        return False


class GazeScrollController:
    """
    Start/continue/stop state machine for edge-dwell scrolling.

    State machine:
      IDLE → (auto_scroll, y < threshold)          → SCROLLING_UP
      IDLE → (auto_scroll, y > height - threshold) → SCROLLING_DOWN
      SCROLLING_* → tick, condition holds          → emit ScrollTick, stay
      SCROLLING_* → tick, condition fails          → IDLE

    Gaze updates never start a second loop while one is active.
    """

    def __init__(self):
        self.state = ScrollState.IDLE
        self.last_gaze = None

    @property
    def active(self) -> bool:
        return self.state != ScrollState.IDLE

    @property
    def direction(self) -> ScrollDirection | None:
        if self.state == ScrollState.SCROLLING_UP:
            return ScrollDirection.UP
        if self.state == ScrollState.SCROLLING_DOWN:
            return ScrollDirection.DOWN
        return None

    def _edge(self, settings, viewport_height) -> ScrollDirection | None:
        """Which edge the last gaze dwells on, if any."""
        if self.last_gaze is None or not settings.auto_scroll:
            return None
        if not _valid_viewport(viewport_height):
            return None

        y = self.last_gaze.y
        threshold = edge_threshold(settings.gaze_sensitivity)
        if y < threshold:
            return ScrollDirection.UP
        if y > viewport_height - threshold:
            return ScrollDirection.DOWN
        return None

    def update(self, sample, settings, viewport_height) -> ScrollState:
        """
        Feed one gaze sample.

        Args:
            sample: Sample with viewport-pixel coordinates
            settings: Current Settings
            viewport_height: Visible height in pixels

        Returns:
            State after the update.
        """
        self.last_gaze = sample

        if self.active:
            return self.state

        edge = self._edge(settings, viewport_height)
        if edge == ScrollDirection.UP:
            self.state = ScrollState.SCROLLING_UP
            logger.debug(f"Scroll up started (gaze y={sample.y:.0f})")
        elif edge == ScrollDirection.DOWN:
            self.state = ScrollState.SCROLLING_DOWN
            logger.debug(f"Scroll down started (gaze y={sample.y:.0f})")

        return self.state

    def tick(self, settings, viewport_height) -> ScrollTick | None:
        """
        Advance the scroll loop by one period.

        Returns:
            ScrollTick while the dwell condition still holds, None when idle
            or when the loop has just stopped.
        """
        direction = self.direction
        if direction is None:
            return None

        if self._edge(settings, viewport_height) != direction:
            self.state = ScrollState.IDLE
            logger.debug(f"Scroll {direction.name.lower()} stopped")
            return None

        return ScrollTick(direction, scroll_amount(settings.gaze_sensitivity))

    def reset(self):
        self.state = ScrollState.IDLE
        self.last_gaze = None
