"""
Blink detection from per-frame eye openness.

A blink is confirmed when the averaged openness ratio stays below the
sensitivity-dependent threshold for EAR_CONSEC_FRAMES consecutive frames.
The eye must reopen before another blink can be confirmed, so one
closure produces exactly one BlinkEvent regardless of how long the eyes
stay shut.

Two sources feed the same debounce gate:
  TRACKER  - confirmed from openness frames (update)
  EXTERNAL - explicit "blink detected" notification or manual trigger
             (external_blink); skips frame confirmation
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from . import config
from .settings import clamp_sensitivity

logger = logging.getLogger(__name__)


class BlinkSource(Enum):
    """Where a blink came from."""
    TRACKER = auto()
    EXTERNAL = auto()


@dataclass(frozen=True)
class BlinkEvent:
    """A confirmed blink."""
    timestamp_ms: int
    source: BlinkSource = BlinkSource.TRACKER


def ear_threshold(blink_sensitivity) -> float:
    """Openness below which a frame counts as closed.

    sensitivity 1 → 0.28, 5 → 0.20, 10 → 0.10 (floor).
    """
    s = clamp_sensitivity(blink_sensitivity)
    return max(config.EAR_THRESH_FLOOR,
               config.EAR_THRESH_BASE - s * config.EAR_THRESH_STEP)


class BlinkClassifier:
    """
    Debounced blink detector.

    State machine:
      OPEN   → (ratio < thresh, count < N)         → OPEN (count++)
      OPEN   → (ratio < thresh, count reaches N)   → emit BlinkEvent → CLOSED
      CLOSED → (ratio < thresh)                    → CLOSED (no event)
      any    → (ratio >= thresh)                   → OPEN (count = 0)

    Closed frames within MIN_BLINK_INTERVAL_MS of the last confirmed blink
    are not counted.
    """

    def __init__(self):
        self.consecutive_closed_frames = 0
        self.is_closed = False
        self.last_blink_ms = None

    def _in_debounce(self, now_ms) -> bool:
        return (self.last_blink_ms is not None
                and now_ms - self.last_blink_ms < config.MIN_BLINK_INTERVAL_MS)

    def update(self, openness: float, blink_sensitivity, now_ms: int) -> BlinkEvent | None:
        """
        Feed one frame's averaged openness ratio.

        Args:
            openness: Mean openness of both eyes (see geometry.average_openness)
            blink_sensitivity: 1..10, read fresh on every frame
            now_ms: Frame timestamp in milliseconds

        Returns:
            BlinkEvent on the frame that confirms a closure, otherwise None.
        """
        threshold = ear_threshold(blink_sensitivity)
        try:
            openness = float(openness)
        except (TypeError, ValueError):
            openness = float("nan")

        if not openness < threshold:
            # Reopened, NaN or non-numeric: arm the next detection
            self.consecutive_closed_frames = 0
            self.is_closed = False
            return None

        if self._in_debounce(now_ms):
            return None

        self.consecutive_closed_frames += 1

        if (self.consecutive_closed_frames >= config.EAR_CONSEC_FRAMES
                and not self.is_closed):
            self.is_closed = True
            self.last_blink_ms = now_ms
            logger.debug(f"Blink confirmed (openness={openness:.3f}, "
                         f"thresh={threshold:.2f})")
            return BlinkEvent(now_ms, BlinkSource.TRACKER)

        return None

    def external_blink(self, now_ms: int) -> BlinkEvent | None:
        """Accept a blink reported outside the frame pipeline.

        Only the debounce gate applies. A closure in progress is claimed
        by this event, so the eye must reopen before the next confirmation.
        """
        if self._in_debounce(now_ms):
            logger.debug("External blink suppressed by debounce")
            return None
        self.last_blink_ms = now_ms
        if self.consecutive_closed_frames > 0:
            # Closure already under way: it belongs to this blink
            self.is_closed = True
        return BlinkEvent(now_ms, BlinkSource.EXTERNAL)

    def reset(self):
        """Reset state machine."""
        self.consecutive_closed_frames = 0
        self.is_closed = False
        self.last_blink_ms = None
