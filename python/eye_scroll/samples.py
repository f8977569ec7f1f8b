"""
Data types exchanged between tracker sources and the engine.

A tracker source produces one TrackerFrame per camera frame. A frame may
carry a gaze estimate, eye landmarks (or a precomputed openness ratio),
and/or an explicit "blink detected" signal from the tracker.
"""

from dataclasses import dataclass
from typing import Sequence

Point = Sequence[float]


@dataclass(frozen=True)
class Sample:
    """Single gaze observation in viewport pixels."""
    x: float
    y: float
    timestamp_ms: int


@dataclass(frozen=True)
class EyeFeatures:
    """Landmarks for both eyes.

    Each side is an ordered sequence of 6 (x, y) points:
      [corner, upper-lid, upper-lid, corner, lower-lid, lower-lid]
    Ordering is the tracker's responsibility.
    """
    left: Sequence[Point] | None
    right: Sequence[Point] | None


@dataclass(frozen=True)
class TrackerFrame:
    """One frame of tracker output."""
    timestamp_ms: int
    gaze: Sample | None = None
    eyes: EyeFeatures | None = None
    openness: float | None = None   # Used when the tracker reports a ratio directly
    blink_signal: bool = False      # Tracker-reported (or manual) blink
