"""
Eye openness from landmark geometry.

Computes a vertical/horizontal extent ratio (a simplified eye aspect
ratio) from 6 ordered eye landmarks:

        p1  p2
    p0          p3
        p5  p4

  height = |max(p4.y, p5.y) - min(p1.y, p2.y)|
  width  = |p3.x - p0.x|
  ratio  = height / width

Trackers stall, lose the face, or report garbage. Every function here
returns a usable ratio instead of raising, so downstream detectors keep
running on partial output.
"""

import logging

import numpy as np

from . import config

logger = logging.getLogger(__name__)

_malformed_count = 0


def eye_aspect_ratio(landmarks) -> float:
    """
    Openness ratio for one eye.

    Args:
        landmarks: Sequence of at least 6 points, each indexable as (x, y).

    Returns:
        Ratio in [0, 1], or config.DEFAULT_OPENNESS when the landmarks are
        missing, short, malformed, degenerate (zero width), non-finite or
        produce a ratio outside [0, 1].
    """
    global _malformed_count
    if landmarks is None or isinstance(landmarks, (str, bytes)):
        return config.DEFAULT_OPENNESS

    try:
        if len(landmarks) < config.LANDMARKS_PER_EYE:
            return config.DEFAULT_OPENNESS
        pts = np.array(
            [[float(p[0]), float(p[1])] for p in landmarks[:config.LANDMARKS_PER_EYE]]
        )
    except (TypeError, ValueError, IndexError, KeyError) as e:
        _malformed_count += 1
        if _malformed_count % 100 == 1:
            logger.warning(f"Malformed landmarks ({_malformed_count} total): {e}")
        return config.DEFAULT_OPENNESS

    upper_y = min(pts[1, 1], pts[2, 1])
    lower_y = max(pts[4, 1], pts[5, 1])
    left_x = pts[0, 0]
    right_x = pts[3, 0]

    height = abs(lower_y - upper_y)
    width = abs(right_x - left_x)

    if width == 0 or not np.isfinite(height) or not np.isfinite(width):
        return config.DEFAULT_OPENNESS

    ratio = float(height / width)
    if 0.0 <= ratio <= 1.0:
        return ratio
    return config.DEFAULT_OPENNESS


def average_openness(eyes) -> float:
    """Mean openness of the left and right eye (EyeFeatures or None)."""
    if eyes is None:
        return config.DEFAULT_OPENNESS
    left = eye_aspect_ratio(eyes.left)
    right = eye_aspect_ratio(eyes.right)
    return (left + right) / 2.0
