"""
Tests for eye openness geometry.

Covers the nominal ratio and every degenerate-input fallback.
"""

import sys
import os
import math
import unittest

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eye_scroll.geometry import eye_aspect_ratio, average_openness
from eye_scroll.samples import EyeFeatures
from eye_scroll.simulator import synthetic_eye_landmarks
from eye_scroll import config


def _eye(height=10.0, width=30.0):
    """Landmarks as plain lists: [corner, upper, upper, corner, lower, lower]."""
    half_w, half_h = width / 2, height / 2
    return [
        [0.0, 0.0],
        [half_w - 5, -half_h],
        [half_w + 5, -half_h],
        [width, 0.0],
        [half_w + 5, half_h],
        [half_w - 5, half_h],
    ]


class TestEyeAspectRatio(unittest.TestCase):
    """Test the single-eye openness ratio."""

    def test_open_eye_ratio(self):
        """height 10 / width 30 → 1/3."""
        self.assertAlmostEqual(eye_aspect_ratio(_eye(10, 30)), 1 / 3)

    def test_uses_extreme_lid_points(self):
        """Upper uses the higher of p1/p2, lower the lower of p4/p5."""
        pts = _eye(10, 40)
        pts[1][1] = -8.0   # higher upper lid point
        pts[5][1] = 7.0    # lower lower lid point
        self.assertAlmostEqual(eye_aspect_ratio(pts), 15 / 40)

    def test_zero_width_returns_default(self):
        """Degenerate width must fall back to exactly 0.3."""
        for height in (0.0, 5.0, 50.0):
            pts = _eye(height, 30)
            pts[3][0] = pts[0][0]
            self.assertEqual(eye_aspect_ratio(pts), 0.3)

    def test_ratio_above_one_returns_default(self):
        """Taller-than-wide geometry is rejected."""
        self.assertEqual(eye_aspect_ratio(_eye(40, 30)), config.DEFAULT_OPENNESS)

    def test_non_finite_returns_default(self):
        """NaN or infinite coordinates fall back."""
        pts = _eye()
        pts[2][1] = math.nan
        self.assertEqual(eye_aspect_ratio(pts), config.DEFAULT_OPENNESS)

        pts = _eye()
        pts[3][0] = math.inf
        self.assertEqual(eye_aspect_ratio(pts), config.DEFAULT_OPENNESS)

    def test_too_few_points_returns_default(self):
        self.assertEqual(eye_aspect_ratio(_eye()[:5]), config.DEFAULT_OPENNESS)
        self.assertEqual(eye_aspect_ratio([]), config.DEFAULT_OPENNESS)

    def test_malformed_points_return_default(self):
        """Points without two coordinates, or non-numeric ones, fall back."""
        pts = _eye()
        pts[4] = [1.0]
        self.assertEqual(eye_aspect_ratio(pts), config.DEFAULT_OPENNESS)

        pts = _eye()
        pts[0] = ["left", "corner"]
        self.assertEqual(eye_aspect_ratio(pts), config.DEFAULT_OPENNESS)

        pts = _eye()
        pts[1] = None
        self.assertEqual(eye_aspect_ratio(pts), config.DEFAULT_OPENNESS)

    def test_none_and_non_sequence_return_default(self):
        self.assertEqual(eye_aspect_ratio(None), config.DEFAULT_OPENNESS)
        self.assertEqual(eye_aspect_ratio(42), config.DEFAULT_OPENNESS)
        self.assertEqual(eye_aspect_ratio("landmarks"), config.DEFAULT_OPENNESS)

    def test_extra_points_and_coordinates_ignored(self):
        """Only the first 6 points and their first two coordinates matter."""
        pts = [p + [99.0] for p in _eye(10, 30)] + [[500.0, 500.0]]
        self.assertAlmostEqual(eye_aspect_ratio(pts), 1 / 3)

    def test_accepts_numpy_array(self):
        pts = synthetic_eye_landmarks(50.0, 50.0, height=6.0, width=30.0)
        self.assertAlmostEqual(eye_aspect_ratio(pts), 0.2)


class TestAverageOpenness(unittest.TestCase):
    """Test the two-eye average."""

    def test_average_of_both_eyes(self):
        eyes = EyeFeatures(left=_eye(10, 30), right=_eye(5, 25))
        self.assertAlmostEqual(average_openness(eyes), (1 / 3 + 0.2) / 2)

    def test_missing_side_uses_default(self):
        eyes = EyeFeatures(left=_eye(3, 30), right=None)
        self.assertAlmostEqual(average_openness(eyes), (0.1 + 0.3) / 2)

    def test_missing_features_uses_default(self):
        self.assertEqual(average_openness(None), config.DEFAULT_OPENNESS)

    def test_closed_eyes_below_most_sensitive_threshold(self):
        closed = synthetic_eye_landmarks(0.0, 0.0, config.SIM_CLOSED_HEIGHT)
        eyes = EyeFeatures(left=closed, right=np.copy(closed))
        self.assertLess(average_openness(eyes), config.EAR_THRESH_FLOOR)


if __name__ == "__main__":
    unittest.main()
