"""
Tests for the edge-dwell scroll state machine.

Ticks are injected directly, so no wall-clock timers are involved.
"""

import sys
import os
import math
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eye_scroll.gaze_scroll import (
    GazeScrollController, ScrollDirection, ScrollState, ScrollTick,
    edge_threshold, scroll_amount,
)
from eye_scroll.samples import Sample
from eye_scroll.settings import Settings

VIEWPORT = 800


class TestScrollFormulas(unittest.TestCase):

    def test_threshold_scales_with_sensitivity(self):
        self.assertAlmostEqual(edge_threshold(5), 100.0)
        self.assertAlmostEqual(edge_threshold(10), 200.0)
        self.assertAlmostEqual(edge_threshold(1), 20.0)

    def test_amount_scales_with_sensitivity(self):
        self.assertAlmostEqual(scroll_amount(5), 5.0)
        self.assertAlmostEqual(scroll_amount(2), 2.0)
        self.assertAlmostEqual(scroll_amount(10), 10.0)


class TestGazeScrollController(unittest.TestCase):
    """Test start / continue / stop transitions."""

    def setUp(self):
        self.ctl = GazeScrollController()
        self.settings = Settings(auto_scroll=True, gaze_sensitivity=5)
        self.t = 0

    def _gaze(self, y, x=640.0, settings=None):
        self.t += 33
        return self.ctl.update(Sample(x, y, self.t), settings or self.settings, VIEWPORT)

    def _tick(self, settings=None, viewport=VIEWPORT):
        return self.ctl.tick(settings or self.settings, viewport)

    def test_scroll_up_scenario(self):
        """Sensitivity 5, viewport 800, y=50 → scroll up 5px per tick."""
        self.assertEqual(self._gaze(50), ScrollState.SCROLLING_UP)
        for _ in range(5):
            self.assertEqual(self._tick(), ScrollTick(ScrollDirection.UP, 5.0))
        self.assertEqual(self.ctl.state, ScrollState.SCROLLING_UP)

    def test_scroll_down(self):
        self.assertEqual(self._gaze(750), ScrollState.SCROLLING_DOWN)
        self.assertEqual(self._tick(), ScrollTick(ScrollDirection.DOWN, 5.0))

    def test_middle_of_page_stays_idle(self):
        self.assertEqual(self._gaze(400), ScrollState.IDLE)
        self.assertIsNone(self._tick())

    def test_threshold_boundaries_are_strict(self):
        self.assertEqual(self._gaze(100), ScrollState.IDLE)
        self.assertEqual(self._gaze(700), ScrollState.IDLE)
        self.assertEqual(self._gaze(99.9), ScrollState.SCROLLING_UP)

    def test_auto_scroll_disabled_never_starts(self):
        off = Settings(auto_scroll=False)
        self.assertEqual(self._gaze(10, settings=off), ScrollState.IDLE)

    def test_gaze_leaving_edge_stops_on_next_tick(self):
        self._gaze(50)
        self._tick()
        self._gaze(400)
        self.assertEqual(self.ctl.state, ScrollState.SCROLLING_UP)  # until the tick
        self.assertIsNone(self._tick())
        self.assertEqual(self.ctl.state, ScrollState.IDLE)
        self.assertIsNone(self._tick())

    def test_disable_mid_scroll_stops_within_one_tick(self):
        self._gaze(50)
        self.assertIsNotNone(self._tick())
        off = Settings(auto_scroll=False, gaze_sensitivity=5)
        self.assertIsNone(self._tick(settings=off))
        self.assertEqual(self.ctl.state, ScrollState.IDLE)

    def test_settings_read_fresh_each_tick(self):
        """Sensitivity changes mid-scroll affect the very next tick."""
        self._gaze(50)
        faster = Settings(auto_scroll=True, gaze_sensitivity=8)
        self.assertEqual(self._tick(settings=faster), ScrollTick(ScrollDirection.UP, 8.0))

    def test_lower_sensitivity_can_end_dwell(self):
        """y=50 is outside the sensitivity-2 threshold (40px)."""
        self._gaze(50)
        low = Settings(auto_scroll=True, gaze_sensitivity=2)
        self.assertIsNone(self._tick(settings=low))
        self.assertEqual(self.ctl.state, ScrollState.IDLE)

    def test_no_second_loop_while_active(self):
        """Gaze jumping to the other edge does not start a new loop."""
        self._gaze(50)
        self.assertEqual(self._gaze(780), ScrollState.SCROLLING_UP)
        # Tick ends the up loop; the next gaze sample starts scrolling down
        self.assertIsNone(self._tick())
        self.assertEqual(self._gaze(780), ScrollState.SCROLLING_DOWN)

    def test_invalid_viewport_means_no_edge(self):
        for bad in (0, -100, math.nan, math.inf, None):
            ctl = GazeScrollController()
            state = ctl.update(Sample(0.0, 5.0, 0), self.settings, bad)
            self.assertEqual(state, ScrollState.IDLE)

    def test_invalid_viewport_stops_active_loop(self):
        self._gaze(50)
        self.assertIsNone(self._tick(viewport=0))
        self.assertEqual(self.ctl.state, ScrollState.IDLE)

    def test_nan_gaze_is_no_edge(self):
        self.assertEqual(self._gaze(math.nan), ScrollState.IDLE)

    def test_tick_without_gaze(self):
        self.assertIsNone(self._tick())

    def test_reset(self):
        self._gaze(50)
        self.ctl.reset()
        self.assertEqual(self.ctl.state, ScrollState.IDLE)
        self.assertIsNone(self.ctl.last_gaze)


if __name__ == "__main__":
    unittest.main()
