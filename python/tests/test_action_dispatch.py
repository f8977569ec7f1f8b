"""
Tests for desktop action dispatch in dry-run mode.

Dry-run never imports pyautogui, so these run without a display.
"""

import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eye_scroll.action_dispatch import ActionDispatcher
from eye_scroll.blink_patterns import Action
from eye_scroll.gaze_scroll import ScrollDirection, ScrollTick
from eye_scroll.samples import Sample


class TestActionDispatcher(unittest.TestCase):

    def setUp(self):
        self.gaze = Sample(320.0, 240.0, 0)
        self.dispatcher = ActionDispatcher(gaze_point=lambda: self.gaze, dry_run=True)

    def test_click_logged_at_gaze_point(self):
        with self.assertLogs("eye_scroll.action_dispatch", level="INFO") as cm:
            self.dispatcher.handle_action(Action.CLICK)
        self.assertIn("(320, 240)", cm.output[0])
        self.assertEqual(self.dispatcher.actions_sent, 1)

    def test_click_without_gaze(self):
        self.gaze = None
        with self.assertLogs("eye_scroll.action_dispatch", level="INFO") as cm:
            self.dispatcher.handle_action(Action.CLICK)
        self.assertIn("current position", cm.output[0])

    def test_navigate_back(self):
        with self.assertLogs("eye_scroll.action_dispatch", level="INFO") as cm:
            self.dispatcher.handle_action(Action.NAVIGATE_BACK)
        self.assertIn("navigate back", cm.output[0])

    def test_none_is_ignored(self):
        self.dispatcher.handle_action(Action.NONE)
        self.assertEqual(self.dispatcher.actions_sent, 0)

    def test_scroll_direction_sign(self):
        with self.assertLogs("eye_scroll.action_dispatch", level="DEBUG") as cm:
            self.dispatcher.handle_scroll(ScrollTick(ScrollDirection.UP, 5.0))
            self.dispatcher.handle_scroll(ScrollTick(ScrollDirection.DOWN, 0.4))
        self.assertIn("scroll +5", cm.output[0])
        self.assertIn("scroll -1", cm.output[1])
        self.assertEqual(self.dispatcher.actions_sent, 2)


if __name__ == "__main__":
    unittest.main()
