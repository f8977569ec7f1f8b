"""
Desktop action dispatch.

Turns engine output into real input events:
  CLICK          → left click at the last gaze point
  NAVIGATE_BACK  → Alt+Left (browser back)
  ScrollTick     → mouse wheel scroll (up = positive)

With dry_run=True nothing is sent to the OS; actions are only logged.
Useful for replay and for running without a display.
"""

import logging

from .blink_patterns import Action
from .gaze_scroll import ScrollDirection

logger = logging.getLogger(__name__)

# Lazy-load pyautogui to allow testing without a display
_pyautogui = None


def _get_pyautogui():
    """Import and configure pyautogui on first use."""
    global _pyautogui
    if _pyautogui is None:
        import pyautogui
        pyautogui.FAILSAFE = False
        pyautogui.PAUSE = 0
        _pyautogui = pyautogui
    return _pyautogui


class ActionDispatcher:
    """Host collaborator for GazeActionEngine callbacks.

    Wire it up with::

        dispatcher = ActionDispatcher(gaze_point=lambda: engine.last_gaze)
        engine.on_action = dispatcher.handle_action
        engine.on_scroll_tick = dispatcher.handle_scroll
    """

    def __init__(self, gaze_point=None, dry_run: bool = False):
        self.gaze_point = gaze_point
        self.dry_run = dry_run
        self.actions_sent = 0

    def handle_action(self, action):
        if action == Action.CLICK:
            self._click()
        elif action == Action.NAVIGATE_BACK:
            self._navigate_back()

    def handle_scroll(self, tick):
        clicks = max(1, int(round(tick.amount)))
        if tick.direction == ScrollDirection.DOWN:
            clicks = -clicks
        self.actions_sent += 1
        if self.dry_run:
            logger.debug(f"[dry-run] scroll {clicks:+d}")
            return
        _get_pyautogui().scroll(clicks, _pause=False)

    def _click(self):
        gaze = self.gaze_point() if self.gaze_point else None
        self.actions_sent += 1
        if self.dry_run:
            where = f"({gaze.x:.0f}, {gaze.y:.0f})" if gaze else "current position"
            logger.info(f"[dry-run] click at {where}")
            return
        gui = _get_pyautogui()
        if gaze is not None:
            gui.click(int(gaze.x), int(gaze.y), _pause=False)
        else:
            gui.click(_pause=False)
        logger.info("Click")

    def _navigate_back(self):
        self.actions_sent += 1
        if self.dry_run:
            logger.info("[dry-run] navigate back")
            return
        _get_pyautogui().hotkey('alt', 'left', _pause=False)
        logger.info("Navigate back (Alt+Left)")
