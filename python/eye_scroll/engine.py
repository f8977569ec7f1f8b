"""
Gaze action engine: wires the detectors into one synchronous pipeline.

  eye landmarks → openness → BlinkClassifier → BlinkPatternDetector → on_action
  gaze samples  → GazeScrollController ← scheduler ticks          → on_scroll_tick
  every blink / scroll tick / navigation                           → on_stat_increment

All inputs are processed in arrival order on the caller's thread. The host
supplies callbacks and turns actions into clicks, history navigation and
scrolling (see action_dispatch.py).
"""

import logging

from . import config
from .blink_classifier import BlinkClassifier
from .blink_patterns import Action, BlinkPatternDetector
from .gaze_scroll import GazeScrollController
from .geometry import average_openness
from .scheduler import TickScheduler
from .settings import Settings
from .stats import StatKind

logger = logging.getLogger(__name__)


def _noop(*args):
    pass


class GazeActionEngine:
    """
    Signal-to-action classifier for gaze and blink input.

    Args:
        settings: Initial Settings (defaults: everything disabled)
        viewport_height: Visible height in pixels for edge-dwell scrolling
        on_action: Called with Action.CLICK / Action.NAVIGATE_BACK
        on_scroll_tick: Called with each ScrollTick
        on_stat_increment: Called with a StatKind per counted event
    """

    def __init__(self, settings=None, viewport_height=None,
                 on_action=None, on_scroll_tick=None, on_stat_increment=None):
        self.settings = settings or Settings()
        self.viewport_height = (viewport_height if viewport_height is not None
                                else config.DEFAULT_VIEWPORT_HEIGHT)

        self.on_action = on_action or _noop
        self.on_scroll_tick = on_scroll_tick or _noop
        self.on_stat_increment = on_stat_increment or _noop

        self.blink_classifier = BlinkClassifier()
        self.pattern_detector = BlinkPatternDetector()
        self.scroll_controller = GazeScrollController()
        self.scheduler = TickScheduler(config.SCROLL_TICK_MS)

    # ------------------------------------------------------------------
    # Settings / viewport
    # ------------------------------------------------------------------

    def update_settings(self, settings):
        """Replace settings (Settings) or merge a partial mapping.

        Takes effect on the next frame or tick.
        """
        if isinstance(settings, Settings):
            self.settings = settings
        else:
            self.settings = self.settings.merged(settings)
        logger.info(f"Settings updated: {self.settings}")

    def set_viewport_height(self, height):
        self.viewport_height = height

    @property
    def tracking_active(self) -> bool:
        """False when every feature is off; the host may pause the tracker."""
        return self.settings.any_enabled

    @property
    def last_gaze(self):
        return self.scroll_controller.last_gaze

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def push_gaze_sample(self, sample):
        """Feed one gaze Sample to the scroll controller."""
        self.scroll_controller.update(sample, self.settings, self.viewport_height)

    def push_eye_features(self, eyes, now_ms):
        """Feed both eyes' landmarks for one frame."""
        return self.push_openness(average_openness(eyes), now_ms)

    def push_openness(self, openness, now_ms):
        """Feed a precomputed averaged openness ratio for one frame."""
        event = self.blink_classifier.update(
            openness, self.settings.blink_sensitivity, now_ms)
        if event is not None:
            return self._handle_blink(event)
        return Action.NONE

    def push_external_blink(self, now_ms):
        """Blink reported by the tracker itself or a manual trigger."""
        event = self.blink_classifier.external_blink(now_ms)
        if event is not None:
            return self._handle_blink(event)
        return Action.NONE

    def trigger_navigate_back(self, now_ms=None):
        """Direct double-blink gesture (keyboard fallback).

        Bypasses blink detection; only honoured when double blink is enabled.
        """
        if not self.settings.double_blink:
            return Action.NONE
        logger.info("Navigate back (manual trigger)")
        self._emit_action(Action.NAVIGATE_BACK)
        return Action.NAVIGATE_BACK

    def process_frame(self, frame):
        """
        Feed one TrackerFrame: gaze, eye openness, blink signal, then ticks.

        Returns:
            The Action produced by this frame's blink input (or Action.NONE).
        """
        if frame.gaze is not None:
            self.push_gaze_sample(frame.gaze)

        action = Action.NONE
        if frame.eyes is not None:
            action = self.push_eye_features(frame.eyes, frame.timestamp_ms)
        elif frame.openness is not None:
            action = self.push_openness(frame.openness, frame.timestamp_ms)

        if frame.blink_signal:
            signalled = self.push_external_blink(frame.timestamp_ms)
            if signalled != Action.NONE:
                action = signalled

        self.advance(frame.timestamp_ms)
        return action

    # ------------------------------------------------------------------
    # Scroll loop
    # ------------------------------------------------------------------

    def advance(self, now_ms):
        """Run the scroll tick if one is due at *now_ms*."""
        if self.scheduler.due(now_ms):
            return self.tick()
        return None

    def tick(self):
        """One scroll-loop period. Settings are read fresh every call."""
        scroll_tick = self.scroll_controller.tick(self.settings, self.viewport_height)
        if scroll_tick is not None:
            self.on_scroll_tick(scroll_tick)
            self.on_stat_increment(StatKind.SCROLL)
        return scroll_tick

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _handle_blink(self, event):
        action = self.pattern_detector.update(
            event, self.settings.double_blink, self.settings.single_blink)
        self.on_stat_increment(StatKind.BLINK)
        if action != Action.NONE:
            logger.info(f"{event.source.name.lower()} blink → {action.name.lower()}")
            self._emit_action(action)
        return action

    def _emit_action(self, action):
        self.on_action(action)
        if action == Action.NAVIGATE_BACK:
            self.on_stat_increment(StatKind.NAVIGATION)

    def reset(self):
        """Reset all detector state."""
        self.blink_classifier.reset()
        self.pattern_detector.reset()
        self.scroll_controller.reset()
        self.scheduler.reset()
