"""
Tracker simulator for development and demo without a camera tracker.

Generates synthetic tracker frames from the mouse pointer and keyboard,
allowing the full pipeline to be tested and demonstrated without a face
tracking library.

Controls:
  Mouse pointer:    Gaze position (move to top/bottom edge → auto-scroll)
  Space (hold):     Eyes closed (synthetic landmarks) → blink on release cycle
  Space (tap x2):   Double blink → navigate back
  K:                Tracker-reported blink (external signal path)
  B:                Navigate-back gesture (bypasses blink detection)
  Q / Escape:       Quit

Synthetic eye model (see config.SIM_*):
  Open:   height 10 / width 30 → openness ~0.33
  Closed: height  1 / width 30 → openness ~0.03
"""

import time
import logging
from dataclasses import dataclass

import numpy as np

from . import config
from .samples import EyeFeatures, Sample, TrackerFrame

logger = logging.getLogger(__name__)


def synthetic_eye_landmarks(cx: float, cy: float, height: float,
                            width: float = None, noise_std: float = 0.0) -> np.ndarray:
    """
    Build 6 ordered landmarks for an eye centred on (cx, cy).

    Returns:
        (6, 2) array: [corner, upper, upper, corner, lower, lower]
    """
    width = width or config.SIM_EYE_WIDTH
    half_w = width / 2.0
    half_h = height / 2.0
    pts = np.array([
        [cx - half_w, cy],
        [cx - half_w / 3, cy - half_h],
        [cx + half_w / 3, cy - half_h],
        [cx + half_w, cy],
        [cx + half_w / 3, cy + half_h],
        [cx - half_w / 3, cy + half_h],
    ])
    if noise_std > 0:
        pts += np.random.normal(0, noise_std, pts.shape)
    return pts


@dataclass
class SimState:
    """Mutable state for the simulator (written by the listener thread)."""
    eyes_closed: bool = False
    blink_signal: bool = False
    back_requested: bool = False
    running: bool = True


class TrackerSimulator:
    """
    Generates synthetic TrackerFrames from mouse and keyboard input.

    Replaces a camera tracker for testing without hardware.
    Uses pynput for cross-platform keyboard listening and pointer reads.
    """

    def __init__(self):
        self.state = SimState()
        self._start_time = time.time()
        self._listener = None
        self._mouse = None

    def _on_key_press(self, key):
        """Handle key press events."""
        try:
            from pynput.keyboard import Key
            if key == Key.space:
                self.state.eyes_closed = True
            elif key == Key.esc:
                self.state.running = False
        except AttributeError:
            pass

        if hasattr(key, 'char') and key.char:
            if key.char == 'k':
                self.state.blink_signal = True
            elif key.char == 'b':
                self.state.back_requested = True
            elif key.char == 'q':
                self.state.running = False

    def _on_key_release(self, key):
        """Handle key release events."""
        try:
            from pynput.keyboard import Key
            if key == Key.space:
                self.state.eyes_closed = False
        except AttributeError:
            pass

    def start(self):
        """Start keyboard listener in background thread."""
        from pynput.keyboard import Listener
        from pynput.mouse import Controller

        self._mouse = Controller()
        self._listener = Listener(
            on_press=self._on_key_press,
            on_release=self._on_key_release
        )
        self._listener.daemon = True
        self._listener.start()
        self._start_time = time.time()
        logger.info("Tracker simulator started.")
        logger.info("Mouse=gaze, Space(hold)=eyes closed, K=tracker blink, B=back, Q=quit")

    def stop(self):
        """Stop keyboard listener."""
        self.state.running = False
        if self._listener:
            self._listener.stop()
            self._listener = None
            logger.info("Tracker simulator stopped.")

    def take_back_request(self) -> bool:
        """Return and clear a pending navigate-back key press."""
        requested = self.state.back_requested
        self.state.back_requested = False
        return requested

    def generate_frame(self) -> TrackerFrame:
        """Generate one synthetic tracker frame from the current input state."""
        elapsed_ms = int((time.time() - self._start_time) * 1000)

        gaze = None
        if self._mouse is not None:
            x, y = self._mouse.position
            gaze = Sample(float(x), float(y), elapsed_ms)

        height = config.SIM_CLOSED_HEIGHT if self.state.eyes_closed else config.SIM_OPEN_HEIGHT
        eyes = EyeFeatures(
            left=synthetic_eye_landmarks(100.0, 100.0, height),
            right=synthetic_eye_landmarks(160.0, 100.0, height),
        )

        blink_signal = self.state.blink_signal
        self.state.blink_signal = False

        return TrackerFrame(
            timestamp_ms=elapsed_ms,
            gaze=gaze,
            eyes=eyes,
            blink_signal=blink_signal,
        )

    def stream(self):
        """Generator that yields simulated frames at the configured frame rate."""
        self.start()
        try:
            while self.state.running:
                yield self.generate_frame()
                time.sleep(config.FRAME_PERIOD_MS / 1000.0)
        finally:
            self.stop()
