"""
Configuration parameters for the gaze action engine.

All tunable parameters are centralized here for easy adjustment.

Input model (supplied by an external tracker, e.g. a webcam face tracker):
  Gaze:      (x, y) in viewport pixels, origin top-left, y grows downward
  Eye shape: 6 landmarks per eye in a fixed anatomical order

        p1  p2
    p0          p3      p0/p3 = corners
        p5  p4          p1/p2 = upper lid, p4/p5 = lower lid
"""

import os as _os

# --- Sensitivity (user settings, dimensionless) ---
SENSITIVITY_MIN = 1
SENSITIVITY_MAX = 10
DEFAULT_SENSITIVITY = 5

# --- Eye Openness (landmark geometry) ---
LANDMARKS_PER_EYE = 6
DEFAULT_OPENNESS = 0.3        # Returned for degenerate/malformed landmarks

# --- Blink Detection (openness ratio) ---
# Threshold = max(EAR_THRESH_FLOOR, EAR_THRESH_BASE - sensitivity * EAR_THRESH_STEP)
EAR_THRESH_BASE = 0.3
EAR_THRESH_STEP = 0.02        # Higher sensitivity → lower threshold → easier trigger
EAR_THRESH_FLOOR = 0.1
EAR_CONSEC_FRAMES = 2         # Closed frames required to confirm a blink
MIN_BLINK_INTERVAL_MS = 200   # Debounce between confirmed blinks

# --- Double Blink → Navigate Back ---
DOUBLE_BLINK_WINDOW_MS = 500  # Max gap between two blinks of one gesture
BLINK_HISTORY_WINDOW_MS = 2 * DOUBLE_BLINK_WINDOW_MS

# --- Edge-Dwell Auto-Scroll ---
SCROLL_THRESHOLD = 100        # Pixels from top/bottom edge at sensitivity 5
SCROLL_SPEED = 2              # Pixels per tick at sensitivity 2
SCROLL_TICK_MS = 50           # Scroll loop period
SCROLL_THRESHOLD_SCALE = 5.0  # threshold = SCROLL_THRESHOLD * (sensitivity / 5)
SCROLL_SPEED_SCALE = 2.0      # amount = SCROLL_SPEED * (sensitivity / 2)

# --- Viewport ---
DEFAULT_VIEWPORT_HEIGHT = 800  # Used by replay when no screen is available

# --- Tracker Frames ---
FRAME_RATE = 30               # Hz (typical webcam tracker)
FRAME_PERIOD_MS = 1000.0 / FRAME_RATE

# --- Session Storage ---
_PACKAGE_DIR = _os.path.dirname(_os.path.dirname(_os.path.abspath(__file__)))
SESSION_FILE = _os.path.join(_PACKAGE_DIR, "data", "session.json")

# --- Simulator ---
SIM_EYE_WIDTH = 30.0          # Synthetic landmark eye width (pixels)
SIM_OPEN_HEIGHT = 10.0        # Synthetic open-eye height → ratio 0.33
SIM_CLOSED_HEIGHT = 1.0       # Synthetic closed-eye height → ratio 0.03

# --- Demo Data ---
DEMO_OUTPUT_DIR = "data/raw"
SIM_GAZE_NOISE_STD = 8.0      # Gaze jitter (pixels)
SIM_OPENNESS_NOISE_STD = 0.3  # Landmark jitter (pixels)
