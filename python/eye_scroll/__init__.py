"""
Gaze Action Engine

Turns a stream of gaze samples and eye-landmark frames from an external
tracker into edge-dwell auto-scroll and blink-driven click / back actions.
"""

__version__ = "1.0.0"
