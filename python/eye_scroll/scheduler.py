"""
Fixed-rate tick scheduling driven by stream time.

The scroll loop needs a tick every SCROLL_TICK_MS. Instead of a wall-clock
timer, the engine advances a TickScheduler with each frame's timestamp,
so replay, simulator and tests all see the same deterministic cadence.
"""

from . import config


class TickScheduler:
    """
    Fires at most one tick per call to due().

    After a stall longer than one period (dropped frames, paused replay)
    the schedule restarts from the current time instead of firing a burst
    of catch-up ticks on stale gaze data.
    """

    def __init__(self, period_ms=None):
        self.period_ms = period_ms or config.SCROLL_TICK_MS
        self.next_tick_ms = None

    def due(self, now_ms) -> bool:
        """Return True if a tick should run at *now_ms*."""
        if self.next_tick_ms is None:
            self.next_tick_ms = now_ms + self.period_ms
            return False

        if now_ms < self.next_tick_ms:
            return False

        if now_ms - self.next_tick_ms >= self.period_ms:
            self.next_tick_ms = now_ms + self.period_ms
        else:
            self.next_tick_ms += self.period_ms
        return True

    def reset(self):
        self.next_tick_ms = None
