"""
CSV file replay source for offline demo and debugging.

Reads a previously recorded tracker log and replays it as if the frames
were arriving from a live tracker.

Columns:
  timestamp                   ms (required)
  gaze_x, gaze_y              viewport pixels (optional, blank = no gaze)
  openness                    precomputed openness ratio (optional)
  blink                       1 = tracker-reported blink (optional)
  left_0_x ... left_5_y       eye landmarks (optional, all 24 or none)
  right_0_x ... right_5_y

When landmark columns are present they take precedence over openness.

Supports two modes:
  - Real-time: Sleeps to honour the recorded timestamps
  - Fast: Replays as fast as possible (for batch processing)
"""

import time
import logging

import numpy as np
import pandas as pd

from . import config
from .samples import EyeFeatures, Sample, TrackerFrame

logger = logging.getLogger(__name__)

LANDMARK_COLUMNS = {
    side: [f"{side}_{i}_{axis}"
           for i in range(config.LANDMARKS_PER_EYE) for axis in ("x", "y")]
    for side in ("left", "right")
}


def _value(row, column):
    """Float value of *column*, or None if absent/blank."""
    if column not in row.index:
        return None
    value = row[column]
    if pd.isna(value):
        return None
    return float(value)


class CSVReplaySource:
    """
    Replays tracker frames from a CSV file.

    Exposes the same stream() interface as TrackerSimulator so it can be
    used as a drop-in replacement in the pipeline.
    """

    def __init__(self, csv_path: str, realtime: bool = True, loop: bool = False):
        """
        Args:
            csv_path: Path to CSV file (see module docstring for columns)
            realtime: If True, replay at the recorded frame timing.
                      If False, yield as fast as possible.
            loop:     If True, loop the file continuously.
        """
        self.csv_path = csv_path
        self.realtime = realtime
        self.loop = loop
        self.data = None
        self._has_landmarks = False

    def load(self):
        """Load the CSV file into memory."""
        self.data = pd.read_csv(self.csv_path)

        if 'timestamp' not in self.data.columns:
            raise ValueError("CSV missing required column: timestamp")

        present = set(self.data.columns)
        landmark_cols = set(LANDMARK_COLUMNS["left"] + LANDMARK_COLUMNS["right"])
        found = landmark_cols & present
        if found and found != landmark_cols:
            raise ValueError(f"CSV has partial landmark columns, missing: "
                             f"{sorted(landmark_cols - found)}")
        self._has_landmarks = bool(found)

        if 'blink' not in self.data.columns:
            self.data['blink'] = 0

        logger.info(f"Loaded {len(self.data)} frames from {self.csv_path}")

        if 'label' in self.data.columns:
            counts = self.data['label'].value_counts()
            logger.info(f"Labels: {dict(counts)}")

    def _eyes(self, row):
        sides = {}
        for side, columns in LANDMARK_COLUMNS.items():
            values = row[columns].to_numpy(dtype=float)
            if np.isnan(values).any():
                sides[side] = None
            else:
                sides[side] = values.reshape(config.LANDMARKS_PER_EYE, 2)
        if sides["left"] is None and sides["right"] is None:
            return None
        return EyeFeatures(left=sides["left"], right=sides["right"])

    def _frame(self, row, offset_ms=0) -> TrackerFrame:
        timestamp = int(row['timestamp']) + offset_ms

        gaze = None
        gx = _value(row, 'gaze_x')
        gy = _value(row, 'gaze_y')
        if gx is not None and gy is not None:
            gaze = Sample(gx, gy, timestamp)

        eyes = self._eyes(row) if self._has_landmarks else None
        blink = _value(row, 'blink')

        return TrackerFrame(
            timestamp_ms=timestamp,
            gaze=gaze,
            eyes=eyes,
            openness=_value(row, 'openness'),
            blink_signal=bool(blink),
        )

    def stream(self):
        """
        Generator that yields TrackerFrames from the CSV data.

        On loop, timestamps keep increasing so downstream debounce and
        windowing see a continuous clock.
        """
        if self.data is None:
            self.load()

        if self.data.empty:
            return

        first_ts = int(self.data['timestamp'].iloc[0])
        span = int(self.data['timestamp'].iloc[-1]) - first_ts + int(config.FRAME_PERIOD_MS)
        offset = 0

        while True:
            start_time = time.time()

            for _, row in self.data.iterrows():
                frame = self._frame(row, offset)
                yield frame

                if self.realtime:
                    expected_time = start_time + (frame.timestamp_ms - offset - first_ts) / 1000.0
                    sleep_time = expected_time - time.time()
                    if sleep_time > 0:
                        time.sleep(sleep_time)

            if not self.loop:
                break

            offset += span
            logger.info("Replay loop: restarting from beginning")

    @property
    def duration_seconds(self) -> float:
        """Total duration of the recording in seconds."""
        if self.data is not None and not self.data.empty:
            ts = self.data['timestamp']
            return (int(ts.iloc[-1]) - int(ts.iloc[0])) / 1000.0
        return 0.0

    @property
    def num_frames(self) -> int:
        """Total number of frames."""
        if self.data is not None:
            return len(self.data)
        return 0
