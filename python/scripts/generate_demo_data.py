#!/usr/bin/env python3
"""
Synthetic Tracker Replay Generator

Generates realistic time-series gaze + eye-landmark data for offline
development and demo without a camera tracker. Produces labelled CSV
files that can be replayed through the full pipeline:

    python main.py --replay ../data/raw/demo_replay.csv --dry-run

Frame model (30 Hz):
  gaze_x, gaze_y:      viewport pixels with jitter
  left_*/right_*:      6 landmarks per eye; eye height drives openness
                       open ~10/30 = 0.33, closed ~1/30 = 0.03

Event classes:
  idle:          gaze in the middle of the viewport, eyes open
  blink:         eyes closed for 100-200ms
  double_blink:  two blinks ~430ms apart
  long_blink:    eyes closed for ~600ms (one blink, not two)
  dwell_top:     gaze near the top edge for 1-2s (scroll up)
  dwell_bottom:  gaze near the bottom edge for 1-2s (scroll down)
  tracker_blink: eyes open but tracker reports a blink (blink=1)

Usage:
    python -m scripts.generate_demo_data
    python -m scripts.generate_demo_data --sessions 3 --output data/raw
"""

import argparse
import os
import sys

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eye_scroll import config
from eye_scroll.csv_replay import LANDMARK_COLUMNS

# Sampling parameters
FS = config.FRAME_RATE            # 30 Hz
DT_MS = config.FRAME_PERIOD_MS    # ~33ms
VIEWPORT_W = 1280
VIEWPORT_H = config.DEFAULT_VIEWPORT_HEIGHT

LEFT_EYE_CENTER = (100.0, 100.0)
RIGHT_EYE_CENTER = (160.0, 100.0)

# Landmark offsets as fractions of (half width, half height):
# [corner, upper, upper, corner, lower, lower]
_OFFSETS = np.array([
    [-1.0, 0.0],
    [-1 / 3, -1.0],
    [1 / 3, -1.0],
    [1.0, 0.0],
    [1 / 3, 1.0],
    [-1 / 3, 1.0],
])


def _noise(n, std):
    """Gaussian noise."""
    return np.random.normal(0, std, n)


def _frames(duration_s: float) -> int:
    return max(1, int(round(duration_s * FS)))


def _segment(n, gaze_y, height, label, blink=None):
    gaze_x = np.full(n, VIEWPORT_W / 2) + _noise(n, config.SIM_GAZE_NOISE_STD)
    gaze_y = np.asarray(gaze_y, dtype=float) + _noise(n, config.SIM_GAZE_NOISE_STD)
    height = np.broadcast_to(np.asarray(height, dtype=float), (n,)).copy()
    blink = np.zeros(n, dtype=int) if blink is None else blink
    return gaze_x, gaze_y, height, blink, [label] * n


def generate_idle(duration_s: float):
    """Gaze around the middle of the page, eyes open."""
    n = _frames(duration_s)
    return _segment(n, np.full(n, VIEWPORT_H / 2), config.SIM_OPEN_HEIGHT, 'idle')


def _closure(closed_s: float) -> np.ndarray:
    """Eye height profile: open → closed for closed_s → open."""
    n_closed = _frames(closed_s)
    edge = np.array([config.SIM_OPEN_HEIGHT / 2])
    return np.concatenate([
        np.full(2, config.SIM_OPEN_HEIGHT),
        edge,
        np.full(n_closed, config.SIM_CLOSED_HEIGHT),
        edge,
        np.full(2, config.SIM_OPEN_HEIGHT),
    ])


def generate_blink(closed_s: float = 0.15, label: str = 'blink'):
    """One blink with the eyes shut for closed_s."""
    height = _closure(closed_s)
    n = len(height)
    return _segment(n, np.full(n, VIEWPORT_H / 2), height, label)


def generate_double_blink(gap_s: float = 0.3):
    """Two quick blinks separated by ~gap_s of open eyes."""
    first = _closure(0.12)
    gap = np.full(max(0, _frames(gap_s) - len(first) + 4), config.SIM_OPEN_HEIGHT)
    height = np.concatenate([first, gap, _closure(0.12)])
    n = len(height)
    return _segment(n, np.full(n, VIEWPORT_H / 2), height, 'double_blink')


def generate_long_blink(closed_s: float = 0.6):
    """Eyes held shut; still counts as a single blink."""
    return generate_blink(closed_s, label='long_blink')


def generate_dwell(edge: str, duration_s: float):
    """Gaze resting near the top or bottom edge."""
    n = _frames(duration_s)
    margin = config.SCROLL_THRESHOLD * 0.4
    y = margin if edge == 'top' else VIEWPORT_H - margin
    return _segment(n, np.full(n, y), config.SIM_OPEN_HEIGHT, f'dwell_{edge}')


def generate_tracker_blink():
    """Tracker-reported blink on a single frame, eyes stay open."""
    n = _frames(0.2)
    blink = np.zeros(n, dtype=int)
    blink[n // 2] = 1
    return _segment(n, np.full(n, VIEWPORT_H / 2), config.SIM_OPEN_HEIGHT,
                    'tracker_blink', blink=blink)


def _landmark_columns(height: np.ndarray) -> dict:
    """Expand per-frame eye heights into the 24 landmark columns."""
    n = len(height)
    half_w = config.SIM_EYE_WIDTH / 2.0
    columns = {}
    for side, (cx, cy) in (('left', LEFT_EYE_CENTER), ('right', RIGHT_EYE_CENTER)):
        names = LANDMARK_COLUMNS[side]
        for i, (fx, fy) in enumerate(_OFFSETS):
            xs = cx + fx * half_w + _noise(n, config.SIM_OPENNESS_NOISE_STD)
            ys = cy + fy * height / 2.0 + _noise(n, config.SIM_OPENNESS_NOISE_STD)
            columns[names[2 * i]] = np.round(xs, 2)
            columns[names[2 * i + 1]] = np.round(ys, 2)
    return columns


def generate_session(session_id: int = 0, events_per_class: int = 10) -> pd.DataFrame:
    """
    Generate one complete recording session with labelled events.

    Structure: idle gaps between events, randomized event order.
    """
    rng = np.random.default_rng(42 + session_id)

    segments = [generate_idle(2.0)]

    event_generators = {
        'blink': generate_blink,
        'double_blink': generate_double_blink,
        'long_blink': generate_long_blink,
        'dwell_top': lambda: generate_dwell('top', 1.0 + rng.random()),
        'dwell_bottom': lambda: generate_dwell('bottom', 1.0 + rng.random()),
        'tracker_blink': generate_tracker_blink,
    }

    events = []
    for event_name in event_generators:
        events.extend([event_name] * events_per_class)
    rng.shuffle(events)

    for event_name in events:
        segments.append(event_generators[event_name]())
        # Idle gap (1.2-2.5s) keeps events outside the double-blink window
        segments.append(generate_idle(1.2 + rng.random() * 1.3))

    segments.append(generate_idle(2.0))

    gaze_x = np.concatenate([s[0] for s in segments])
    gaze_y = np.concatenate([s[1] for s in segments])
    height = np.concatenate([s[2] for s in segments])
    blink = np.concatenate([s[3] for s in segments])
    labels = [label for s in segments for label in s[4]]

    n = len(gaze_x)
    timestamps = np.round(np.arange(n) * DT_MS).astype(int)

    df = pd.DataFrame({
        'timestamp': timestamps,
        'gaze_x': np.round(np.clip(gaze_x, 0, VIEWPORT_W), 1),
        'gaze_y': np.round(np.clip(gaze_y, 0, VIEWPORT_H), 1),
        'blink': blink,
        **_landmark_columns(height),
        'label': labels,
    })

    return df


def main():
    parser = argparse.ArgumentParser(
        description="Generate synthetic tracker replay data"
    )
    parser.add_argument("--sessions", type=int, default=1,
                        help="Number of sessions to generate (default: 1)")
    parser.add_argument("--events-per-class", type=int, default=10,
                        help="Events per class per session (default: 10)")
    parser.add_argument("--output", default=config.DEMO_OUTPUT_DIR,
                        help=f"Output directory (default: {config.DEMO_OUTPUT_DIR})")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed (default: 42)")
    args = parser.parse_args()

    np.random.seed(args.seed)
    os.makedirs(args.output, exist_ok=True)

    print("=" * 60)
    print("  Synthetic Tracker Data Generator")
    print("=" * 60)
    print(f"  Sessions:         {args.sessions}")
    print(f"  Events per class: {args.events_per_class}")
    print(f"  Output:           {args.output}")
    print(f"  Viewport:         {VIEWPORT_W}x{VIEWPORT_H} @ {FS} Hz")
    print()

    all_files = []
    for i in range(args.sessions):
        df = generate_session(session_id=i, events_per_class=args.events_per_class)
        filename = f"demo_session_{i:02d}.csv"
        filepath = os.path.join(args.output, filename)
        df.to_csv(filepath, index=False)
        all_files.append(filepath)

        print(f"  Session {i}: {len(df):>6} frames ({len(df) / FS:.1f}s) -> {filename}")
        counts = df['label'].value_counts()
        for label in sorted(counts.index):
            print(f"    {label:>15}: {counts[label]:>5}")

    replay_df = generate_session(session_id=99, events_per_class=5)
    replay_path = os.path.join(args.output, "demo_replay.csv")
    replay_df.to_csv(replay_path, index=False)
    print(f"\n  Replay file (with labels for reference): {replay_path}")
    print(f"  ({len(replay_df)} frames, {len(replay_df) / FS:.1f}s)")

    print("\nDone! Next step:")
    print(f"  cd python && python main.py --replay ../{replay_path} "
          f"--auto-scroll --single-blink --double-blink --dry-run")

    return all_files


if __name__ == "__main__":
    main()
