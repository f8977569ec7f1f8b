#!/usr/bin/env python3
"""
Gaze Action Engine - Main Entry Point

Runs the complete pipeline: tracker source -> gaze action engine -> desktop actions.

Actions:
  Auto-scroll:    Gaze dwelling near the top/bottom edge
  Click:          Single blink (at the gaze point)
  Back:           Double blink (Alt+Left)

Usage:
    # Without a tracker (mouse = gaze, keyboard = eyes):
    python main.py --simulate --auto-scroll --single-blink --double-blink

    # Replay from CSV (offline):
    python main.py --replay ../data/raw/demo_replay.csv --dry-run
    python main.py --replay ../data/raw/demo_replay.csv --replay-fast --dry-run
"""

import argparse
import logging

from eye_scroll import config
from eye_scroll.action_dispatch import ActionDispatcher
from eye_scroll.engine import GazeActionEngine
from eye_scroll.stats import SessionStore


def setup_logging(verbose: bool = False):
    """Configure logging output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_settings_overrides(args) -> dict:
    """Collect settings given on the command line."""
    overrides = {}
    if args.auto_scroll:
        overrides["auto_scroll"] = True
    if args.single_blink:
        overrides["single_blink"] = True
    if args.double_blink:
        overrides["double_blink"] = True
    if args.gaze_sensitivity is not None:
        overrides["gaze_sensitivity"] = args.gaze_sensitivity
    if args.blink_sensitivity is not None:
        overrides["blink_sensitivity"] = args.blink_sensitivity
    return overrides


def run(source, engine, take_back_request=None):
    """Feed every frame from *source* through the engine."""
    if not engine.tracking_active:
        logging.getLogger(__name__).warning(
            "All features disabled - frames will be ignored "
            "(use --auto-scroll / --single-blink / --double-blink)")

    for frame in source.stream():
        if take_back_request and take_back_request():
            engine.trigger_navigate_back(frame.timestamp_ms)

        # Tracker is paused while every feature is off
        if engine.tracking_active:
            engine.process_frame(frame)


def main():
    parser = argparse.ArgumentParser(
        description="Gaze Action Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --simulate --auto-scroll --single-blink   # Live simulator demo
  python main.py --replay ../data/raw/demo_replay.csv --dry-run
  python main.py --replay data.csv --replay-loop --dry-run # Loop replay continuously
        """
    )
    parser.add_argument("--simulate", action="store_true",
                        help="Use mouse/keyboard simulator (no tracker needed)")
    parser.add_argument("--replay", metavar="CSV_FILE",
                        help="Replay a recorded CSV file as data source")
    parser.add_argument("--replay-fast", action="store_true",
                        help="Replay CSV at maximum speed (not real-time)")
    parser.add_argument("--replay-loop", action="store_true",
                        help="Loop CSV replay continuously")
    parser.add_argument("--dry-run", action="store_true",
                        help="Log actions instead of clicking/scrolling")
    parser.add_argument("--session", default=config.SESSION_FILE,
                        help=f"Settings/stats file (default: {config.SESSION_FILE})")
    parser.add_argument("--viewport-height", type=int, default=None,
                        help="Viewport height in pixels (default: screen height)")
    parser.add_argument("--reset", action="store_true",
                        help="Reset saved settings and stats to defaults first")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")

    # Feature toggles (saved to the session file)
    parser.add_argument("--auto-scroll", action="store_true",
                        help="Enable edge-dwell auto-scroll")
    parser.add_argument("--single-blink", action="store_true",
                        help="Enable single blink → click")
    parser.add_argument("--double-blink", action="store_true",
                        help="Enable double blink → back")
    parser.add_argument("--gaze-sensitivity", type=int, default=None,
                        help="Gaze sensitivity 1-10")
    parser.add_argument("--blink-sensitivity", type=int, default=None,
                        help="Blink sensitivity 1-10")

    # Tuning parameters
    parser.add_argument("--double-blink-window", type=int, default=None,
                        help="Override double blink window (ms)")
    parser.add_argument("--scroll-threshold", type=int, default=None,
                        help="Override base edge threshold (pixels)")

    args = parser.parse_args()
    setup_logging(args.verbose)

    if not args.simulate and not args.replay:
        parser.error("choose a data source: --simulate or --replay CSV_FILE")

    # Apply parameter overrides
    if args.double_blink_window is not None:
        config.DOUBLE_BLINK_WINDOW_MS = args.double_blink_window
        config.BLINK_HISTORY_WINDOW_MS = 2 * args.double_blink_window
    if args.scroll_threshold is not None:
        config.SCROLL_THRESHOLD = args.scroll_threshold

    store = SessionStore(args.session)
    settings, stats = store.reset() if args.reset else store.load()
    settings = settings.merged(build_settings_overrides(args))

    viewport_height = args.viewport_height
    if viewport_height is None:
        if args.dry_run:
            viewport_height = config.DEFAULT_VIEWPORT_HEIGHT
        else:
            import pyautogui
            viewport_height = pyautogui.size()[1]

    engine = GazeActionEngine(settings=settings, viewport_height=viewport_height,
                              on_stat_increment=stats.record)
    dispatcher = ActionDispatcher(gaze_point=lambda: engine.last_gaze,
                                  dry_run=args.dry_run)
    engine.on_action = dispatcher.handle_action
    engine.on_scroll_tick = dispatcher.handle_scroll

    # Create data source
    take_back_request = None
    if args.replay:
        from eye_scroll.csv_replay import CSVReplaySource
        source = CSVReplaySource(
            csv_path=args.replay,
            realtime=not args.replay_fast,
            loop=args.replay_loop
        )
        source.load()
        source_str = f"Replay: {args.replay} ({source.num_frames} frames, {source.duration_seconds:.1f}s)"
        if args.replay_fast:
            source_str += " [FAST]"
        if args.replay_loop:
            source_str += " [LOOP]"
    else:
        from eye_scroll.simulator import TrackerSimulator
        source = TrackerSimulator()
        take_back_request = source.take_back_request
        source_str = "Simulator"

    print("=" * 60)
    print("  Gaze Action Engine")
    print("=" * 60)
    print(f"  Source:   {source_str}")
    print(f"  Viewport: {viewport_height}px high")
    print()
    print("  Features:")
    print(f"    Auto-scroll:   {'on' if settings.auto_scroll else 'off'} "
          f"(gaze sensitivity {settings.gaze_sensitivity})")
    print(f"    Single blink:  {'on' if settings.single_blink else 'off'} → click "
          f"(blink sensitivity {settings.blink_sensitivity})")
    print(f"    Double blink:  {'on' if settings.double_blink else 'off'} → back "
          f"(within {config.DOUBLE_BLINK_WINDOW_MS}ms)")
    print()

    if args.simulate:
        print("  Simulator controls:")
        print("    Mouse pointer   → gaze (top/bottom edge scrolls)")
        print("    Space (hold)    → eyes closed (blink)")
        print("    K               → tracker-reported blink")
        print("    B               → navigate back")
        print("    Q / Escape      → quit")
        print()

    print("  Press Ctrl+C to stop.")
    print("=" * 60)

    try:
        run(source, engine, take_back_request)
    except KeyboardInterrupt:
        print("\nStopped by user.")
    finally:
        if hasattr(source, 'stop'):
            source.stop()
        store.save(settings, stats)
        print(f"  Blinks: {stats.blink_count}  Scroll ticks: {stats.scroll_count}  "
              f"Back: {stats.navigation_count}  "
              f"Session: {stats.session_duration():.0f}s")


if __name__ == "__main__":
    main()
