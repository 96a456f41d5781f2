"""Command-line entry point for CMJ Kinetics.

Examples:
    cmj-kinetics compute --fps 240 --frames 120 --weight 80 --leg-length 100 --height-90 70
    cmj-kinetics compute --start 310 --end 428 --profile 3
    cmj-kinetics profile add "Alex" 98.5 71 --weight 78
    cmj-kinetics settings set-fps 240
    cmj-kinetics batch trials.csv -o results.csv
"""

from __future__ import annotations

import argparse
import csv
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy.orm import Session

from cmj_kinetics.analysis.batch import compute_batch, summarize
from cmj_kinetics.analysis.kinetics import JumpKineticsCalculator, resolve_frame_count
from cmj_kinetics.core.config import DatabaseSettings, Settings, get_settings
from cmj_kinetics.core.exceptions import CmjKineticsError
from cmj_kinetics.core.logging import get_logger, setup_logging
from cmj_kinetics.core.types import DirectFrames, FrameRange, KineticsResult
from cmj_kinetics.store.database import (
    create_db_engine,
    init_db,
    make_session_factory,
    session_scope,
)
from cmj_kinetics.store.repository import MeasurementStore, SettingsStore
from cmj_kinetics.ui.formatting import ResultFormatter, format_number, render_profiles

logger = get_logger(__name__)

RESULT_COLUMNS = [
    "time_in_flight_s",
    "time_in_flight_ms",
    "jump_height_cm",
    "takeoff_velocity_ms",
    "average_force_n",
    "relative_force",
]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmj-kinetics",
        description="Countermovement-jump kinetics from video frame counts",
    )
    parser.add_argument("--db", help="Database URL (default: DB_URL or settings)")
    parser.add_argument("--user", help="Owning identity for stored data (default: CMJ_USER)")
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")

    commands = parser.add_subparsers(dest="command", required=True)

    compute = commands.add_parser("compute", help="Compute kinetics for one jump")
    compute.add_argument("--fps", help="Frame rate (default: stored setting)")
    compute.add_argument("--frames", help="Airborne frame count")
    compute.add_argument("--start", help="Takeoff frame (range mode)")
    compute.add_argument("--end", help="Landing frame (range mode)")
    compute.add_argument("--weight", help="Body weight in kg")
    compute.add_argument("--leg-length", help="Leg length in cm")
    compute.add_argument("--height-90", help="Hip height at 90 degree knee flexion in cm")
    compute.add_argument("--profile", help="Stored measurement profile id")

    profile = commands.add_parser("profile", help="Manage measurement profiles")
    profile_cmds = profile.add_subparsers(dest="action", required=True)
    profile_cmds.add_parser("list", help="List stored profiles")
    for action in ("add", "update"):
        p = profile_cmds.add_parser(action, help=f"{action.title()} a profile")
        if action == "update":
            p.add_argument("id", help="Profile id")
        p.add_argument("name")
        p.add_argument("leg_length", help="Leg length in cm")
        p.add_argument("height_90", help="Hip height at 90 degrees in cm")
        p.add_argument("--weight", help="Body weight in kg")
    delete = profile_cmds.add_parser("delete", help="Delete a profile")
    delete.add_argument("id", help="Profile id")

    settings = commands.add_parser("settings", help="Show or change user settings")
    settings_cmds = settings.add_subparsers(dest="action", required=True)
    settings_cmds.add_parser("show", help="Show settings")
    set_fps = settings_cmds.add_parser("set-fps", help="Set or clear the default frame rate")
    set_fps.add_argument("value", nargs="?", help="Frame rate; omit to clear")

    batch = commands.add_parser("batch", help="Compute kinetics for trials in a CSV file")
    batch.add_argument("input", type=Path, help="CSV with fps and frames (or start,end)")
    batch.add_argument("-o", "--output", type=Path, help="Output CSV path")

    return parser


def run_compute(args: argparse.Namespace, settings: Settings) -> int:
    """Compute and print kinetics for one jump."""
    if args.start is not None or args.end is not None:
        frame_input = FrameRange(start_frame=args.start, end_frame=args.end)
    else:
        frame_input = DirectFrames(frame_count=args.frames)

    fps = args.fps
    profile = None
    # Only touch the store when there is something to read from it
    needs_store = (fps is None and bool(args.user)) or args.profile is not None
    if needs_store:
        with _open_session(args, settings) as db:
            if fps is None and args.user:
                fps = SettingsStore(db, args.user).get_frames_per_second()
                logger.debug("Using stored frame rate %s", fps)
            if args.profile is not None:
                profile = MeasurementStore(db, args.user).get(args.profile)

    calculator = JumpKineticsCalculator(settings.kinetics)
    resolution = resolve_frame_count(frame_input)
    result = calculator.compute_from_input(
        fps,
        frame_input,
        profile=profile,
        body_weight_kg=args.weight,
        leg_length_cm=args.leg_length,
        height_90_degree_cm=args.height_90,
    )

    formatter = ResultFormatter(settings.display)
    print(formatter.render_report(result, resolution.error))
    return 0 if result is not None else 1


def run_profile(args: argparse.Namespace, settings: Settings) -> int:
    """Profile CRUD subcommands."""
    with _open_session(args, settings) as db:
        store = MeasurementStore(db, args.user)

        if args.action == "list":
            print(render_profiles(store.list(), settings.display.decimals))
            return 0

        if args.action == "delete":
            store.delete(args.id)
            print("Measurement deleted successfully")
            return 0

        data = {
            "name": args.name,
            "legLength": args.leg_length,
            "height90Degree": args.height_90,
            "weightKg": args.weight,
        }
        if args.action == "add":
            saved = store.create(data)
            print(f"Measurement saved successfully (id {saved.id})")
        else:
            saved = store.update(args.id, data)
            print(f"Measurement updated successfully (id {saved.id})")
        return 0


def run_settings(args: argparse.Namespace, settings: Settings) -> int:
    """Settings subcommands."""
    with _open_session(args, settings) as db:
        store = SettingsStore(db, args.user)

        if args.action == "set-fps":
            store.set_frames_per_second(args.value)
            print("Settings saved successfully")

        fps = store.get_frames_per_second()
        shown = format_number(fps, settings.display.decimals) if fps is not None else "not set"
        print(f"Default frames per second: {shown}")
        return 0


def run_batch(args: argparse.Namespace, settings: Settings) -> int:
    """Compute kinetics for every trial of a CSV file."""
    with open(args.input, newline="") as f:
        trials = list(csv.DictReader(f))

    frame_counts = []
    for i, trial in enumerate(trials):
        if trial.get("frames"):
            frame_input = DirectFrames(trial["frames"])
        else:
            frame_input = FrameRange(trial.get("start"), trial.get("end"))
        resolution = resolve_frame_count(frame_input)
        if not resolution.ok:
            logger.warning("Trial %d: %s", i + 1, resolution.error.message)
        frame_counts.append(resolution.frame_count)

    batch = compute_batch(
        [t.get("fps") for t in trials],
        frame_counts,
        [t.get("weight") for t in trials],
        [t.get("leg_length") for t in trials],
        [t.get("height_90") for t in trials],
        gravity=settings.kinetics.gravity,
    )
    results = list(batch.rows())

    d = settings.display.decimals
    for i, result in enumerate(results):
        height = format_number(result.jump_height_cm, d) + " cm" if result else "insufficient input"
        print(f"Trial {i + 1}: {height}")

    summary = summarize(batch)
    print(f"\nValid trials: {summary.valid_trials}/{summary.total_trials}")
    if summary.best_height_cm is not None:
        print(f"Best height:  {format_number(summary.best_height_cm, d)} cm")
        print(f"Mean height:  {format_number(summary.mean_height_cm, d)} cm")
    if summary.best_relative_force is not None:
        print(
            "Best Frel:    "
            f"{format_number(summary.best_relative_force, settings.display.relative_force_decimals)}"
        )

    if args.output:
        write_results_csv(args.output, results)
        logger.info("Results saved to %s", args.output)

    return 0 if summary.valid_trials else 1


def write_results_csv(path: Path, results: Sequence[KineticsResult | None]) -> None:
    """Write one row per trial; absent fields are left blank."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["trial", *RESULT_COLUMNS])
        for i, result in enumerate(results):
            values = result.to_dict() if result else {}
            writer.writerow(
                [i + 1, *("" if values.get(c) is None else values[c] for c in RESULT_COLUMNS)]
            )


@contextmanager
def _open_session(args: argparse.Namespace, settings: Settings) -> Iterator[Session]:
    db_settings = settings.database
    if args.db:
        db_settings = DatabaseSettings(url=args.db, echo=db_settings.echo)

    engine = create_db_engine(db_settings)
    init_db(engine)
    try:
        with session_scope(make_session_factory(engine)) as db:
            yield db
    finally:
        engine.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code: 0 on success, 1 on insufficient input, 2 on store errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.logging, level=args.log_level)
    if args.user is None:
        args.user = settings.default_user

    handlers = {
        "compute": run_compute,
        "profile": run_profile,
        "settings": run_settings,
        "batch": run_batch,
    }

    try:
        return handlers[args.command](args, settings)
    except CmjKineticsError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
