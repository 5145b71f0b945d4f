"""Command-line interface: run one segment and print its samples."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from typing import TextIO

import planar_traj.config as cfg
from planar_traj.config import DT_S, LOG_LEVEL_DEFAULT, STATE_FIELDS, TRACE
from planar_traj.motion.segments import PivotSegment, Segment, StraightSegment
from planar_traj.protocol.types import State
from planar_traj.protocol.wire import state_to_array, state_to_json
from planar_traj.utils.errors import InvalidDurationError

logger = logging.getLogger("planar_traj.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planar-traj",
        description="Planar vehicle setpoint generator",
        allow_abbrev=False,
    )

    # Verbose logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Enable quiet logging (WARNING level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "jsonl"],
        default="csv",
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "--dt", type=float, default=DT_S, help=f"Time step in seconds (default: {DT_S})"
    )

    # Initial state
    for name in STATE_FIELDS:
        parser.add_argument(
            f"--{name}", type=float, default=0.0, help=f"Initial {name} (default: 0)"
        )

    sub = parser.add_subparsers(dest="segment", required=True)

    straight = sub.add_parser(
        "straight", help="Straight run with a speed ramp", allow_abbrev=False
    )
    straight.add_argument("--distance", type=float, required=True)
    straight.add_argument("--final-velocity", type=float, required=True)

    pivot = sub.add_parser(
        "pivot", help="In-place turn on a cycloidal ramp", allow_abbrev=False
    )
    pivot.add_argument(
        "--angle", type=float, required=True, help="Heading change in radians"
    )
    pivot.add_argument("--duration", type=float, required=True, help="Seconds")

    return parser


def _resolve_log_level(args: argparse.Namespace) -> int:
    # Precedence:
    #   1) Explicit --log-level
    #   2) Verbose / quiet flags
    #   3) Environment-driven TRACE (PLANAR_TRAJ_TRACE=1 via TRACE_ENABLED)
    #   4) Default
    if args.log_level:
        if args.log_level == "TRACE":
            cfg.TRACE_ENABLED = True
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        cfg.TRACE_ENABLED = True
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    if cfg.TRACE_ENABLED:
        return TRACE
    return getattr(logging, LOG_LEVEL_DEFAULT)


def _build_segment(args: argparse.Namespace) -> Segment:
    state = State(*(getattr(args, name) for name in STATE_FIELDS))
    if args.segment == "straight":
        return StraightSegment(state, args.distance, args.final_velocity, dt=args.dt)
    return PivotSegment(state, args.angle, args.duration, dt=args.dt)


def write_samples(segment: Segment, fmt: str, out: TextIO) -> int:
    """Step ``segment`` to completion, writing each sample. Returns the count."""
    count = 0
    if fmt == "csv":
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(("step", *STATE_FIELDS))
        for count, result in enumerate(segment, start=1):
            writer.writerow((count - 1, *state_to_array(result.state).tolist()))
    else:
        for count, result in enumerate(segment, start=1):
            out.write(state_to_json(result.state).decode())
            out.write("\n")
    return count


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=_resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        segment = _build_segment(args)
    except InvalidDurationError as e:
        logger.error("Invalid segment parameters: %s", e)
        return 2

    count = write_samples(segment, args.format, sys.stdout)
    logger.info("Wrote %d %s samples", count, args.segment)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
