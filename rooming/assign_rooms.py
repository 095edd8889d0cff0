#!/usr/bin/env python3
"""Assign Rooms - CLI entry point for room assignment and final-room validation.

Reads profiles from JSON, optionally merges an official roster, and writes
the resulting rooms as CSV (to a file or stdout).

Usage:
    python -m rooming.assign_rooms profiles.json
    python -m rooming.assign_rooms profiles.json --roster roster.json --output rooms.csv
    python -m rooming.assign_rooms profiles.json --validate-final
    python -m rooming.assign_rooms profiles.json --set analysis.low_score_threshold=55 --debug
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rooming.config import ConfigError, ConfigLoader
from rooming.logging_config import configure_logging, get_logger
from rooming.metrics.population import summarize_population
from rooming.models import Group, Profile
from rooming.room_validator import FinalAssignmentValidator
from rooming.roster import find_missing, load_roster, merge_prior_rooms, write_assignment_csv
from rooming.solver.room_assigner import RoomAssigner

logger = get_logger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Assign students to dormitory rooms")

    parser.add_argument("profiles", type=str, help="JSON file with a list of profiles")

    parser.add_argument("--roster", type=str, help="JSON file with the official roster (name, gender, prior_room)")

    parser.add_argument("--output", type=str, help="Write the assignment CSV to this file instead of stdout")

    parser.add_argument(
        "--validate-final",
        action="store_true",
        help="Analyze the final_room tags instead of computing a new assignment",
    )

    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a configuration key (repeatable)",
    )

    parser.add_argument("--stats-output", type=str, help="Write JSON run statistics to this file")

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(args)


def parse_overrides(pairs: list[str]) -> dict[str, str]:
    """Turn KEY=VALUE strings into a config override mapping."""
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid override '{pair}', expected KEY=VALUE")
        overrides[key.strip()] = value.strip()
    return overrides


def load_json_records(path: str, key: str) -> list[dict[str, Any]]:
    """Load a JSON list, or the list stored under ``key`` of a JSON object."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of {key}")
    return data


def load_profiles(path: str) -> list[Profile]:
    return [Profile.model_validate(record) for record in load_json_records(path, "profiles")]


def write_stats_output(stats_file: str, stats: dict[str, Any], success: bool) -> None:
    """Write run statistics as JSON."""
    with open(stats_file, "w") as f:
        json.dump({"success": success, **stats}, f, indent=2, default=str)
    logger.info(f"Wrote stats to {stats_file}")


def print_summary(groups: list[Group], missing_count: int) -> None:
    """Print a short human-readable summary to stderr."""
    with_conflicts = sum(1 for g in groups if g.conflicts)
    profiles = sum(g.size for g in groups)
    print(f"\nRooms: {len(groups)} ({profiles} students)", file=sys.stderr)
    print(f"  - Rooms with conflict notes: {with_conflicts}", file=sys.stderr)
    if groups:
        avg = sum(g.compatibility_score for g in groups) / len(groups)
        print(f"  - Average compatibility: {avg:.1f}", file=sys.stderr)
    if missing_count:
        print(f"  - Roster students without a questionnaire: {missing_count}", file=sys.stderr)


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Execute one assignment or validation run and return its statistics."""
    config = ConfigLoader(overrides=parse_overrides(args.overrides))
    config.validate_all()

    profiles = load_profiles(args.profiles)
    logger.info(f"Loaded {len(profiles)} profiles from {args.profiles}")

    missing = []
    if args.roster:
        roster = load_roster(load_json_records(args.roster, "roster"))
        profiles = merge_prior_rooms(profiles, roster)
        missing = find_missing(roster, profiles)

    stats: dict[str, Any] = {"population": summarize_population(profiles).to_dict()}

    with ConfigLoader.use(config):
        if args.validate_final:
            validator = FinalAssignmentValidator(config)
            groups = validator.validate(profiles)
            stats["validation"] = validator.summarize(groups).model_dump()
        else:
            assigner = RoomAssigner(config, debug=args.debug)
            groups = assigner.assign(profiles)
            stats["decisions"] = assigner.decision_logger.decision_counts()
            stats["data_warnings"] = assigner.decision_logger.data_warnings

    if args.output:
        write_assignment_csv(groups, Path(args.output), missing)
    else:
        write_assignment_csv(groups, sys.stdout, missing)

    stats["rooms"] = len(groups)
    stats["missing"] = [entry.name for entry in missing]
    print_summary(groups, len(missing))
    return stats


def main() -> None:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.debug else None
    configure_logging("assign" if not args.validate_final else "validate", log_level)

    try:
        stats = run(args)
        if args.stats_output:
            write_stats_output(args.stats_output, stats, success=True)
    except (OSError, ValueError, ConfigError, ValidationError) as e:
        logger.error(f"Fatal error: {e}")
        if args.stats_output:
            write_stats_output(args.stats_output, {"error": str(e)}, success=False)
        sys.exit(1)


if __name__ == "__main__":
    main()
