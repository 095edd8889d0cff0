"""
Roster - official student list, prior-room merge and assignment export.

The roster is the authoritative list of who lives where. Questionnaire
profiles may be missing a prior room or a gender, and some roster students
never answer the questionnaire at all.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import IO, Any

from pydantic import BaseModel, Field, field_validator

from rooming.models import Group, Profile

logger = logging.getLogger(__name__)

ASSIGNMENT_COLUMNS = [
    "room",
    "name",
    "gender",
    "prior_room",
    "archetype",
    "score",
    "rationale",
    "conflicts",
]

MISSING_ROOM = ""
MISSING_NOTE = "No questionnaire submitted"


class RosterEntry(BaseModel):
    """One row of the official roster."""

    name: str = Field(min_length=1)
    gender: str | None = None
    prior_room: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("gender", "prior_room", mode="before")
    @classmethod
    def _squash_whitespace(cls, value: Any) -> Any:
        # Spreadsheet cells often carry stray or invisible spaces ("1 01")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            squashed = "".join(value.split())
            return squashed or None
        return value


def _roster_key(name: str) -> str:
    return name.strip().lower()


def merge_prior_rooms(profiles: Iterable[Profile], roster: Iterable[RosterEntry]) -> list[Profile]:
    """
    Fill prior room and gender from the roster.

    Profiles are matched to roster entries by trimmed name. The roster room
    wins over the profile's own prior room; the roster gender is only used
    when the profile has none.

    Args:
        profiles: Profiles from the questionnaire
        roster: Official roster entries

    Returns:
        New Profile objects in input order
    """
    by_name: dict[str, RosterEntry] = {}
    for entry in roster:
        by_name.setdefault(entry.name.strip(), entry)

    merged = []
    matched = 0
    for profile in profiles:
        entry = by_name.get(profile.name.strip())
        if entry is None:
            merged.append(profile)
            continue
        matched += 1
        merged.append(
            profile.model_copy(
                update={
                    "prior_room": entry.prior_room or profile.prior_room,
                    "gender": profile.gender or entry.gender,
                }
            )
        )

    logger.info(f"Merged roster data into {matched}/{len(merged)} profiles")
    return merged


def find_missing(roster: Iterable[RosterEntry], profiles: Iterable[Profile]) -> list[RosterEntry]:
    """Roster entries with no matching profile (trimmed, case-insensitive name)."""
    taken = {_roster_key(p.name) for p in profiles}
    missing = [entry for entry in roster if _roster_key(entry.name) not in taken]
    if missing:
        logger.warning(f"{len(missing)} roster students have not submitted a questionnaire")
    return missing


def build_assignment_rows(
    groups: Sequence[Group],
    missing: Iterable[RosterEntry] = (),
) -> list[dict[str, Any]]:
    """Flatten groups into one row per member, then one row per missing student."""
    rows: list[dict[str, Any]] = []
    for group in groups:
        for member in group.members:
            rows.append(
                {
                    "room": group.room_id,
                    "name": member.name,
                    "gender": member.gender or "-",
                    "prior_room": member.prior_room or "-",
                    "archetype": member.archetype.value if member.archetype else "-",
                    "score": group.compatibility_score,
                    "rationale": group.rationale,
                    "conflicts": group.conflict_notes,
                }
            )

    for entry in missing:
        rows.append(
            {
                "room": MISSING_ROOM,
                "name": entry.name,
                "gender": entry.gender or "-",
                "prior_room": entry.prior_room or "-",
                "archetype": "-",
                "score": 0,
                "rationale": MISSING_NOTE,
                "conflicts": "",
            }
        )
    return rows


def write_assignment_csv(
    groups: Sequence[Group],
    destination: str | Path | IO[str],
    missing: Iterable[RosterEntry] = (),
) -> int:
    """
    Write the assignment as CSV.

    Args:
        groups: Rooms in output order
        destination: File path or an open text stream
        missing: Roster students without a profile, appended at the end

    Returns:
        Number of data rows written
    """
    rows = build_assignment_rows(groups, missing)

    if isinstance(destination, (str, Path)):
        with open(destination, "w", newline="", encoding="utf-8") as f:
            _write_rows(f, rows)
        logger.info(f"Wrote {len(rows)} assignment rows to {destination}")
    else:
        _write_rows(destination, rows)
    return len(rows)


def _write_rows(stream: IO[str], rows: list[dict[str, Any]]) -> None:
    writer = csv.DictWriter(stream, fieldnames=ASSIGNMENT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)


def load_roster(records: Iterable[dict[str, Any]]) -> list[RosterEntry]:
    """Build roster entries from raw records, skipping rows without a name."""
    entries = []
    for record in records:
        name = str(record.get("name") or "").strip()
        if not name:
            continue
        entries.append(
            RosterEntry(
                name=name,
                gender=record.get("gender"),
                prior_room=record.get("prior_room"),
            )
        )
    return entries
