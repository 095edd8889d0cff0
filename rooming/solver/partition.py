"""
Gender Partition - split the population before any matching happens.

CRITICAL CONSTRAINT:
- Male and Female profiles are clustered in separate partitions
- Profiles without a recognizable gender are never merged with either; they
  are isolated in one flagged data-incomplete group for human attention
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rooming.graph.name_matching import NameMatchPolicy, loose_name_match
from rooming.graph.preference_graph import dangling_targets
from rooming.models import Gender, Group, GroupKind, Profile
from rooming.solver.group_analysis import ghost_note

logger = logging.getLogger(__name__)

INCOMPLETE_RATIONALE = "Missing data: gender is missing or unrecognized, so these profiles were not matched."


def partition_by_gender(profiles: Iterable[Profile]) -> dict[Gender, list[Profile]]:
    """Split profiles by normalized gender, preserving input order within each partition."""
    partitions: dict[Gender, list[Profile]] = {gender: [] for gender in Gender}
    for profile in profiles:
        partitions[profile.normalized_gender].append(profile)
    _log_gender_statistics(partitions)
    return partitions


def build_incomplete_group(
    profiles: Sequence[Profile],
    label: str,
    population: Iterable[Profile],
    policy: NameMatchPolicy = loose_name_match,
) -> Group:
    """Collect unknown-gender profiles into one group with a fixed score of 0."""
    population = list(population)
    conflicts = [f"Needs a gender before placement: {', '.join(p.name for p in profiles)}"]
    for profile in profiles:
        for requested in dangling_targets(profile, population, policy):
            conflicts.append(ghost_note(profile, requested))
    return Group(
        room_id=label,
        members=list(profiles),
        compatibility_score=0,
        rationale=INCOMPLETE_RATIONALE,
        conflicts=conflicts,
        kind=GroupKind.INCOMPLETE_DATA,
    )


def _log_gender_statistics(partitions: dict[Gender, list[Profile]]) -> None:
    """Log partition sizes for debugging."""
    logger.info(
        f"Profiles by gender - Male: {len(partitions[Gender.MALE])}, "
        f"Female: {len(partitions[Gender.FEMALE])}, Unknown: {len(partitions[Gender.UNKNOWN])}"
    )
    for profile in partitions[Gender.UNKNOWN]:
        logger.warning(f"Profile {profile.id} ({profile.name}) has no usable gender data ({profile.gender!r})")
