"""
Final assignment validation - analyze manually authored rooms without moving anyone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from rooming.config import ConfigLoader
from rooming.graph.preference_graph import PreferenceGraph, dangling_targets
from rooming.models import Gender, Group, GroupKind, Profile
from rooming.solver.auditor import GroupAuditor
from rooming.solver.group_analysis import GroupAnalyzer, ghost_note
from rooming.solver.room_labels import room_sort_key

logger = logging.getLogger(__name__)

UNASSIGNED_RATIONALE = "No final room assigned yet."


class ValidationStatistics(BaseModel):
    """Overall statistics for a set of validated rooms."""

    total_profiles: int = 0
    assigned_profiles: int = 0
    unassigned_profiles: int = 0
    room_count: int = 0
    rooms_with_conflicts: int = 0
    mixed_gender_rooms: int = 0
    low_score_rooms: int = 0
    average_score: float = 0.0


class FinalAssignmentValidator:
    """Validates human-authored final rooms.

    Groups profiles strictly by their final room tag and explains each room
    with the same scoring and conflict annotation as the assignment run.
    Output is deterministic: rooms in natural label order, the unassigned
    bucket last.
    """

    def __init__(self, config: ConfigLoader | None = None) -> None:
        self.config = config or ConfigLoader.get_instance()
        self.analyzer = GroupAnalyzer.from_config(self.config)

    def validate(self, profiles: Iterable[Profile]) -> list[Group]:
        """
        Analyze the final-room assignment of every profile.

        Args:
            profiles: All profiles, with or without a final room

        Returns:
            One group per final room, plus an unassigned bucket (score 0)
            when some profiles have no final room
        """
        population = list(profiles)
        rooms: dict[str, list[Profile]] = {}
        unassigned: list[Profile] = []
        for profile in population:
            if profile.final_room:
                rooms.setdefault(profile.final_room, []).append(profile)
            else:
                unassigned.append(profile)

        groups: list[Group] = []
        for label in sorted(rooms, key=room_sort_key):
            members = rooms[label]
            analysis = self.analyzer.analyze(members, is_preserved=False, population=population)
            groups.append(
                Group(
                    room_id=label,
                    members=members,
                    compatibility_score=analysis.score,
                    rationale=analysis.rationale,
                    conflicts=self._gender_issues(members) + analysis.conflicts,
                    kind=GroupKind.FINAL,
                )
            )

        if unassigned:
            policy = self.analyzer.scorer.policy
            ghosts = [ghost_note(p, name) for p in unassigned for name in dangling_targets(p, population, policy)]
            groups.append(
                Group(
                    room_id=self.config.get_str("validation.unassigned_label"),
                    members=unassigned,
                    compatibility_score=0,
                    rationale=UNASSIGNED_RATIONALE,
                    conflicts=ghosts,
                    kind=GroupKind.UNASSIGNED,
                )
            )
            logger.warning(f"{len(unassigned)} profiles have no final room")

        graph = PreferenceGraph.from_config(population, self.config)
        return GroupAuditor(graph).audit(groups)

    def _gender_issues(self, members: Sequence[Profile]) -> list[str]:
        issues = []
        genders = {m.normalized_gender for m in members}
        known = sorted(g.value for g in genders if g != Gender.UNKNOWN)
        if len(known) > 1:
            issues.append(f"Mixed genders in one room ({', '.join(known)})")
        missing = [m.name for m in members if m.normalized_gender == Gender.UNKNOWN]
        if missing:
            issues.append(f"Gender missing for {', '.join(missing)}")
        return issues

    def summarize(self, groups: Sequence[Group]) -> ValidationStatistics:
        """Compute overall statistics for validated rooms."""
        stats = ValidationStatistics()
        rooms = [g for g in groups if g.kind != GroupKind.UNASSIGNED]
        threshold = self.analyzer.low_score_threshold

        stats.total_profiles = sum(g.size for g in groups)
        stats.unassigned_profiles = sum(g.size for g in groups if g.kind == GroupKind.UNASSIGNED)
        stats.assigned_profiles = stats.total_profiles - stats.unassigned_profiles
        stats.room_count = len(rooms)
        stats.rooms_with_conflicts = sum(1 for g in rooms if g.conflicts)
        stats.mixed_gender_rooms = sum(1 for g in rooms if any(c.startswith("Mixed genders") for c in g.conflicts))
        stats.low_score_rooms = sum(1 for g in rooms if g.compatibility_score < threshold)
        if rooms:
            stats.average_score = round(sum(g.compatibility_score for g in rooms) / len(rooms), 1)
        return stats


def validate_final_rooms(profiles: Iterable[Profile], config: ConfigLoader | None = None) -> list[Group]:
    """Convenience wrapper around FinalAssignmentValidator.validate."""
    return FinalAssignmentValidator(config=config).validate(profiles)
