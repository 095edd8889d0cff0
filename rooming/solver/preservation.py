"""
Room Preservation - keep prior rooms together when their occupants allow it.

A prior room is kept when at least one occupant is a stayer: someone who
asked to stay, expressed no preference, or named a roommate from the same
room. One stayer is enough to keep the room; occupants who are not stayers
go back to the general pool.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rooming.graph.preference_graph import has_preference
from rooming.models import Group, GroupKind, Profile
from rooming.solver.group_analysis import GroupAnalyzer
from rooming.solver.logging import DecisionLogger
from rooming.solver.room_labels import room_sort_key

logger = logging.getLogger(__name__)


class RoomPreservationPass:
    """Decides which prior rooms survive a re-assignment run."""

    def __init__(self, analyzer: GroupAnalyzer | None = None, decision_logger: DecisionLogger | None = None) -> None:
        self.analyzer = analyzer or GroupAnalyzer()
        self.decision_logger = decision_logger or DecisionLogger()

    def is_stayer(self, member: Profile, room: Sequence[Profile]) -> bool:
        if member.wants_to_stay or member.is_neutral:
            return True
        policy = self.analyzer.scorer.policy
        return any(has_preference(member, other, policy) for other in room if other.id != member.id)

    def preserve(
        self,
        partition: Sequence[Profile],
        population: Iterable[Profile],
    ) -> tuple[list[Group], list[Profile]]:
        """Lock stayers of each prior room into a preserved group.

        Args:
            partition: Profiles of one gender partition
            population: Everyone in the run, for ghost-reference detection

        Returns:
            (preserved groups in natural label order, profiles left to cluster)
        """
        population = list(population)
        rooms: dict[str, list[Profile]] = {}
        for profile in partition:
            if profile.prior_room:
                rooms.setdefault(profile.prior_room, []).append(profile)

        preserved: list[Group] = []
        kept_ids: set[str] = set()

        for label in sorted(rooms, key=room_sort_key):
            occupants = rooms[label]
            stayers = [m for m in occupants if self.is_stayer(m, occupants)]
            if not stayers:
                self.decision_logger.log_decision(
                    "dissolve", f"Room {label}: no occupant wants to keep it ({len(occupants)} re-pooled)"
                )
                continue

            analysis = self.analyzer.analyze(stayers, is_preserved=True, population=population)
            preserved.append(
                Group(
                    room_id=label,
                    members=stayers,
                    compatibility_score=analysis.score,
                    rationale=analysis.rationale,
                    conflicts=analysis.conflicts,
                    kind=GroupKind.PRESERVED,
                )
            )
            kept_ids.update(m.id for m in stayers)

            leavers = [m.name for m in occupants if m.id not in kept_ids]
            self.decision_logger.log_decision(
                "preserve",
                f"Room {label}: kept {len(stayers)}/{len(occupants)}"
                + (f", re-pooled {', '.join(leavers)}" if leavers else ""),
            )

        remaining = [p for p in partition if p.id not in kept_ids]
        logger.info(f"Preserved {len(preserved)} prior rooms ({len(kept_ids)} profiles), {len(remaining)} to cluster")
        return preserved, remaining
