"""
Group Auditor - global consistency check over a complete set of rooms.

Preservation and clustering decide locally, one partition and one pass at a
time, so they cannot see a mutual pair split across passes (one kept in an
old room, the other clustered elsewhere). The auditor looks at the final
room of every profile and annotates those splits.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rooming.graph.preference_graph import PreferenceGraph
from rooming.models import Group
from rooming.solver.logging import DecisionLogger

logger = logging.getLogger(__name__)


class GroupAuditor:
    """Annotates split mutual requests and unmet stay requests."""

    def __init__(self, graph: PreferenceGraph, decision_logger: DecisionLogger | None = None) -> None:
        self.graph = graph
        self.decision_logger = decision_logger or DecisionLogger()

    def audit(self, groups: Sequence[Group]) -> list[Group]:
        """Return copies of the groups with cross-room conflict notes appended.

        Args:
            groups: Every room of the run (preserved, new, and data-incomplete)

        Returns:
            New Group objects in the same order; the inputs are not modified
        """
        room_by_profile = {member.id: group.room_id for group in groups for member in group.members}
        audited: list[Group] = []
        split_count = 0

        for group in groups:
            notes = list(group.conflicts)
            in_room = set(group.member_ids)

            for member in group.members:
                for target in self.graph.targets_of(member):
                    if target.id in in_room or not self.graph.is_mutual(member, target):
                        continue
                    where = room_by_profile.get(target.id, "no room")
                    note = f"{member.name} and {target.name} requested each other but were split; {target.name} is in {where}"
                    if note not in notes:
                        notes.append(note)
                        split_count += 1
                        self.decision_logger.log_decision("split_mutual", note)

                if member.wants_to_stay and member.prior_room and member.prior_room != group.room_id:
                    notes.append(
                        f"{member.name} wanted to stay in prior room {member.prior_room} but was placed in {group.room_id}"
                    )

            audited.append(group.model_copy(update={"conflicts": notes}))

        if split_count:
            logger.warning(f"Audit found {split_count} split mutual requests across {len(groups)} rooms")
        else:
            logger.info(f"Audit found no split mutual requests across {len(groups)} rooms")
        return audited
