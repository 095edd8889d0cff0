"""
Room Assigner - end-to-end assignment run.

profiles -> gender partition -> per partition [preservation -> clustering]
-> audit -> flat list of rooms. Every input profile lands in exactly one room.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rooming.config import ConfigLoader
from rooming.graph.preference_graph import PreferenceGraph
from rooming.models import Gender, Group, Profile
from rooming.solver.auditor import GroupAuditor
from rooming.solver.clusterer import GreedyClusterer
from rooming.solver.group_analysis import GroupAnalyzer
from rooming.solver.logging import DecisionLogger
from rooming.solver.partition import build_incomplete_group, partition_by_gender
from rooming.solver.preservation import RoomPreservationPass

logger = logging.getLogger(__name__)

MATCHED_GENDERS = (Gender.MALE, Gender.FEMALE)


def split_prior_room_note(label: str) -> str:
    """Note for a prior room whose male and female stayers now share one label."""
    return f"Prior room {label} also kept for occupants of another gender; label is shared by two rooms"


class RoomAssigner:
    """Runs the full assignment pipeline over one immutable population snapshot."""

    def __init__(self, config: ConfigLoader | None = None, debug: bool = False) -> None:
        self.config = config or ConfigLoader.get_instance()
        self.decision_logger = DecisionLogger(debug_mode=debug)
        self.analyzer = GroupAnalyzer.from_config(self.config)

    def _prefix_for(self, gender: Gender) -> str:
        if gender == Gender.MALE:
            return self.config.get_str("partition.prefix.male")
        return self.config.get_str("partition.prefix.female")

    def assign(self, profiles: Iterable[Profile]) -> list[Group]:
        """Assign every profile to a room.

        Args:
            profiles: Complete population snapshot

        Returns:
            Rooms in order: per partition (Male, Female) preserved rooms then
            new rooms, then the data-incomplete group if any
        """
        population = list(profiles)
        if not population:
            logger.info("No profiles to assign")
            return []

        self.decision_logger.log_progress(f"Assigning {len(population)} profiles")
        graph = PreferenceGraph.from_config(population, self.config)
        for profile_id, ghosts in graph.ghost_references().items():
            name = graph.profiles[profile_id].name
            self.decision_logger.log_data_warning(f"{name} requested unknown roommates: {', '.join(ghosts)}")

        partitions = partition_by_gender(population)

        preservation = RoomPreservationPass(self.analyzer, self.decision_logger)
        preserved: dict[Gender, list[Group]] = {}
        remaining: dict[Gender, list[Profile]] = {}
        for gender in MATCHED_GENDERS:
            preserved[gender], remaining[gender] = preservation.preserve(partitions[gender], population)

        shared_labels = {g.room_id for g in preserved[Gender.MALE]} & {g.room_id for g in preserved[Gender.FEMALE]}
        for label in sorted(shared_labels):
            self.decision_logger.log_data_warning(f"Prior room {label} had mixed genders; kept once per gender")
        if shared_labels:
            for gender in MATCHED_GENDERS:
                preserved[gender] = [
                    group.model_copy(update={"conflicts": [*group.conflicts, split_prior_room_note(group.room_id)]})
                    if group.room_id in shared_labels
                    else group
                    for group in preserved[gender]
                ]

        reserved_labels = {group.room_id for groups in preserved.values() for group in groups}
        clusterer = GreedyClusterer(
            analyzer=self.analyzer,
            graph=graph,
            lookahead_window=self.config.get_int("clustering.lookahead_window"),
            decision_logger=self.decision_logger,
        )

        groups: list[Group] = []
        for gender in MATCHED_GENDERS:
            groups.extend(preserved[gender])
            groups.extend(
                clusterer.cluster(
                    remaining[gender],
                    start_counter=1,
                    prefix=self._prefix_for(gender),
                    population=population,
                    reserved_labels=reserved_labels,
                )
            )

        unknown = partitions[Gender.UNKNOWN]
        if unknown:
            label = self.config.get_str("partition.incomplete_label")
            groups.append(build_incomplete_group(unknown, label, population, graph.policy))
            self.decision_logger.log_data_warning(f"{len(unknown)} profiles isolated in {label} for missing gender")

        audited = GroupAuditor(graph, self.decision_logger).audit(groups)
        self.decision_logger.log_progress(
            f"Assignment complete: {len(audited)} rooms, "
            f"{sum(1 for g in audited if g.conflicts)} with conflict notes"
        )
        return audited


def assign_rooms(profiles: Iterable[Profile], config: ConfigLoader | None = None) -> list[Group]:
    """Convenience wrapper around RoomAssigner.assign."""
    return RoomAssigner(config=config).assign(profiles)
