"""
Greedy Clusterer - place unpreserved profiles into new rooms.

Rooms are seeded in sleep-phase order and filled with the magnet heuristic:
1. Mutual magnet: a candidate with a mutual request with any current member
2. One-way magnet: a candidate named by any current member
3. Best fit: the candidate in a bounded lookahead window with the highest
   average compatibility against the current members

Social bonds are exhausted before habit similarity is considered. Every
input profile is placed exactly once; each outer iteration removes at least
one profile from the pool, so the loop terminates.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from itertools import islice
from typing import TYPE_CHECKING

from rooming.graph.preference_graph import PreferenceGraph
from rooming.models import Group, GroupKind, Profile
from rooming.solver.group_analysis import GroupAnalyzer
from rooming.solver.logging import DecisionLogger
from rooming.solver.room_labels import next_room_label

if TYPE_CHECKING:
    from rooming.config import ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_WINDOW = 10


def target_group_size(remaining: int) -> int:
    """Room size for the next group given how many profiles are still unplaced.

    Two left make a pair; five or six split into threes so nobody is left
    alone; everything else fills rooms of four.
    """
    if remaining == 2:
        return 2
    if remaining in (5, 6):
        return 3
    return 4


def seed_order(profiles: Iterable[Profile]) -> list[Profile]:
    """Early sleepers first; within a phase, cleaner and more social first."""
    return sorted(
        profiles,
        key=lambda p: (int(p.habits.sleep_phase), -p.habits.cleanliness, -p.habits.social_energy),
    )


class GreedyClusterer:
    """Forms new rooms from the profiles the preservation pass did not keep."""

    def __init__(
        self,
        analyzer: GroupAnalyzer | None = None,
        graph: PreferenceGraph | None = None,
        lookahead_window: int = DEFAULT_LOOKAHEAD_WINDOW,
        decision_logger: DecisionLogger | None = None,
    ) -> None:
        self.analyzer = analyzer or GroupAnalyzer()
        self.graph = graph
        self.lookahead_window = lookahead_window
        self.decision_logger = decision_logger or DecisionLogger()

    @classmethod
    def from_config(
        cls,
        config: ConfigLoader,
        graph: PreferenceGraph | None = None,
        decision_logger: DecisionLogger | None = None,
    ) -> GreedyClusterer:
        return cls(
            analyzer=GroupAnalyzer.from_config(config),
            graph=graph,
            lookahead_window=config.get_int("clustering.lookahead_window"),
            decision_logger=decision_logger,
        )

    def cluster(
        self,
        remaining: Sequence[Profile],
        start_counter: int = 1,
        prefix: str = "R",
        population: Iterable[Profile] | None = None,
        reserved_labels: Collection[str] = (),
    ) -> list[Group]:
        """Partition the remaining profiles into new rooms.

        Args:
            remaining: Profiles still to be placed
            start_counter: First counter value for new labels
            prefix: Label prefix ("<prefix>-<counter>")
            population: Everyone in the run, for ghost detection; defaults to
                the graph's population, or to the remaining profiles
            reserved_labels: Labels already in use, skipped when numbering

        Returns:
            New groups in creation order
        """
        if population is not None:
            population = list(population)
        elif self.graph is not None:
            population = self.graph.population
        else:
            population = list(remaining)
        graph = self.graph or PreferenceGraph(population, policy=self.analyzer.scorer.policy)

        order = seed_order(remaining)
        # id -> seed rank of every profile not yet placed
        unplaced = {p.id: rank for rank, p in enumerate(order)}
        head = 0
        groups: list[Group] = []
        counter = start_counter

        while unplaced:
            while order[head].id not in unplaced:
                head += 1
            target = target_group_size(len(unplaced))
            members = [order[head]]
            del unplaced[order[head].id]

            while len(members) < target and unplaced:
                rank, reason = self._next_candidate(members, order, head, unplaced, graph)
                candidate = order[rank]
                del unplaced[candidate.id]
                self.decision_logger.log_decision(
                    reason, f"{candidate.name} joins {', '.join(m.name for m in members)}"
                )
                members.append(candidate)

            label, counter = next_room_label(prefix, counter, reserved_labels)
            analysis = self.analyzer.analyze(members, is_preserved=False, population=population)
            groups.append(
                Group(
                    room_id=label,
                    members=members,
                    compatibility_score=analysis.score,
                    rationale=analysis.rationale,
                    conflicts=analysis.conflicts,
                    kind=GroupKind.NEW,
                )
            )
            counter += 1

        logger.info(f"Clustered {len(remaining)} profiles into {len(groups)} new rooms with prefix '{prefix}'")
        return groups

    def _next_candidate(
        self,
        members: list[Profile],
        order: list[Profile],
        head: int,
        unplaced: dict[str, int],
        graph: PreferenceGraph,
    ) -> tuple[int, str]:
        """Pick the seed rank of the next roommate and the rule that chose it.

        Magnets are found by walking the request edges of the current members;
        among several hits the one earliest in pool order wins.
        """
        mutual: set[str] = set()
        requested: set[str] = set()
        for member in members:
            if member.id not in graph.graph:
                continue
            for target_id in graph.graph.successors(member.id):
                if target_id in unplaced:
                    requested.add(target_id)
                    if graph.graph.has_edge(target_id, member.id):
                        mutual.add(target_id)
        if mutual:
            return min(unplaced[target_id] for target_id in mutual), "mutual_magnet"
        if requested:
            return min(unplaced[target_id] for target_id in requested), "one_way_magnet"

        best_rank: int | None = None
        best_average = -1.0
        window = (order[rank] for rank in range(head, len(order)) if order[rank].id in unplaced)
        for candidate in islice(window, self.lookahead_window):
            total = sum(self.analyzer.scorer.score(member, candidate).score for member in members)
            average = total / len(members)
            if average > best_average:
                best_rank, best_average = unplaced[candidate.id], average

        if best_rank is None:
            return min(unplaced.values()), "fallback"
        return best_rank, "best_fit"
