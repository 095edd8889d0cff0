"""Group Analysis - score, rationale and conflict notes for one room.

Shared by the preservation pass, the greedy clusterer and the final
assignment validator so every room is explained the same way.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import combinations
from typing import TYPE_CHECKING

from rooming.graph.preference_graph import dangling_targets, has_preference
from rooming.models import Profile
from rooming.solver.compatibility import CLASH_FACTORS, MAX_SCORE, CompatibilityScorer, round_half_up

if TYPE_CHECKING:
    from rooming.config import ConfigLoader

logger = logging.getLogger(__name__)

EXPLICIT_STAY = "Prior room kept: explicit stay request honored."
DEFAULT_PRESERVE = "Prior room kept: no objection, preserved by default."
SINGLE_OCCUPANT = "Single occupant."
MUTUAL_HONORED = "Mutual roommate request honored."
ONE_WAY_HONORED = "One-way roommate request honored (favored pairing)."
KEPT_BY_REQUEST = "Kept together despite low habit compatibility, by explicit request"
NEEDS_MEDIATION = "needs further mediation"


def ghost_note(requester: Profile, requested: str) -> str:
    return f'Ghost reference: {requester.name} requested "{requested}", who is not in the roster'


@dataclass
class GroupAnalysis:
    score: int
    rationale: str
    conflicts: list[str] = field(default_factory=list)


class GroupAnalyzer:
    """Explains a set of roommates: aggregate score, why, and what may go wrong."""

    def __init__(self, scorer: CompatibilityScorer | None = None, low_score_threshold: int = 60) -> None:
        self.scorer = scorer or CompatibilityScorer()
        self.low_score_threshold = low_score_threshold

    @classmethod
    def from_config(cls, config: ConfigLoader) -> GroupAnalyzer:
        return cls(
            scorer=CompatibilityScorer.from_config(config),
            low_score_threshold=config.get_int("analysis.low_score_threshold"),
        )

    def analyze(
        self,
        members: Sequence[Profile],
        is_preserved: bool,
        population: Iterable[Profile],
    ) -> GroupAnalysis:
        """Analyze one room.

        Args:
            members: Occupants of the room
            is_preserved: True when the room is a kept prior room
            population: Everyone in the run, used to detect ghost references

        Returns:
            GroupAnalysis with score, rationale and conflict notes
        """
        population = list(population)
        conflicts: list[str] = []
        for member in members:
            for requested in dangling_targets(member, population, self.scorer.policy):
                conflicts.append(ghost_note(member, requested))

        rationale: list[str] = []
        if is_preserved:
            rationale.append(EXPLICIT_STAY if any(m.wants_to_stay for m in members) else DEFAULT_PRESERVE)

        if len(members) <= 1:
            rationale.append(SINGLE_OCCUPANT)
            return GroupAnalysis(score=MAX_SCORE, rationale=" ".join(rationale), conflicts=conflicts)

        pair_scores: list[int] = []
        clash_notes: list[str] = []
        has_mutual = False
        has_request = False
        for a, b in combinations(members, 2):
            result = self.scorer.score(a, b)
            pair_scores.append(result.score)
            for factor in result.factors:
                note = f"{a.name} & {b.name}: {factor}"
                if factor in CLASH_FACTORS and note not in clash_notes:
                    clash_notes.append(note)
            a_to_b = has_preference(a, b, self.scorer.policy)
            b_to_a = has_preference(b, a, self.scorer.policy)
            has_mutual = has_mutual or (a_to_b and b_to_a)
            has_request = has_request or a_to_b or b_to_a

        score = min(MAX_SCORE, round_half_up(sum(pair_scores) / len(pair_scores)))
        conflicts = clash_notes + conflicts

        if not is_preserved:
            rationale.append(describe_schedule(members))
        if has_mutual:
            rationale.append(MUTUAL_HONORED)
        elif has_request:
            rationale.append(ONE_WAY_HONORED)

        if score < self.low_score_threshold:
            if has_request:
                conflicts.append(f"{KEPT_BY_REQUEST} (score {score})")
            else:
                conflicts.append(f"Low habit compatibility (score {score}); {NEEDS_MEDIATION}")

        logger.debug(f"Analyzed room of {len(members)}: score {score}, {len(conflicts)} conflict notes")
        return GroupAnalysis(score=score, rationale=" ".join(rationale), conflicts=conflicts)


def describe_schedule(members: Sequence[Profile]) -> str:
    """Summarize a room's sleep pattern and average cleanliness."""
    avg_sleep = sum(int(m.habits.sleep_phase) for m in members) / len(members)
    avg_clean = sum(m.habits.cleanliness for m in members) / len(members)
    if avg_sleep < 1.5:
        kind = "Early-sleeper room"
    elif avg_sleep > 2.5:
        kind = "Night-owl room"
    else:
        kind = "Mixed-schedule room"
    return f"{kind}; average cleanliness {avg_clean:.1f}/10."
