"""Best and worst roommate matches for a single profile."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from rooming.models import Gender, Profile
from rooming.solver.compatibility import CompatibilityScorer

logger = logging.getLogger(__name__)


class ScoredMatch(NamedTuple):
    profile: Profile
    score: int
    factors: list[str]


class MatchReport(NamedTuple):
    best: list[ScoredMatch]
    worst: ScoredMatch | None


def can_room_together(a: Profile, b: Profile) -> bool:
    """Same normalized gender, or at least one side has no usable gender."""
    ga, gb = a.normalized_gender, b.normalized_gender
    if Gender.UNKNOWN in (ga, gb):
        return True
    return ga == gb


def find_best_matches(
    target: Profile,
    population: Iterable[Profile],
    top_n: int = 3,
    scorer: CompatibilityScorer | None = None,
) -> MatchReport:
    """
    Rank every eligible candidate against the target.

    Args:
        target: Profile to find roommates for
        population: Everyone, the target included
        top_n: Number of best matches to return
        scorer: Pairwise scorer, default weights when omitted

    Returns:
        MatchReport with the top matches (best first) and the single worst
        match, or None when there are no candidates
    """
    scorer = scorer or CompatibilityScorer()
    scored = []
    for candidate in population:
        if candidate.id == target.id or not can_room_together(target, candidate):
            continue
        result = scorer.score(target, candidate)
        scored.append(ScoredMatch(candidate, result.score, result.factors))

    # Stable sort keeps population order among equal scores
    scored.sort(key=lambda match: match.score, reverse=True)
    logger.debug(f"Ranked {len(scored)} candidates for {target.name}")
    return MatchReport(best=scored[:top_n], worst=scored[-1] if scored else None)
