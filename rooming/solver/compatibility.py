"""Compatibility Scorer - explainable 0-100 score for a pair of profiles.

Scoring starts at 100 and deducts weighted penalties:
1. Sleep phase (the dominant factor, up to 40)
2. Cleanliness gap, scaled linearly over the 1-10 range (up to 20)
3. Social energy gap, scaled the same way (up to 20)
4. Temperature preference (up to 20)

A stated roommate request in either direction overrides all of it: the pair
scores 100. Every term depends only on absolute differences, so the score is
symmetric.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from rooming.graph.name_matching import NameMatchPolicy, get_match_policy, loose_name_match
from rooming.graph.preference_graph import has_preference
from rooming.models import Profile

if TYPE_CHECKING:
    from rooming.config import ConfigLoader

MAX_SCORE = 100
HABIT_SPAN = 9  # largest possible gap on a 1-10 scale

SLEEP_OPPOSITE = "opposite sleep schedules (early vs late)"
SLEEP_SIMILAR = "similar sleep schedules"
CLEANLINESS_GAP = "noticeable cleanliness gap"
THERMAL_CONFLICT = "thermal conflict (cold-sensitive vs heat-sensitive)"
MUTUALLY_FAVORED = "mutually favored roommates"

# Factors that signal a clash worth surfacing on the room
CLASH_FACTORS = frozenset({SLEEP_OPPOSITE, CLEANLINESS_GAP, THERMAL_CONFLICT})


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


class CompatibilityResult(NamedTuple):
    """Pair score with the human-readable factors behind it."""

    score: int
    factors: list[str]


@dataclass(frozen=True)
class ScoringWeights:
    sleep_opposite: float = 40.0
    sleep_adjacent: float = 15.0
    cleanliness_max: float = 20.0
    cleanliness_note_threshold: int = 4
    social_max: float = 20.0
    temperature_opposite: float = 20.0
    temperature_adjacent: float = 5.0

    @classmethod
    def from_config(cls, config: ConfigLoader) -> ScoringWeights:
        return cls(
            sleep_opposite=config.get_float("scoring.sleep.opposite_penalty"),
            sleep_adjacent=config.get_float("scoring.sleep.adjacent_penalty"),
            cleanliness_max=config.get_float("scoring.cleanliness.max_penalty"),
            cleanliness_note_threshold=config.get_int("scoring.cleanliness.note_threshold"),
            social_max=config.get_float("scoring.social.max_penalty"),
            temperature_opposite=config.get_float("scoring.temperature.opposite_penalty"),
            temperature_adjacent=config.get_float("scoring.temperature.adjacent_penalty"),
        )


class CompatibilityScorer:
    """Pure pairwise scorer; holds only its weights and name matching policy."""

    def __init__(self, weights: ScoringWeights | None = None, policy: NameMatchPolicy | None = None) -> None:
        self.weights = weights or ScoringWeights()
        self.policy = policy or loose_name_match

    @classmethod
    def from_config(cls, config: ConfigLoader) -> CompatibilityScorer:
        return cls(
            weights=ScoringWeights.from_config(config),
            policy=get_match_policy(config.get_str("preferences.name_matching", default="loose")),
        )

    def score(self, a: Profile, b: Profile) -> CompatibilityResult:
        """Score a pair of profiles.

        Args:
            a: First profile
            b: Second profile

        Returns:
            CompatibilityResult with the clamped 0-100 score and its factors
        """
        if has_preference(a, b, self.policy) or has_preference(b, a, self.policy):
            return CompatibilityResult(MAX_SCORE, [MUTUALLY_FAVORED])

        w = self.weights
        score = float(MAX_SCORE)
        factors: list[str] = []

        # 1. Sleep phase
        sleep_diff = abs(int(a.habits.sleep_phase) - int(b.habits.sleep_phase))
        if sleep_diff >= 2:
            score -= w.sleep_opposite
            factors.append(SLEEP_OPPOSITE)
        elif sleep_diff == 1:
            score -= w.sleep_adjacent
        else:
            factors.append(SLEEP_SIMILAR)

        # 2. Cleanliness
        clean_diff = abs(a.habits.cleanliness - b.habits.cleanliness)
        score -= (clean_diff / HABIT_SPAN) * w.cleanliness_max
        if clean_diff > w.cleanliness_note_threshold:
            factors.append(CLEANLINESS_GAP)

        # 3. Social energy
        social_diff = abs(a.habits.social_energy - b.habits.social_energy)
        score -= (social_diff / HABIT_SPAN) * w.social_max

        # 4. Temperature
        temp_diff = abs(a.habits.temperature - b.habits.temperature)
        if temp_diff >= 2:
            score -= w.temperature_opposite
            factors.append(THERMAL_CONFLICT)
        elif temp_diff == 1:
            score -= w.temperature_adjacent

        return CompatibilityResult(max(0, min(MAX_SCORE, round_half_up(score))), factors)


_default_scorer = CompatibilityScorer()


def calculate_compatibility(a: Profile, b: Profile) -> CompatibilityResult:
    """Score a pair with the default weights and loose name matching."""
    return _default_scorer.score(a, b)
