"""Population summary statistics over one profile snapshot."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Any

from rooming.models import Archetype, Profile, SleepPhase

logger = logging.getLogger(__name__)


@dataclass
class PopulationSummary:
    """Overview counts for a set of profiles."""

    total: int
    night_owls: int  # OWL archetype
    early_larks: int  # LARK archetype
    stay_requests: int
    designated_requests: int
    average_cleanliness: float  # 0.0 for an empty population
    by_gender: dict[str, int] = field(default_factory=dict)
    by_sleep_phase: dict[str, int] = field(default_factory=dict)
    by_archetype: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_population(profiles: Iterable[Profile]) -> PopulationSummary:
    """
    Compute overview statistics.

    Args:
        profiles: Profile snapshot

    Returns:
        PopulationSummary; average cleanliness rounded to one decimal
    """
    profiles = list(profiles)
    total = len(profiles)

    archetypes = Counter(p.archetype.value for p in profiles if p.archetype)
    phases = Counter(SleepPhase(p.habits.sleep_phase).name for p in profiles)
    genders = Counter(p.normalized_gender.value for p in profiles)

    average_cleanliness = 0.0
    if total:
        average_cleanliness = round(sum(p.habits.cleanliness for p in profiles) / total, 1)

    summary = PopulationSummary(
        total=total,
        night_owls=archetypes.get(Archetype.OWL.value, 0),
        early_larks=archetypes.get(Archetype.LARK.value, 0),
        stay_requests=sum(1 for p in profiles if p.wants_to_stay),
        designated_requests=sum(1 for p in profiles if p.named_preferences),
        average_cleanliness=average_cleanliness,
        by_gender=dict(genders),
        by_sleep_phase=dict(phases),
        by_archetype=dict(archetypes),
    )
    logger.debug(f"Population summary: {summary.total} profiles, {summary.stay_requests} stay requests")
    return summary
