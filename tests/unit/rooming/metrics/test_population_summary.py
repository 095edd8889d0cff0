"""
Unit tests for population overview statistics.
"""

from __future__ import annotations

from rooming.metrics.population import summarize_population
from rooming.models import Archetype, Profile


class TestSummarizePopulation:
    def test_counts(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", cleanliness=8, prefs=["stay"]),
            make_profile("Bea", gender="F", cleanliness=3, prefs=["Cat"]),
            make_profile("Cat", gender="M", cleanliness=6, sleep=3),
            Profile(id="owl", name="Olly", archetype=Archetype.OWL),
            Profile(id="lark", name="Lara", archetype=Archetype.LARK),
        ]
        summary = summarize_population(profiles)

        assert summary.total == 5
        assert summary.night_owls == 1
        assert summary.early_larks == 1
        assert summary.stay_requests == 1
        assert summary.designated_requests == 1
        # (8 + 3 + 6 + 5 + 5) / 5
        assert summary.average_cleanliness == 5.4
        assert summary.by_gender == {"Female": 2, "Male": 1, "Unknown": 2}
        assert summary.by_sleep_phase == {"MID": 4, "LATE": 1}
        assert summary.by_archetype == {"OWL": 1, "LARK": 1}

    def test_empty_population(self):
        summary = summarize_population([])
        assert summary.total == 0
        assert summary.average_cleanliness == 0.0
        assert summary.to_dict()["by_gender"] == {}
