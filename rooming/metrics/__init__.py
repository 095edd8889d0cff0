"""Metrics module for population overview statistics.

Summarizes a profile snapshot the way the coordinator's overview shows it:
sleep archetypes, stay and designated requests, average cleanliness.
"""

from .population import PopulationSummary, summarize_population

__all__ = [
    "PopulationSummary",
    "summarize_population",
]
