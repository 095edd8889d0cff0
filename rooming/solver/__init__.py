"""
Rooming Solver - greedy, explainable room assignment.

This package contains:
- RoomAssigner: End-to-end assignment pipeline
- CompatibilityScorer: Pairwise 0-100 compatibility with explanatory factors
- RoomPreservationPass: Keeps prior rooms whose occupants allow it
- GreedyClusterer: Magnet-based forming of new rooms
- GroupAnalyzer: Score, rationale and conflict notes for one room
- GroupAuditor: Cross-room conflict annotation
- DecisionLogger: Logging for placement decisions
"""

from .auditor import GroupAuditor
from .clusterer import GreedyClusterer, seed_order, target_group_size
from .compatibility import CompatibilityResult, CompatibilityScorer, ScoringWeights, calculate_compatibility
from .group_analysis import GroupAnalysis, GroupAnalyzer
from .logging import DecisionLogger
from .partition import build_incomplete_group, partition_by_gender
from .preservation import RoomPreservationPass
from .room_assigner import RoomAssigner, assign_rooms
from .room_labels import next_room_label, room_sort_key

__all__ = [
    "CompatibilityResult",
    "CompatibilityScorer",
    "DecisionLogger",
    "GreedyClusterer",
    "GroupAnalysis",
    "GroupAnalyzer",
    "GroupAuditor",
    "RoomAssigner",
    "RoomPreservationPass",
    "ScoringWeights",
    "assign_rooms",
    "build_incomplete_group",
    "calculate_compatibility",
    "next_room_label",
    "partition_by_gender",
    "room_sort_key",
    "seed_order",
    "target_group_size",
]
