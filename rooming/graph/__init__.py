"""
Preference graph analysis for roommate requests
"""

from .name_matching import exact_name_match, get_match_policy, loose_name_match, normalize_name
from .preference_graph import PreferenceGraph, dangling_targets, has_preference, is_mutual

__all__ = [
    "PreferenceGraph",
    "dangling_targets",
    "exact_name_match",
    "get_match_policy",
    "has_preference",
    "is_mutual",
    "loose_name_match",
    "normalize_name",
]
