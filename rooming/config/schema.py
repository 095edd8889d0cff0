"""Configuration schema registry.

Defines all valid configuration keys with their types, defaults and
validation rules. This is the single source of truth for configuration
structure.
"""

from __future__ import annotations

from .types import ConfigKey, ConfigType

# =============================================================================
# CONFIGURATION SCHEMA REGISTRY
#
# All configuration keys must be defined here. Unknown keys will be rejected.
# =============================================================================

CONFIG_SCHEMA: dict[str, ConfigKey] = {
    # =========================================================================
    # PAIRWISE SCORING - Sleep phase
    # =========================================================================
    "scoring.sleep.opposite_penalty": ConfigKey(
        key="scoring.sleep.opposite_penalty",
        config_type=ConfigType.FLOAT,
        default=40.0,
        description="Penalty when sleep phases are at opposite extremes (early vs late)",
        min_value=0,
        max_value=100,
    ),
    "scoring.sleep.adjacent_penalty": ConfigKey(
        key="scoring.sleep.adjacent_penalty",
        config_type=ConfigType.FLOAT,
        default=15.0,
        description="Penalty when sleep phases differ by one step",
        min_value=0,
        max_value=100,
    ),
    # =========================================================================
    # PAIRWISE SCORING - Linear habit gaps (scaled over the 1-10 range)
    # =========================================================================
    "scoring.cleanliness.max_penalty": ConfigKey(
        key="scoring.cleanliness.max_penalty",
        config_type=ConfigType.FLOAT,
        default=20.0,
        description="Penalty at the largest possible cleanliness gap",
        min_value=0,
        max_value=100,
    ),
    "scoring.cleanliness.note_threshold": ConfigKey(
        key="scoring.cleanliness.note_threshold",
        config_type=ConfigType.INT,
        default=4,
        description="Cleanliness gaps above this value are reported as a factor",
        min_value=0,
        max_value=9,
    ),
    "scoring.social.max_penalty": ConfigKey(
        key="scoring.social.max_penalty",
        config_type=ConfigType.FLOAT,
        default=20.0,
        description="Penalty at the largest possible social energy gap",
        min_value=0,
        max_value=100,
    ),
    # =========================================================================
    # PAIRWISE SCORING - Temperature
    # =========================================================================
    "scoring.temperature.opposite_penalty": ConfigKey(
        key="scoring.temperature.opposite_penalty",
        config_type=ConfigType.FLOAT,
        default=20.0,
        description="Penalty when one roommate is cold-sensitive and the other heat-sensitive",
        min_value=0,
        max_value=100,
    ),
    "scoring.temperature.adjacent_penalty": ConfigKey(
        key="scoring.temperature.adjacent_penalty",
        config_type=ConfigType.FLOAT,
        default=5.0,
        description="Penalty when temperature preferences differ by one step",
        min_value=0,
        max_value=100,
    ),
    # =========================================================================
    # CLUSTERING
    # =========================================================================
    "clustering.lookahead_window": ConfigKey(
        key="clustering.lookahead_window",
        config_type=ConfigType.INT,
        default=10,
        description="Number of remaining candidates evaluated by the best-fit fallback",
        min_value=1,
        max_value=1000,
    ),
    # =========================================================================
    # GROUP ANALYSIS
    # =========================================================================
    "analysis.low_score_threshold": ConfigKey(
        key="analysis.low_score_threshold",
        config_type=ConfigType.INT,
        default=60,
        description="Rooms scoring below this get a low-compatibility note",
        min_value=0,
        max_value=100,
    ),
    # =========================================================================
    # PARTITIONING AND LABELS
    # =========================================================================
    "partition.prefix.male": ConfigKey(
        key="partition.prefix.male",
        config_type=ConfigType.STRING,
        default="M",
        description="Label prefix for newly formed male rooms",
    ),
    "partition.prefix.female": ConfigKey(
        key="partition.prefix.female",
        config_type=ConfigType.STRING,
        default="F",
        description="Label prefix for newly formed female rooms",
    ),
    "partition.incomplete_label": ConfigKey(
        key="partition.incomplete_label",
        config_type=ConfigType.STRING,
        default="MISSING-DATA",
        description="Label of the group collecting profiles without a usable gender",
    ),
    "validation.unassigned_label": ConfigKey(
        key="validation.unassigned_label",
        config_type=ConfigType.STRING,
        default="UNASSIGNED",
        description="Label of the bucket collecting profiles without a final room",
    ),
    # =========================================================================
    # PREFERENCE RESOLUTION
    # =========================================================================
    "preferences.name_matching": ConfigKey(
        key="preferences.name_matching",
        config_type=ConfigType.STRING,
        default="loose",
        description="Name matching policy for roommate requests: 'loose' (substring) or 'exact'",
        allowed_values=("loose", "exact"),
    ),
}
