"""
Settings for the rooming engine.

Every key is declared in the schema with a default; values can be overridden
explicitly or through ``CONFIG_*`` environment variables.

Usage:
    from rooming.config import ConfigLoader, ConfigError

    ConfigLoader.initialize(overrides={"analysis.low_score_threshold": 55})
    config = ConfigLoader.get_instance()
    window = config.get_int("clustering.lookahead_window")
"""

from __future__ import annotations

from .errors import ConfigError, UnknownSettingError, InvalidSettingError
from .loader import ConfigLoader
from .schema import CONFIG_SCHEMA
from .types import ConfigKey, ConfigType

__all__ = [
    "ConfigLoader",
    "ConfigError",
    "InvalidSettingError",
    "UnknownSettingError",
    "CONFIG_SCHEMA",
    "ConfigKey",
    "ConfigType",
]
