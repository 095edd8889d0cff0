"""Errors raised while resolving rooming settings."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for every settings problem; the CLI exits on it."""


class UnknownSettingError(ConfigError):
    """A key that the schema does not declare was set or looked up."""


class InvalidSettingError(ConfigError):
    """A value could not be converted or falls outside its allowed range."""
