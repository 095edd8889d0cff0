"""Schema entry for one tunable setting of the assignment engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigType(Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"


@dataclass(frozen=True)
class ConfigKey:
    """
    One setting: its type, default and accepted range.

    Attributes:
        key: Dot-notation name, also used to derive the CONFIG_* variable
        config_type: Type raw values are converted to
        default: Value used when no override or environment variable is set
        description: What the setting controls
        min_value: Lowest accepted value for numeric settings
        max_value: Highest accepted value for numeric settings
        allowed_values: Closed set of accepted values for string settings
    """

    key: str
    config_type: ConfigType
    default: Any
    description: str = ""
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: tuple[str, ...] | None = None

    def convert(self, value: Any) -> Any:
        """Coerce a raw value (often an environment string) to this key's type."""
        if self.config_type == ConfigType.INT:
            return int(value)
        if self.config_type == ConfigType.FLOAT:
            return float(value)
        return str(value)

    def validate(self, value: Any) -> str | None:
        """Return an error message for an out-of-range value, or None."""
        if self.min_value is not None and value < self.min_value:
            return f"Value {value} below minimum {self.min_value}"
        if self.max_value is not None and value > self.max_value:
            return f"Value {value} above maximum {self.max_value}"
        if self.allowed_values is not None and value not in self.allowed_values:
            return f"Value {value!r} not one of {', '.join(self.allowed_values)}"
        return None
