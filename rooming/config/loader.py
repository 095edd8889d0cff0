"""
ConfigLoader - resolves engine settings with fast-fail validation.

Each value comes from a CONFIG_* environment variable, an explicit override
or the schema default, in that order. Unknown keys and invalid values raise
immediately instead of falling back silently.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, cast

from .errors import ConfigError, UnknownSettingError, InvalidSettingError
from .schema import CONFIG_SCHEMA

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Process-wide settings for one assignment run.

    Usage:
        # CLI startup: build from --set pairs and check every key up front
        config = ConfigLoader(overrides={"clustering.lookahead_window": 20})
        config.validate_all()

        # Library callers fall back to the singleton
        window = ConfigLoader.get_instance().get_int("clustering.lookahead_window")

        # Tests swap the singleton
        with ConfigLoader.use(ConfigLoader(overrides={...})):
            ...
    """

    _instance: ConfigLoader | None = None
    _initialized: bool = False

    def __init__(self, overrides: Mapping[str, Any] | None = None):
        """
        Args:
            overrides: Explicit values keyed by dot-notation config key

        Raises:
            UnknownSettingError: If an override names a key missing from the schema
        """
        self._overrides: dict[str, Any] = {}
        for key, value in (overrides or {}).items():
            if key not in CONFIG_SCHEMA:
                raise UnknownSettingError(f"Unknown config key: '{key}'")
            self._overrides[key] = value
        self._cache: dict[str, Any] = {}

    @classmethod
    def initialize(cls, overrides: Mapping[str, Any] | None = None, validate_on_init: bool = True) -> ConfigLoader:
        """
        Install the singleton, unless one is already installed.

        Raises:
            ConfigError: If validate_on_init is set and any key is invalid
        """
        if cls._initialized:
            logger.debug("Settings already installed; keeping the existing loader")
            return cls._instance  # type: ignore

        instance = cls(overrides=overrides)
        if validate_on_init:
            instance.validate_all()

        cls._instance = instance
        cls._initialized = True
        logger.info(f"Settings installed with {len(instance._overrides)} overrides")
        return instance

    @classmethod
    def get_instance(cls) -> ConfigLoader:
        """Return the singleton, auto-initializing it with defaults if needed."""
        if not cls._initialized or cls._instance is None:
            logger.debug("No settings installed yet; using schema defaults")
            return cls.initialize(validate_on_init=False)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton state. For testing only."""
        cls._instance = None
        cls._initialized = False

    @classmethod
    @contextmanager
    def use(cls, loader: ConfigLoader) -> Iterator[None]:
        """Temporarily replace the singleton with a custom loader."""
        original = cls._instance
        original_initialized = cls._initialized
        cls._instance = loader
        cls._initialized = True
        try:
            yield
        finally:
            cls._instance = original
            cls._initialized = original_initialized

    def validate_all(self) -> None:
        """
        Resolve every schema key and report all invalid values at once.

        Raises:
            ConfigError: Listing each key whose value failed conversion or range checks
        """
        invalid_values: list[str] = []
        for key in CONFIG_SCHEMA:
            try:
                self.get(key)
            except InvalidSettingError as e:
                invalid_values.append(str(e))

        if invalid_values:
            raise ConfigError(
                f"Configuration validation failed.\nInvalid values ({len(invalid_values)}): {invalid_values}"
            )
        logger.info(f"Validated {len(CONFIG_SCHEMA)} config keys")

    def _get_env_key(self, key: str) -> str:
        # clustering.lookahead_window -> CONFIG_CLUSTERING_LOOKAHEAD_WINDOW
        return "CONFIG_" + key.upper().replace(".", "_")

    def get(self, key: str) -> Any:
        """
        Get a typed configuration value.

        Raises:
            UnknownSettingError: If key is not in schema
            InvalidSettingError: If the value cannot be converted or is out of range
        """
        if key not in CONFIG_SCHEMA:
            raise UnknownSettingError(f"Unknown config key: '{key}'")

        # Environment always wins and is not cached so tests can patch it
        env_key = self._get_env_key(key)
        env_value = os.environ.get(env_key)
        if env_value is None and key in self._cache:
            return self._cache[key]

        schema = CONFIG_SCHEMA[key]
        if env_value is not None:
            raw_value = env_value
        else:
            raw_value = self._overrides.get(key, schema.default)

        try:
            typed_value = schema.convert(raw_value)
        except (ValueError, TypeError) as e:
            raise InvalidSettingError(f"Config key '{key}' has invalid type: {e}") from e

        error = schema.validate(typed_value)
        if error:
            raise InvalidSettingError(f"Config key '{key}': {error}")

        if env_value is None:
            self._cache[key] = typed_value
        return typed_value

    def get_int(self, key: str, default: int | None = None) -> int:
        try:
            return cast(int, self.get(key))
        except UnknownSettingError:
            if default is not None:
                return default
            raise

    def get_float(self, key: str, default: float | None = None) -> float:
        try:
            return cast(float, self.get(key))
        except UnknownSettingError:
            if default is not None:
                return default
            raise

    def get_str(self, key: str, default: str | None = None) -> str:
        try:
            return cast(str, self.get(key))
        except UnknownSettingError:
            if default is not None:
                return default
            raise
