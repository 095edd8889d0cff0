"""
Root test configuration and fixtures for the rooming project.

This conftest.py provides common fixtures for all tests:
- make_profile: factory for Profile objects with sensible habit defaults
- config_loader: a fresh ConfigLoader installed as the singleton
- Automatic singleton reset and CONFIG_* environment isolation

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import itertools
import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rooming.config import ConfigLoader  # noqa: E402
from rooming.models import Habits, Profile, SleepPhase  # noqa: E402

ProfileFactory = Callable[..., Profile]


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset the config singleton and drop CONFIG_* variables around every test."""
    for key in list(os.environ):
        if key.startswith("CONFIG_"):
            monkeypatch.delenv(key, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def config_loader() -> Iterator[ConfigLoader]:
    """A default ConfigLoader installed as the singleton for the test."""
    loader = ConfigLoader()
    with ConfigLoader.use(loader):
        yield loader


@pytest.fixture
def make_profile() -> ProfileFactory:
    """Factory for profiles.

    Usage:
        alice = make_profile("Alice", gender="F", sleep=SleepPhase.EARLY, prefs=["Bea"])
    """
    counter = itertools.count(1)

    def _make(
        name: str,
        gender: str | None = "M",
        sleep: SleepPhase | int = SleepPhase.MID,
        cleanliness: int = 5,
        social: int = 5,
        temperature: int = 2,
        prefs: list[Any] | None = None,
        prior_room: str | None = None,
        final_room: str | None = None,
        profile_id: str | None = None,
    ) -> Profile:
        return Profile(
            id=profile_id or f"p{next(counter):03d}",
            name=name,
            gender=gender,
            prior_room=prior_room,
            final_room=final_room,
            habits=Habits(
                sleep_phase=SleepPhase(sleep),
                cleanliness=cleanliness,
                social_energy=social,
                temperature=temperature,
            ),
            preferences=prefs or [],
        )

    return _make
