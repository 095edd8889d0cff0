"""
Domain models for the room-assignment engine.

Profiles are supplied wholesale by collaborators (roster import, questionnaire
handler); Groups are the unit of output.
"""

from __future__ import annotations

import re
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Gender(str, Enum):
    """Partition key. Every profile normalizes to exactly one of these."""

    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


_MALE_TOKENS = {"m", "male", "man", "boy", "b"}
_FEMALE_TOKENS = {"f", "female", "woman", "girl", "g"}


def normalize_gender(raw: str | None) -> Gender:
    """Normalize free-text gender ("M", "female", "男", ...) to a Gender."""
    if not raw:
        return Gender.UNKNOWN
    text = raw.strip().lower()
    if "女" in text:
        return Gender.FEMALE
    if "男" in text:
        return Gender.MALE
    if text in _MALE_TOKENS:
        return Gender.MALE
    if text in _FEMALE_TOKENS:
        return Gender.FEMALE
    return Gender.UNKNOWN


class SleepPhase(IntEnum):
    EARLY = 1
    MID = 2
    LATE = 3


_CLOCK_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*([ap]\.?m\.?)?", re.IGNORECASE)


def sleep_phase_from_time(sleep_time: str | None) -> SleepPhase:
    """Derive a sleep phase from a descriptive bedtime such as "10:30 PM".

    Bedtimes before midnight are EARLY, midnight to 2am is MID and anything
    from 2am through the morning is LATE. Without AM/PM, 6 to 11 o'clock is
    read as evening and 12 as midnight. Unparseable text is MID.

    Examples:
        "10:30 PM" -> EARLY
        "10:30"    -> EARLY
        "12:00 AM" -> MID
        "12:00"    -> MID
        "02:30 AM" -> LATE
        "23:00"    -> EARLY
    """
    if not sleep_time:
        return SleepPhase.MID
    match = _CLOCK_RE.search(sleep_time)
    if not match:
        return SleepPhase.MID

    hour = int(match.group(1))
    meridiem = (match.group(3) or "").lower().replace(".", "")
    if meridiem == "pm":
        return SleepPhase.EARLY
    if hour in (12, 24):
        hour = 0
    elif not meridiem and hour >= 6:
        return SleepPhase.EARLY

    if hour < 2:
        return SleepPhase.MID
    return SleepPhase.LATE


class Habits(BaseModel):
    """Self-reported lifestyle attributes."""

    model_config = ConfigDict(frozen=True)

    sleep_phase: SleepPhase = SleepPhase.MID
    sleep_time: str | None = None
    cleanliness: int = Field(default=5, ge=1, le=10)
    social_energy: int = Field(default=5, ge=1, le=10)
    noise_tolerance: int = Field(default=5, ge=1, le=10)
    temperature: int = Field(default=2, ge=1, le=3)  # 1 = cold-sensitive, 3 = heat-sensitive

    @model_validator(mode="before")
    @classmethod
    def _derive_sleep_phase(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("sleep_phase") is None and data.get("sleep_time"):
            data = {**data, "sleep_phase": sleep_phase_from_time(data["sleep_time"])}
        return data


class PreferenceKind(str, Enum):
    NEUTRAL = "neutral"
    STAY = "stay"
    NAMED = "named"


def _normalize_marker(text: str) -> str:
    return " ".join(text.strip().lower().split())


STAY_MARKERS = frozenset(
    {
        "stay",
        "wants to stay",
        "wants-to-stay-in-current-room",
        "stay in current room",
        "續住",
        "不想換宿舍 (續住)",
    }
)
NEUTRAL_MARKERS = frozenset(
    {
        "neutral",
        "no preference",
        "neutral/no-preference",
        "none",
        "隨緣",
        "無",
        "無 (隨緣)",
    }
)


class Preference(BaseModel):
    """One roommate preference: neutral, stay in the current room, or a named person."""

    model_config = ConfigDict(frozen=True)

    kind: PreferenceKind
    name: str | None = None

    @model_validator(mode="after")
    def _check_name(self) -> Preference:
        if self.kind == PreferenceKind.NAMED and not (self.name and self.name.strip()):
            raise ValueError("named preference requires a non-empty name")
        return self

    @classmethod
    def neutral(cls) -> Preference:
        return cls(kind=PreferenceKind.NEUTRAL)

    @classmethod
    def stay(cls) -> Preference:
        return cls(kind=PreferenceKind.STAY)

    @classmethod
    def named(cls, name: str) -> Preference:
        return cls(kind=PreferenceKind.NAMED, name=name.strip())

    @classmethod
    def parse(cls, text: str) -> Preference:
        """Convert a legacy free-text entry into a tagged preference."""
        marker = _normalize_marker(text)
        if marker in STAY_MARKERS:
            return cls.stay()
        if marker in NEUTRAL_MARKERS:
            return cls.neutral()
        return cls.named(text)

    @property
    def is_named(self) -> bool:
        return self.kind == PreferenceKind.NAMED

    def __str__(self) -> str:
        return self.name if self.is_named and self.name else self.kind.value


class Archetype(str, Enum):
    """Personality archetype derived from questionnaire answers."""

    OWL = "OWL"  # Night owl
    LARK = "LARK"  # Early bird
    KOALA = "KOALA"  # Low energy / easygoing
    PUPPY = "PUPPY"  # Social / high energy
    CAT = "CAT"  # Independent / clean
    PEACOCK = "PEACOCK"  # Expressive / messy is fine
    HAMSTER = "HAMSTER"  # Cold-sensitive homebody
    RABBIT = "RABBIT"  # Noise-sensitive introvert


class Profile(BaseModel):
    """One student's attributes and roommate preferences."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1)
    gender: str | None = None
    prior_room: str | None = None
    habits: Habits = Field(default_factory=Habits)
    preferences: list[Preference] = Field(default_factory=list)
    final_room: str | None = None
    archetype: Archetype | None = None
    traits: list[str] = Field(default_factory=list)

    @field_validator("preferences", mode="before")
    @classmethod
    def _parse_preferences(cls, value: Any) -> Any:
        if value is None:
            return []
        parsed = []
        for entry in value:
            if isinstance(entry, str):
                if not entry.strip():
                    continue
                parsed.append(Preference.parse(entry))
            else:
                parsed.append(entry)
        return parsed

    @field_validator("prior_room", "final_room", mode="before")
    @classmethod
    def _blank_room_is_none(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @property
    def normalized_gender(self) -> Gender:
        return normalize_gender(self.gender)

    @property
    def named_preferences(self) -> list[str]:
        return [p.name for p in self.preferences if p.is_named and p.name]

    @property
    def wants_to_stay(self) -> bool:
        return any(p.kind == PreferenceKind.STAY for p in self.preferences)

    @property
    def is_neutral(self) -> bool:
        """True when the profile names nobody and did not ask to stay."""
        return not self.wants_to_stay and not self.named_preferences


class GroupKind(str, Enum):
    PRESERVED = "preserved"
    NEW = "new"
    INCOMPLETE_DATA = "incomplete_data"
    FINAL = "final"
    UNASSIGNED = "unassigned"


class Group(BaseModel):
    """A room assignment: the unit of output."""

    room_id: str
    members: list[Profile] = Field(default_factory=list)
    compatibility_score: int = Field(default=0, ge=0, le=100)
    rationale: str = ""
    conflicts: list[str] = Field(default_factory=list)
    kind: GroupKind = GroupKind.NEW

    @property
    def conflict_notes(self) -> str:
        return "; ".join(self.conflicts)

    @property
    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]

    @property
    def member_names(self) -> list[str]:
        return [m.name for m in self.members]

    @property
    def size(self) -> int:
        return len(self.members)
