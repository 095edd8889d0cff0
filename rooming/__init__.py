"""
Rooming - Core business logic for dormitory room assignment.

This package contains:
- models: Domain models (Profile, Habits, Preference, Group)
- solver: Greedy magnet-based assignment engine
- graph: Roommate request graph and name matching
- room_validator: Validation of manually authored final rooms
- profiles: Questionnaire answers to profiles
- roster: Roster merge and assignment export
"""

from rooming.models import (
    Gender,
    Group,
    GroupKind,
    Habits,
    Preference,
    PreferenceKind,
    Profile,
    SleepPhase,
)
from rooming.room_validator import FinalAssignmentValidator
from rooming.solver.logging import DecisionLogger
from rooming.solver.room_assigner import RoomAssigner, assign_rooms

__all__ = [
    "DecisionLogger",
    "FinalAssignmentValidator",
    "Gender",
    "Group",
    "GroupKind",
    "Habits",
    "Preference",
    "PreferenceKind",
    "Profile",
    "RoomAssigner",
    "SleepPhase",
    "assign_rooms",
]
