"""
Unit tests for domain models - gender normalization, sleep phases, preferences.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rooming.models import (
    Gender,
    Group,
    GroupKind,
    Habits,
    Preference,
    PreferenceKind,
    Profile,
    SleepPhase,
    normalize_gender,
    sleep_phase_from_time,
)


class TestNormalizeGender:
    @pytest.mark.parametrize("raw", ["M", "m", "male", " Male ", "boy", "男", "男生"])
    def test_male_spellings(self, raw):
        assert normalize_gender(raw) == Gender.MALE

    @pytest.mark.parametrize("raw", ["F", "female", "Girl", "woman", "女", "女生"])
    def test_female_spellings(self, raw):
        assert normalize_gender(raw) == Gender.FEMALE

    @pytest.mark.parametrize("raw", [None, "", "  ", "x", "other", "-"])
    def test_unrecognized_is_unknown(self, raw):
        assert normalize_gender(raw) == Gender.UNKNOWN


class TestSleepPhase:
    @pytest.mark.parametrize(
        ("text", "phase"),
        [
            ("10:30 PM", SleepPhase.EARLY),
            ("11 pm", SleepPhase.EARLY),
            ("12:00 AM", SleepPhase.MID),
            ("1:15 am", SleepPhase.MID),
            ("02:30 AM", SleepPhase.LATE),
            ("23:00", SleepPhase.EARLY),
            ("00:30", SleepPhase.MID),
            ("03:00", SleepPhase.LATE),
            ("10:30", SleepPhase.EARLY),
            ("9:45", SleepPhase.EARLY),
            ("12:00", SleepPhase.MID),
            ("5:00", SleepPhase.LATE),
            ("whenever", SleepPhase.MID),
            (None, SleepPhase.MID),
        ],
    )
    def test_phase_from_time(self, text, phase):
        assert sleep_phase_from_time(text) == phase

    def test_habits_derive_phase_from_time(self):
        assert Habits(sleep_time="02:30 AM").sleep_phase == SleepPhase.LATE

    def test_explicit_phase_wins(self):
        assert Habits(sleep_phase=SleepPhase.EARLY, sleep_time="02:30 AM").sleep_phase == SleepPhase.EARLY

    def test_habit_ranges_enforced(self):
        with pytest.raises(ValidationError):
            Habits(cleanliness=11)
        with pytest.raises(ValidationError):
            Habits(temperature=0)


class TestPreference:
    """Legacy free-text entries become tagged preferences."""

    @pytest.mark.parametrize("text", ["stay", "Wants to stay", "續住", "不想換宿舍 (續住)"])
    def test_stay_markers(self, text):
        assert Preference.parse(text).kind == PreferenceKind.STAY

    @pytest.mark.parametrize("text", ["neutral", "No preference", "none", "隨緣", "無 (隨緣)"])
    def test_neutral_markers(self, text):
        assert Preference.parse(text).kind == PreferenceKind.NEUTRAL

    def test_anything_else_is_named(self):
        pref = Preference.parse("  Bea Lin ")
        assert pref.kind == PreferenceKind.NAMED
        assert pref.name == "Bea Lin"
        assert str(pref) == "Bea Lin"

    def test_named_requires_name(self):
        with pytest.raises(ValidationError):
            Preference(kind=PreferenceKind.NAMED, name="  ")


class TestProfile:
    def test_preferences_parsed_from_strings(self):
        profile = Profile(id="1", name="Ann", preferences=["Bea", "", "stay"])
        assert profile.named_preferences == ["Bea"]
        assert profile.wants_to_stay
        assert not profile.is_neutral

    def test_neutral_profile(self):
        assert Profile(id="1", name="Ann", preferences=["隨緣"]).is_neutral
        assert Profile(id="2", name="Bea").is_neutral

    def test_blank_rooms_are_none(self):
        profile = Profile(id="1", name="Ann", prior_room="  ", final_room=" 101 ")
        assert profile.prior_room is None
        assert profile.final_room == "101"

    def test_numeric_room_is_text(self):
        assert Profile(id="1", name="Ann", prior_room=101).prior_room == "101"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Profile(id="1", name="")

    def test_profiles_are_frozen(self):
        profile = Profile(id="1", name="Ann")
        with pytest.raises(ValidationError):
            profile.name = "Bea"


class TestGroup:
    def test_conflict_notes_joined(self):
        group = Group(room_id="M-1", conflicts=["a", "b"])
        assert group.conflict_notes == "a; b"
        assert group.kind == GroupKind.NEW

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            Group(room_id="M-1", compatibility_score=101)

    def test_member_accessors(self):
        members = [Profile(id="1", name="Ann"), Profile(id="2", name="Bea")]
        group = Group(room_id="F-1", members=members)
        assert group.member_names == ["Ann", "Bea"]
        assert group.member_ids == ["1", "2"]
        assert group.size == 2
