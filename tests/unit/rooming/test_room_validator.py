"""
Unit tests for final assignment validation.

The validator never moves anyone; it explains the rooms a human authored.
"""

from __future__ import annotations

from rooming.config import ConfigLoader
from rooming.models import GroupKind, SleepPhase
from rooming.room_validator import UNASSIGNED_RATIONALE, FinalAssignmentValidator, validate_final_rooms


class TestGrouping:
    def test_groups_by_final_room(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", final_room="201"),
            make_profile("Bea", gender="F", final_room="201"),
            make_profile("Cat", gender="F", final_room="202"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert [(g.room_id, g.member_names) for g in groups] == [("201", ["Ann", "Bea"]), ("202", ["Cat"])]
        assert all(g.kind == GroupKind.FINAL for g in groups)

    def test_unassigned_bucket_last_with_zero_score(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F"),
            make_profile("Bea", gender="F", final_room="201"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert [g.room_id for g in groups] == ["201", "UNASSIGNED"]
        unassigned = groups[-1]
        assert unassigned.kind == GroupKind.UNASSIGNED
        assert unassigned.compatibility_score == 0
        assert unassigned.rationale == UNASSIGNED_RATIONALE
        assert unassigned.member_names == ["Ann"]

    def test_natural_room_order(self, make_profile):
        profiles = [make_profile(f"P{room}", final_room=room) for room in ["10", "2", "9"]]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert [g.room_id for g in groups] == ["2", "9", "10"]

    def test_no_unassigned_bucket_when_everyone_placed(self, make_profile):
        groups = validate_final_rooms([make_profile("Ann", final_room="101")], ConfigLoader())
        assert [g.room_id for g in groups] == ["101"]


class TestAnalysis:
    def test_mixed_genders_flagged(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", final_room="301"),
            make_profile("Bob", gender="M", final_room="301"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert groups[0].conflicts[0] == "Mixed genders in one room (Female, Male)"

    def test_missing_gender_flagged(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", final_room="301"),
            make_profile("Jo", gender=None, final_room="301"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert "Gender missing for Jo" in groups[0].conflicts
        assert not any(note.startswith("Mixed genders") for note in groups[0].conflicts)

    def test_scores_like_assignment(self, make_profile):
        profiles = [
            make_profile("Ann", sleep=SleepPhase.EARLY, final_room="101"),
            make_profile("Bea", sleep=SleepPhase.LATE, final_room="101"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert groups[0].compatibility_score == 60

    def test_split_mutual_pair_audited(self, make_profile):
        profiles = [
            make_profile("Ann", prefs=["Bea"], final_room="101"),
            make_profile("Bea", prefs=["Ann"], final_room="102"),
        ]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert "Ann and Bea requested each other but were split; Bea is in 102" in groups[0].conflicts

    def test_ghost_in_unassigned_bucket(self, make_profile):
        profiles = [make_profile("Ann", prefs=["Ghostname"])]
        groups = validate_final_rooms(profiles, ConfigLoader())
        assert groups[0].conflicts == ['Ghost reference: Ann requested "Ghostname", who is not in the roster']


class TestIdempotence:
    def test_repeat_validation_is_identical(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", prefs=["Bea"], final_room="201"),
            make_profile("Bea", gender="F", prefs=["Ann"], final_room="202"),
            make_profile("Cat", gender="M", final_room="202"),
            make_profile("Dan", gender="M"),
        ]
        validator = FinalAssignmentValidator(ConfigLoader())
        first = validator.validate(profiles)
        second = validator.validate(profiles)
        assert [g.model_dump() for g in first] == [g.model_dump() for g in second]

    def test_input_order_does_not_change_rooms(self, make_profile):
        profiles = [
            make_profile("Ann", final_room="2"),
            make_profile("Bea", final_room="1"),
        ]
        validator = FinalAssignmentValidator(ConfigLoader())
        forward = [g.room_id for g in validator.validate(profiles)]
        backward = [g.room_id for g in validator.validate(list(reversed(profiles)))]
        assert forward == backward == ["1", "2"]


class TestSummary:
    def test_statistics(self, make_profile):
        profiles = [
            make_profile("Ann", gender="F", final_room="201"),
            make_profile("Bob", gender="M", final_room="201"),
            make_profile("Cat", gender="F", sleep=SleepPhase.EARLY, final_room="202"),
            make_profile("Dee", gender="F", sleep=SleepPhase.LATE, cleanliness=1, temperature=1, final_room="202"),
            make_profile("Eve", gender="F"),
        ]
        validator = FinalAssignmentValidator(ConfigLoader())
        stats = validator.summarize(validator.validate(profiles))

        assert stats.total_profiles == 5
        assert stats.assigned_profiles == 4
        assert stats.unassigned_profiles == 1
        assert stats.room_count == 2
        assert stats.mixed_gender_rooms == 1
        assert stats.rooms_with_conflicts == 2
        assert stats.low_score_rooms == 1
