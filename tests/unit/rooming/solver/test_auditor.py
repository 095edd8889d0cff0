"""
Unit tests for the group auditor - cross-room conflict notes.
"""

from __future__ import annotations

from rooming.graph.preference_graph import PreferenceGraph
from rooming.models import Group, GroupKind
from rooming.solver.auditor import GroupAuditor
from rooming.solver.logging import DecisionLogger


def _group(room_id, members, kind=GroupKind.NEW, conflicts=None):
    return Group(room_id=room_id, members=members, compatibility_score=80, conflicts=conflicts or [], kind=kind)


class TestSplitMutualRequests:
    def test_split_mutual_pair_noted_on_both_rooms(self, make_profile):
        ann = make_profile("Ann", prefs=["Bea"])
        bea = make_profile("Bea", prefs=["Ann"])
        cat = make_profile("Cat")
        dan = make_profile("Dan")
        groups = [_group("M-1", [ann, cat]), _group("M-2", [bea, dan])]

        audited = GroupAuditor(PreferenceGraph([ann, bea, cat, dan])).audit(groups)

        assert audited[0].conflicts == ["Ann and Bea requested each other but were split; Bea is in M-2"]
        assert audited[1].conflicts == ["Bea and Ann requested each other but were split; Ann is in M-1"]

    def test_one_way_split_not_noted(self, make_profile):
        ann = make_profile("Ann", prefs=["Bea"])
        bea = make_profile("Bea")
        groups = [_group("M-1", [ann]), _group("M-2", [bea])]
        audited = GroupAuditor(PreferenceGraph([ann, bea])).audit(groups)
        assert all(g.conflicts == [] for g in audited)

    def test_mutual_pair_together_not_noted(self, make_profile):
        ann = make_profile("Ann", prefs=["Bea"])
        bea = make_profile("Bea", prefs=["Ann"])
        audited = GroupAuditor(PreferenceGraph([ann, bea])).audit([_group("M-1", [ann, bea])])
        assert audited[0].conflicts == []

    def test_split_logged_as_decision(self, make_profile):
        ann = make_profile("Ann", prefs=["Bea"])
        bea = make_profile("Bea", prefs=["Ann"])
        decisions = DecisionLogger()
        GroupAuditor(PreferenceGraph([ann, bea]), decisions).audit([_group("M-1", [ann]), _group("M-2", [bea])])
        assert decisions.decision_counts() == {"split_mutual": 2}


class TestStayRequests:
    def test_unmet_stay_request_noted(self, make_profile):
        ann = make_profile("Ann", prefs=["stay"], prior_room="101")
        audited = GroupAuditor(PreferenceGraph([ann])).audit([_group("M-1", [ann])])
        assert audited[0].conflicts == ["Ann wanted to stay in prior room 101 but was placed in M-1"]

    def test_met_stay_request_silent(self, make_profile):
        ann = make_profile("Ann", prefs=["stay"], prior_room="101")
        audited = GroupAuditor(PreferenceGraph([ann])).audit([_group("101", [ann], GroupKind.PRESERVED)])
        assert audited[0].conflicts == []


class TestImmutability:
    def test_inputs_not_modified(self, make_profile):
        ann = make_profile("Ann", prefs=["Bea"])
        bea = make_profile("Bea", prefs=["Ann"])
        groups = [_group("M-1", [ann], conflicts=["existing"]), _group("M-2", [bea])]

        audited = GroupAuditor(PreferenceGraph([ann, bea])).audit(groups)

        assert groups[0].conflicts == ["existing"]
        assert groups[1].conflicts == []
        assert audited[0].conflicts[0] == "existing"
        assert len(audited[0].conflicts) == 2
        assert audited[0] is not groups[0]
