# tests/test_domain.py
import random

import pytest

from teamgen.domain.group import Group
from teamgen.domain.models import Student
from teamgen.domain.project import Project
from teamgen.domain.student import AttemptContext, Member, collaborate, uncollaborate


def make_members(n):
    return [Member(student=Student(net_id=f"s{i}", name=f"Student {i}")) for i in range(n)]


def assert_symmetric(members):
    for a in members:
        for b in members:
            assert a.collaboration_count(b) == b.collaboration_count(a)


# -------------------------------
# Collaboration ledger
# -------------------------------

def test_collaborate_first_pairing_is_not_a_repairing():
    a, b = make_members(2)
    ctx = AttemptContext()
    collaborate(a, b, ctx)
    assert a.has_collaborated_with(b)
    assert b.has_collaborated_with(a)
    assert a.collaborators == {"s1": 1}
    assert ctx.net_repairings == 0


def test_collaborate_twice_counts_repairing():
    a, b = make_members(2)
    ctx = AttemptContext()
    collaborate(a, b, ctx)
    collaborate(a, b, ctx)
    collaborate(b, a, ctx)
    assert a.collaboration_count(b) == 3
    assert ctx.net_repairings == 2


def test_uncollaborate_removes_entry_at_zero():
    a, b = make_members(2)
    ctx = AttemptContext()
    collaborate(a, b, ctx)
    uncollaborate(b, a, ctx)
    assert a.collaborators == {}
    assert b.collaborators == {}
    assert not a.has_collaborated_with(b)
    assert ctx.net_repairings == 0


@pytest.mark.parametrize("prior_pairings", [0, 1, 2, 3])
def test_collaborate_and_uncollaborate_are_inverses(prior_pairings):
    a, b = make_members(2)
    ctx = AttemptContext()
    for _ in range(prior_pairings):
        collaborate(a, b, ctx)
    ledger_before = dict(a.collaborators)
    repairings_before = ctx.net_repairings

    collaborate(a, b, ctx)
    uncollaborate(a, b, ctx)

    assert a.collaborators == ledger_before
    assert ctx.net_repairings == repairings_before


def test_ledger_stays_symmetric_under_random_mutation():
    members = make_members(6)
    ctx = AttemptContext()
    rng = random.Random(7)
    for _ in range(500):
        a, b = rng.sample(members, 2)
        if rng.random() < 0.6:
            collaborate(a, b, ctx)
        else:
            uncollaborate(a, b, ctx)
        assert_symmetric(members)

    expected = sum(max(0, a.collaboration_count(b) - 1) for i, a in enumerate(members) for b in members[i + 1:])
    assert ctx.net_repairings == expected


# -------------------------------
# Group
# -------------------------------

def test_group_add_member_updates_ledgers():
    a, b, c = make_members(3)
    ctx = AttemptContext()
    group = Group(3, ctx)
    for m in (a, b, c):
        group.add_member(m)

    assert group.is_full
    assert a.collaborators == {"s1": 1, "s2": 1}
    assert group.contains_collaborators_of(a)


def test_group_remove_member_undoes_pairings():
    a, b, c = make_members(3)
    ctx = AttemptContext()
    group = Group(3, ctx)
    for m in (a, b, c):
        group.add_member(m)

    group.remove_member(b)
    assert not group.is_full
    assert not group.contains(b)
    assert b.collaborators == {}
    assert a.collaborators == {"s2": 1}


def test_group_never_exceeds_target_size():
    a, b = make_members(2)
    group = Group(1, AttemptContext())
    group.add_member(a)
    with pytest.raises(ValueError):
        group.add_member(b)
    assert len(group.members) == 1


def test_group_rejects_duplicate_member():
    (a,) = make_members(1)
    group = Group(2, AttemptContext())
    group.add_member(a)
    with pytest.raises(ValueError):
        group.add_member(a)


def test_regrouping_counts_repairing():
    a, b = make_members(2)
    ctx = AttemptContext()
    first, second = Group(2, ctx), Group(2, ctx)
    first.add_member(a)
    first.add_member(b)
    second.add_member(a)
    second.add_member(b)
    assert ctx.net_repairings == 1

    second.remove_member(a)
    assert ctx.net_repairings == 0


def test_group_to_api():
    a, b = make_members(2)
    group = Group(2, AttemptContext())
    group.add_member(a)
    group.add_member(b)
    assert group.to_api().model_dump(by_alias=True) == {
        "students": [{"netID": "s0", "name": "Student 0"}, {"netID": "s1", "name": "Student 1"}]
    }


# -------------------------------
# Project
# -------------------------------

def test_project_groups_partition_roster():
    roster = make_members(21)
    project = Project("p1", roster, 4, False, AttemptContext())
    assert [g.target_size for g in project.groups] == [4, 4, 4, 4, 5]
    assert len(project.ungrouped) == 21


def test_project_mark_grouped_and_ungrouped():
    roster = make_members(3)
    project = Project("p1", roster, 3, False, AttemptContext())

    project.mark_grouped(roster[0])
    assert roster[0] not in project.ungrouped
    assert len(project.ungrouped) == 2

    project.mark_ungrouped(roster[0])
    project.mark_ungrouped(roster[0])
    assert project.ungrouped.count(roster[0]) == 1


def test_project_group_of():
    roster = make_members(4)
    project = Project("p1", roster, 2, False, AttemptContext())
    project.groups[1].add_member(roster[3])
    assert project.group_of(roster[3]) is project.groups[1]
    assert project.group_of(roster[0]) is None
