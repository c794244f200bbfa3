# teamgen/domain/student.py
"""
Roster members and their collaboration ledger.

Every member keeps a ledger keyed by the *identity* of the other member (never by
object) counting how often the two have been grouped together. Ledgers are symmetric:
`a.collaborators[b.net_id] == b.collaborators[a.net_id]` after every mutation.
"""
from dataclasses import dataclass, field
from typing import Dict

from teamgen.domain.grouping import DEFAULT_MAX_RESHUFFLES
from teamgen.domain.models import Student


@dataclass
class AttemptContext:
    """
    Counters owned by a single generation attempt.

    net_repairings: pairs grouped together more than once, counted per extra pairing
    reshuffle_count: forced evictions/poaches performed so far
    desired_repairings: the repairing budget this attempt runs under
    """
    desired_repairings: int = 0
    max_reshuffles: int = DEFAULT_MAX_RESHUFFLES
    net_repairings: int = 0
    reshuffle_count: int = 0


@dataclass(eq=False)
class Member:
    student: Student
    collaborators: Dict[str, int] = field(default_factory=dict)

    @property
    def net_id(self) -> str:
        return self.student.net_id

    def has_collaborated_with(self, other: "Member") -> bool:
        return self.collaborators.get(other.net_id, 0) > 0

    def collaboration_count(self, other: "Member") -> int:
        return self.collaborators.get(other.net_id, 0)

    def to_api(self) -> Student:
        return self.student

    def __repr__(self):
        return f"Member({self.net_id!r})"


def collaborate(member: Member, partner: Member, context: AttemptContext) -> None:
    """Record one more pairing of the two members, counting it if it is a repeat."""
    count = member.collaborators.get(partner.net_id, 0) + 1
    member.collaborators[partner.net_id] = count
    partner.collaborators[member.net_id] = count

    if count > 1:
        context.net_repairings += 1


def uncollaborate(member: Member, partner: Member, context: AttemptContext) -> None:
    """Undo one pairing of the two members. Exact inverse of `collaborate`."""
    before = member.collaborators.get(partner.net_id, 0)
    if before == 0:
        return

    count = before - 1
    if count > 0:
        member.collaborators[partner.net_id] = count
        partner.collaborators[member.net_id] = count
    else:
        member.collaborators.pop(partner.net_id, None)
        partner.collaborators.pop(member.net_id, None)

    if before > 1:
        context.net_repairings -= 1
