# teamgen/domain/group.py
from typing import List

from teamgen.domain.models import Group as GroupDTO
from teamgen.domain.student import AttemptContext, Member, collaborate, uncollaborate


class Group:
    """
    A group being filled for one project.

    Adding or removing a member updates the collaboration ledgers of everyone
    already in the group, and through them the attempt's repairing counter.
    """

    def __init__(self, target_size: int, context: AttemptContext):
        self.target_size = target_size
        self.context = context
        self.members: List[Member] = []

    @property
    def is_full(self) -> bool:
        return len(self.members) == self.target_size

    def contains(self, member: Member) -> bool:
        return any(m.net_id == member.net_id for m in self.members)

    def contains_collaborators_of(self, member: Member) -> bool:
        return any(m.has_collaborated_with(member) for m in self.members)

    def add_member(self, member: Member) -> None:
        if self.contains(member):
            raise ValueError(f"{member.net_id} is already a member of this group")
        if self.is_full:
            raise ValueError(f"group is already full ({self.target_size} members)")

        for current in self.members:
            collaborate(current, member, self.context)
        self.members.append(member)

    def remove_member(self, member: Member) -> None:
        if not self.contains(member):
            raise ValueError(f"{member.net_id} is not a member of this group")

        self.members = [m for m in self.members if m.net_id != member.net_id]
        for current in self.members:
            uncollaborate(current, member, self.context)

    def to_api(self) -> GroupDTO:
        return GroupDTO(members=[m.to_api() for m in self.members])

    def __repr__(self):
        return f"Group(target_size={self.target_size}, members={[m.net_id for m in self.members]})"
