# teamgen/domain/project.py
from typing import List, Optional

from teamgen.domain.group import Group
from teamgen.domain.grouping import determine_group_sizes
from teamgen.domain.models import ProjectGrouping
from teamgen.domain.student import AttemptContext, Member


class Project:
    """
    One named project of an attempt: its groups, sized to partition the roster, and
    the members not yet placed into any of them.
    """

    def __init__(
        self,
        name: str,
        roster: List[Member],
        optimal_group_size: int,
        prefer_smaller_groups: bool,
        context: AttemptContext,
    ):
        self.name = name
        self.ungrouped: List[Member] = list(roster)
        sizes = determine_group_sizes(len(roster), optimal_group_size, prefer_smaller_groups)
        self.groups: List[Group] = [Group(size, context) for size in sizes]

    def mark_grouped(self, member: Member) -> None:
        self.ungrouped = [m for m in self.ungrouped if m.net_id != member.net_id]

    def mark_ungrouped(self, member: Member) -> None:
        if not any(m.net_id == member.net_id for m in self.ungrouped):
            self.ungrouped.append(member)

    def group_of(self, member: Member) -> Optional[Group]:
        """The group currently holding `member`, if any."""
        for group in self.groups:
            if group.contains(member):
                return group
        return None

    def to_api(self) -> ProjectGrouping:
        return ProjectGrouping(name=self.name, groups=[g.to_api() for g in self.groups])
