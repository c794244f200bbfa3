# teamgen/domain/generator.py
"""
Grouping engine.

Builds every requested project's groups for a roster while keeping the number of
repairings (two members grouped together a second time) as low as possible.

An attempt fills the projects one after another. Each group waiting for members sits
on a FIFO fill queue; a group is dequeued, given one member, and put back if it is
still not full. When no member can be added without going over the repairing budget,
the attempt reshuffles: a member who fits is poached from another group, evicting
members of the group being filled first if nobody fits. An attempt that runs out of
reshuffles, or finishes with more repairings than budgeted, is thrown away and the
whole grouping starts over with the budget raised by one.
"""
import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence

from teamgen.domain.errors import InvalidGroupingRequest, ReshuffleQuotaExceeded
from teamgen.domain.group import Group
from teamgen.domain.group_queue import FillQueue
from teamgen.domain.grouping import GroupingOptions
from teamgen.domain.models import ClassGrouping, ProjectGrouping, Student
from teamgen.domain.project import Project
from teamgen.domain.student import AttemptContext, Member

logger = logging.getLogger(__name__)


def validate_request(students: Sequence[Student], project_names: Sequence[str], options: GroupingOptions) -> None:
    if not students:
        raise InvalidGroupingRequest("roster is empty")
    if not project_names:
        raise InvalidGroupingRequest("at least one project name is required")
    if options.optimal_group_size is None or options.optimal_group_size < 1:
        raise InvalidGroupingRequest(f"optimal group size must be positive, got {options.optimal_group_size}")
    if options.max_reshuffles < 0:
        raise InvalidGroupingRequest(f"reshuffle quota must not be negative, got {options.max_reshuffles}")

    seen = set()
    for student in students:
        if student.net_id in seen:
            raise InvalidGroupingRequest(f"duplicate member identity '{student.net_id}' in roster")
        seen.add(student.net_id)


def replay_prior_groupings(roster_by_id: Dict[str, Member], prior_groupings: Iterable[ProjectGrouping]) -> None:
    """
    Seed the ledgers with prior groups. Members missing from the roster are skipped and
    the groups themselves are thrown away once replayed.
    """
    scratch = AttemptContext()
    for prior in prior_groupings:
        for prior_group in prior.groups:
            present = [roster_by_id[s.net_id] for s in prior_group.members if s.net_id in roster_by_id]
            throwaway = Group(len(present), scratch)
            for member in present:
                if not throwaway.contains(member):
                    throwaway.add_member(member)


def fill_project(project: Project, roster: List[Member], context: AttemptContext, rng: random.Random) -> None:
    """
    Give every group of the project its members.
    Raises ReshuffleQuotaExceeded when the attempt runs out of reshuffles.
    """
    queue = FillQueue()
    for group in project.groups:
        if not group.is_full:
            queue.enqueue(group)

    while not queue.is_empty():
        add_member_to_group(project, queue, roster, context, rng)


def add_member_to_group(
    project: Project,
    queue: FillQueue,
    roster: List[Member],
    context: AttemptContext,
    rng: random.Random,
) -> None:
    group = queue.dequeue()

    fresh = [m for m in project.ungrouped if not group.contains_collaborators_of(m)]
    if fresh:
        member = rng.choice(fresh)
        group.add_member(member)
        project.mark_grouped(member)
    elif context.net_repairings < context.desired_repairings:
        # budget left: a stale member is allowed to repeat a pairing
        member = rng.choice(project.ungrouped)
        group.add_member(member)
        project.mark_grouped(member)
    else:
        _reshuffle(group, project, queue, roster, context, rng)

    if not group.is_full and group not in queue:
        queue.enqueue(group)


def _poachable(group: Group, roster: List[Member]) -> List[Member]:
    return [m for m in roster if not group.contains(m) and not group.contains_collaborators_of(m)]


def _reshuffle(
    group: Group,
    project: Project,
    queue: FillQueue,
    roster: List[Member],
    context: AttemptContext,
    rng: random.Random,
) -> None:
    context.reshuffle_count += 1
    if context.reshuffle_count > context.max_reshuffles:
        raise ReshuffleQuotaExceeded(project.name, context.reshuffle_count - 1)

    candidates = _poachable(group, roster)
    while not candidates:
        evicted = rng.choice(group.members)
        group.remove_member(evicted)
        project.mark_ungrouped(evicted)
        logger.debug("Project %s: evicted %s to make room", project.name, evicted.net_id)
        candidates = _poachable(group, roster)

    poach_member_into_group(rng.choice(candidates), group, project, queue)


def poach_member_into_group(member: Member, target: Group, project: Project, queue: FillQueue) -> None:
    """Move `member` out of whatever group holds it in this project and into `target`."""
    source = project.group_of(member)
    if source is not None:
        was_full = source.is_full
        source.remove_member(member)
        # a group that was not full is already waiting on the queue
        if was_full and source not in queue:
            queue.enqueue(source)
    else:
        project.mark_grouped(member)

    target.add_member(member)
    if not target.is_full and target not in queue:
        queue.enqueue(target)


class ClassGroupingGenerator:
    """
    Runs generation attempts until one finishes within the repairing budget.

    The budget in `desired_repairings` only ever grows: it is kept across attempts and
    across calls on the same generator.
    """

    def __init__(self, options: GroupingOptions, rng: Optional[random.Random] = None):
        self.options = options
        self.rng = rng or random.Random(options.random_seed)
        self.desired_repairings = 0
        self.net_repairings = 0
        self.attempts = 0
        self.budget_history: List[int] = []

    def generate(
        self,
        students: Sequence[Student],
        project_names: Sequence[str],
        prior_groupings: Optional[Sequence[ProjectGrouping]] = None,
    ) -> ClassGrouping:
        validate_request(students, project_names, self.options)
        prior_groupings = prior_groupings or []
        self.attempts = 0
        self.budget_history = []

        while True:
            self.attempts += 1
            self.budget_history.append(self.desired_repairings)
            context = AttemptContext(
                desired_repairings=self.desired_repairings,
                max_reshuffles=self.options.max_reshuffles,
            )
            roster, projects = self._start_attempt(students, project_names, prior_groupings, context)

            try:
                for project in projects:
                    fill_project(project, roster, context, self.rng)
            except ReshuffleQuotaExceeded as e:
                self.desired_repairings += 1
                logger.info("%s; increased desired repairings to %d", e, self.desired_repairings)
                continue

            if context.net_repairings <= self.desired_repairings:
                self.net_repairings = context.net_repairings
                logger.info(
                    "Succeeded at creating groupings with %d repairings after %d attempt(s)",
                    context.net_repairings, self.attempts,
                )
                return ClassGrouping(projects=[p.to_api() for p in projects])

            self.desired_repairings += 1
            logger.info(
                "Grouping finished with %d repairings; increased desired repairings to %d",
                context.net_repairings, self.desired_repairings,
            )

    def _start_attempt(self, students, project_names, prior_groupings, context):
        # fresh members every attempt so ledgers never carry over
        roster = [Member(student=s) for s in students]
        replay_prior_groupings({m.net_id: m for m in roster}, prior_groupings)
        projects = [
            Project(name, roster, self.options.optimal_group_size, self.options.prefer_smaller_groups, context)
            for name in project_names
        ]
        return roster, projects
