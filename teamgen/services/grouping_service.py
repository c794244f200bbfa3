# teamgen/services/grouping_service.py
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from teamgen.config.settings import Settings, settings as default_settings
from teamgen.domain.generator import ClassGroupingGenerator
from teamgen.domain.grouping import GroupingOptions, determine_group_sizes
from teamgen.domain.errors import InvalidGroupingRequest
from teamgen.domain.models import ClassGrouping, ProjectGrouping, Student

logger = logging.getLogger(__name__)


@dataclass
class GroupingRun:
    grouping: ClassGrouping
    repairings: int
    desired_repairings: int
    attempts: int


class GroupingService:
    def __init__(self, settings: Settings = None):
        self.settings = settings or default_settings

    def options_for(
        self,
        optimal_group_size: Optional[int] = None,
        prefer_smaller_groups: Optional[bool] = None,
        seed: Optional[int] = None,
    ) -> GroupingOptions:
        """Per-request values win over the configured defaults."""
        return GroupingOptions(
            optimal_group_size=optimal_group_size if optimal_group_size is not None else self.settings.OPTIMAL_GROUP_SIZE,
            prefer_smaller_groups=(
                prefer_smaller_groups if prefer_smaller_groups is not None else self.settings.PREFER_SMALLER_GROUPS
            ),
            max_reshuffles=self.settings.MAX_RESHUFFLES,
            random_seed=seed if seed is not None else self.settings.RANDOM_SEED,
        )

    def generate(
        self,
        students: List[Student],
        project_names: List[str],
        prior_groupings: Optional[List[ProjectGrouping]] = None,
        options: Optional[GroupingOptions] = None,
        rng: Optional[random.Random] = None,
    ) -> GroupingRun:
        options = options or self.options_for()
        logger.info(
            "Generating groups of %d for %d members across projects %s (%d prior groupings)",
            options.optimal_group_size, len(students), project_names, len(prior_groupings or []),
        )
        generator = ClassGroupingGenerator(options, rng=rng)
        grouping = generator.generate(students, project_names, prior_groupings)
        return GroupingRun(
            grouping=grouping,
            repairings=generator.net_repairings,
            desired_repairings=generator.desired_repairings,
            attempts=generator.attempts,
        )

    def group_sizes(self, num_members: int, optimal_group_size: Optional[int] = None, prefer_smaller_groups: Optional[bool] = None) -> List[int]:
        options = self.options_for(optimal_group_size, prefer_smaller_groups)
        if num_members < 1:
            raise InvalidGroupingRequest(f"roster size must be positive, got {num_members}")
        if options.optimal_group_size < 1:
            raise InvalidGroupingRequest(f"optimal group size must be positive, got {options.optimal_group_size}")
        return determine_group_sizes(num_members, options.optimal_group_size, options.prefer_smaller_groups)
