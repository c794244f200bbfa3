# teamgen/domain/grouping.py
"""
Grouping options and group-size partitioning.

Pure functions only: given a roster size and the optimal group size, decide how many
groups a project gets and how large each one is.
"""
from typing import List, Tuple, Optional
from dataclasses import dataclass

# the number of reshuffles one attempt may use before it is abandoned
DEFAULT_MAX_RESHUFFLES = 1000


@dataclass
class GroupingOptions:
    optimal_group_size: int
    prefer_smaller_groups: bool = False
    max_reshuffles: int = DEFAULT_MAX_RESHUFFLES
    random_seed: Optional[int] = None


def determine_group_sizes(num_members: int, optimal_group_size: int, prefer_smaller_groups: bool) -> List[int]:
    """
    Decide the group sizes for a roster of `num_members`.

    When the roster does not divide evenly, the leftover group is balanced against the
    full ones: with `prefer_smaller_groups` members are pulled into it from the largest
    groups, otherwise it is drained into the other groups. Sizes come back sorted
    smallest to largest.

    Example:
    >>> determine_group_sizes(21, 4, True)
    [3, 3, 3, 4, 4, 4]
    >>> determine_group_sizes(21, 4, False)
    [4, 4, 4, 4, 5]
    """
    if num_members < optimal_group_size:
        return [num_members]

    num_optimal_groups = num_members // optimal_group_size
    remaining = num_members - optimal_group_size * num_optimal_groups

    if remaining > 0:
        if prefer_smaller_groups:
            return _smaller_group_sizes(optimal_group_size, num_optimal_groups, remaining)
        return _larger_group_sizes(optimal_group_size, num_optimal_groups, remaining)

    return [optimal_group_size] * num_optimal_groups


def _smaller_group_sizes(optimal_group_size: int, num_optimal_groups: int, remaining: int) -> List[int]:
    # move one member at a time from the largest group to the smallest one
    sizes = [optimal_group_size] * num_optimal_groups + [remaining]
    while largest_inequality(sizes) >= 2:
        smallest, largest = indices_of_extremes(sizes)
        sizes[largest] -= 1
        sizes[smallest] += 1
    return sorted(sizes)


def _larger_group_sizes(optimal_group_size: int, num_optimal_groups: int, remaining: int) -> List[int]:
    # move one member at a time from the smallest group to the second smallest one
    sizes = [optimal_group_size] * num_optimal_groups + [remaining]
    while largest_inequality(sizes) >= 2:
        smallest, second_smallest = indices_of_two_smallest(sizes)
        sizes[second_smallest] += 1
        sizes[smallest] -= 1
        if sizes[smallest] == 0:
            del sizes[smallest]
    return sorted(sizes)


def largest_inequality(numbers: List[int]) -> int:
    """Largest difference between any two numbers in the list (0 for an empty list)."""
    if not numbers:
        return 0
    return max(numbers) - min(numbers)


def indices_of_extremes(numbers: List[int]) -> Tuple[int, int]:
    """
    Return (index of smallest, index of largest). Ties resolve to the first occurrence.

    >>> indices_of_extremes([2, 1, 1, 3, 5, 5])
    (1, 4)
    """
    smallest_index = min(range(len(numbers)), key=lambda i: numbers[i])
    largest_index = max(range(len(numbers)), key=lambda i: numbers[i])
    return smallest_index, largest_index


def indices_of_two_smallest(numbers: List[int]) -> Tuple[int, int]:
    """
    Return (index of smallest, index of second smallest).

    The second smallest is searched for with the smallest entry excluded, so a tie
    for the smallest value resolves to the next occurrence of that value.

    >>> indices_of_two_smallest([1, 1, 1, 1])
    (0, 1)
    """
    smallest_index, _ = indices_of_extremes(numbers)
    candidates = [i for i in range(len(numbers)) if i != smallest_index]
    second_smallest_index = min(candidates, key=lambda i: numbers[i])
    return smallest_index, second_smallest_index
