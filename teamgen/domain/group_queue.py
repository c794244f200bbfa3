# teamgen/domain/group_queue.py
from collections import deque
from typing import Deque, Optional

from teamgen.domain.group import Group


class FillQueue:
    """FIFO of groups that still need members."""

    def __init__(self):
        self._groups: Deque[Group] = deque()

    def enqueue(self, group: Group) -> None:
        self._groups.append(group)

    def dequeue(self) -> Optional[Group]:
        """Remove and return the oldest group, or None when the queue is empty."""
        if not self._groups:
            return None
        return self._groups.popleft()

    def peek(self) -> Optional[Group]:
        if not self._groups:
            return None
        return self._groups[0]

    def is_empty(self) -> bool:
        return not self._groups

    def __contains__(self, group: Group) -> bool:
        return any(g is group for g in self._groups)

    def __len__(self) -> int:
        return len(self._groups)
