from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional

from zee.schemas.messages import Action


class ActionQueue:
    """Two-priority queue of pending actions.

    The resume lane holds actions spawned while processing another action
    (follow-ups, answers, completions). It behaves as a stack: the newest
    entry is dispatched first, so an open follow-up chain resolves before
    sibling tasks advance. The task lane holds the routed seed tasks in plan
    order and is only drained once the resume lane is empty.
    """

    def __init__(self) -> None:
        self._resume: Deque[Action] = deque()
        self._tasks: Deque[Action] = deque()

    def push_resume(self, action: Action) -> None:
        self._resume.appendleft(action)

    def push_task(self, action: Action) -> None:
        self._tasks.append(action)

    def pop(self) -> Action:
        if self._resume:
            return self._resume.popleft()
        if self._tasks:
            return self._tasks.popleft()
        raise IndexError("pop from an empty action queue")

    def peek(self) -> Optional[Action]:
        if self._resume:
            return self._resume[0]
        if self._tasks:
            return self._tasks[0]
        return None

    def snapshot(self) -> List[Action]:
        """Pending actions in dispatch order."""
        return list(self._resume) + list(self._tasks)

    def __len__(self) -> int:
        return len(self._resume) + len(self._tasks)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[Action]:
        return iter(self.snapshot())
