from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Callable, List, Optional

from zee.workflows.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


class RunRegistry:
    """Session id -> orchestrator map owned by whatever hosts the workflows.

    Runs are added with :meth:`create` and leave only through :meth:`evict`
    or when ``max_runs`` is exceeded, in which case the oldest run goes first.
    """

    def __init__(self, max_runs: int = 32) -> None:
        if max_runs <= 0:
            raise ValueError("max_runs must be positive")
        self.max_runs = max_runs
        self._runs: "OrderedDict[str, Orchestrator]" = OrderedDict()

    def create(self, session_id: str, factory: Callable[[], Orchestrator]) -> Orchestrator:
        if session_id in self._runs:
            raise KeyError(f"run '{session_id}' already registered")
        orchestrator = factory()
        self._runs[session_id] = orchestrator
        while len(self._runs) > self.max_runs:
            oldest, _ = self._runs.popitem(last=False)
            logger.info("Evicted run '%s' (registry full)", oldest)
        return orchestrator

    def get(self, session_id: str) -> Optional[Orchestrator]:
        return self._runs.get(session_id)

    def evict(self, session_id: str) -> Optional[Orchestrator]:
        orchestrator = self._runs.pop(session_id, None)
        if orchestrator is not None:
            logger.info("Evicted run '%s'", session_id)
        return orchestrator

    def session_ids(self) -> List[str]:
        return list(self._runs)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._runs

    def __len__(self) -> int:
        return len(self._runs)
