from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from zee.schemas.messages import ERROR_ROLE, USER_ROLE, WorkflowResult


@dataclass
class EvaluationResult:
    task_id: str
    success: bool
    latency_ms: int | None = None


@dataclass
class RunSummary:
    iterations: int
    context_items: int
    errors: int
    completions: Dict[str, int] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.errors == 0 and bool(self.completions)


def summarize_run(result: WorkflowResult) -> RunSummary:
    roles = Counter(item.role for item in result.context)
    errors = roles.pop(ERROR_ROLE, 0)
    roles.pop(USER_ROLE, None)
    return RunSummary(
        iterations=result.iterations,
        context_items=len(result.context),
        errors=errors,
        completions=dict(roles),
    )


def success_rate(results: List[EvaluationResult]) -> float:
    if not results:
        return 0.0
    successes = sum(1 for r in results if r.success)
    return successes / len(results)
