from zee.evaluation.metrics import EvaluationResult, success_rate, summarize_run
from zee.schemas.messages import ContextItem, WorkflowResult


def test_success_rate():
    results = [
        EvaluationResult(task_id="a", success=True),
        EvaluationResult(task_id="b", success=False),
    ]
    assert success_rate(results) == 0.5
    assert success_rate([]) == 0.0


def test_summarize_run_counts_roles():
    result = WorkflowResult(
        content="final",
        context=[
            ContextItem("user", "goal"),
            ContextItem("writer", "poem"),
            ContextItem("error", "Error in communication between router -> ghost"),
            ContextItem("writer", "second poem"),
        ],
        iterations=6,
    )
    summary = summarize_run(result)
    assert summary.completions == {"writer": 2}
    assert summary.errors == 1
    assert summary.context_items == 4
    assert not summary.succeeded
