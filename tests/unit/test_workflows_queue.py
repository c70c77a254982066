import pytest

from zee.schemas.messages import Action, ActionType
from zee.workflows.queue import ActionQueue


def make(to):
    return Action(type=ActionType.REQUEST, sender="router", to=to, content=to)


def test_resume_lane_drains_before_tasks_newest_first():
    queue = ActionQueue()
    queue.push_task(make("task-1"))
    queue.push_task(make("task-2"))
    queue.push_resume(make("resume-1"))
    queue.push_resume(make("resume-2"))

    assert [a.to for a in queue.snapshot()] == ["resume-2", "resume-1", "task-1", "task-2"]
    assert queue.peek().to == "resume-2"
    assert [queue.pop().to for _ in range(4)] == ["resume-2", "resume-1", "task-1", "task-2"]
    assert not queue


def test_pop_from_empty_queue_raises():
    queue = ActionQueue()
    assert queue.peek() is None
    with pytest.raises(IndexError):
        queue.pop()
