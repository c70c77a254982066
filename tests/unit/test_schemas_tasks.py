import pytest
from pydantic import ValidationError

from zee.schemas.tasks import AssignedTask, Dependency, Task


def test_dependency_accepts_router_spellings():
    assert Dependency.model_validate({"agentName": "writer", "task": "poem"}).reason == "poem"
    assert Dependency.model_validate({"agentName": "writer", "reason": "poem"}).reason == "poem"
    assert Dependency(agent_name="writer").as_dict() == {"agentName": "writer", "reason": ""}


def test_file_attachment_needs_mime_type():
    with pytest.raises(ValidationError):
        Task(instructions=["read"], attachments=[[{"type": "file", "data": "https://x/a.pdf"}]])
    task = Task(
        instructions=["read"],
        attachments=[[{"type": "file", "data": "https://x/a.pdf", "mimeType": "application/pdf"}]],
    )
    assert task.as_dict()["attachments"][0][0]["mimeType"] == "application/pdf"


def test_assigned_task_joins_instructions():
    task = AssignedTask.model_validate(
        {"agentName": "writer", "instructions": ["Write", "Polish"], "attachments": None}
    )
    assert task.content == "Write\nPolish"
    assert task.attachments == []
