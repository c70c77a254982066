from __future__ import annotations

from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Attachments = List[List[Dict[str, Any]]]


def _check_attachments(value: Attachments) -> Attachments:
    for group in value:
        for part in group:
            kind = part.get("type")
            if kind == "image" and "image" in part:
                continue
            if kind == "file" and "data" in part and "mimeType" in part:
                continue
            raise ValueError(f"unsupported attachment part: {part!r}")
    return value


class Dependency(BaseModel):
    """Output another agent must produce before a task can run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    agent_name: str = Field(validation_alias=AliasChoices("agentName", "agent_name"))
    reason: str = Field(
        default="", validation_alias=AliasChoices("reason", "task", "description")
    )

    def as_dict(self) -> Dict[str, str]:
        return {"agentName": self.agent_name, "reason": self.reason}


class Task(BaseModel):
    """Unit of work produced by the planner."""

    model_config = ConfigDict(frozen=True)

    instructions: List[str]
    dependencies: List[str] = Field(default_factory=list)
    attachments: Attachments = Field(default_factory=list)

    @field_validator("dependencies", "attachments", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("attachments", mode="after")
    @classmethod
    def _attachments(cls, value: Attachments) -> Attachments:
        return _check_attachments(value)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "instructions": list(self.instructions),
            "attachments": [list(group) for group in self.attachments],
            "dependencies": list(self.dependencies),
        }


class AssignedTask(BaseModel):
    """Task after routing: an owner plus structured dependencies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    agent_name: str = Field(validation_alias=AliasChoices("agentName", "agent_name"))
    instructions: List[str]
    dependencies: List[Dependency] = Field(default_factory=list)
    attachments: Attachments = Field(default_factory=list)

    @field_validator("dependencies", "attachments", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("attachments", mode="after")
    @classmethod
    def _attachments(cls, value: Attachments) -> Attachments:
        return _check_attachments(value)

    @property
    def content(self) -> str:
        return "\n".join(self.instructions)
