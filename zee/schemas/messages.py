from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.json_schema import SkipJsonSchema

from zee.schemas.tasks import Dependency

USER_ROLE = "user"
ERROR_ROLE = "error"

AttachmentGroup = List[Dict[str, Any]]


@dataclass(frozen=True)
class Turn:
    """Single conversation turn handed to the Generator."""

    role: str
    content: Union[str, AttachmentGroup]


@dataclass(frozen=True)
class ContextItem:
    """Role-tagged record in the workflow's context log."""

    role: str
    content: str

    def as_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class ActionType(str, Enum):
    REQUEST = "request"
    FOLLOWUP = "followup"
    RESPONSE = "response"
    COMPLETE = "complete"


@dataclass
class ActionMetadata:
    dependencies: List[Dependency] = field(default_factory=list)
    attachments: List[AttachmentGroup] = field(default_factory=list)
    is_task_complete: bool = False
    # Only set on follow-up chains: who asked, and what they were working on.
    original_from: Optional[str] = None
    original_task: Optional[str] = None

    @property
    def dependency_names(self) -> List[str]:
        return [dep.agent_name for dep in self.dependencies]


@dataclass
class Action:
    """One queued unit of inter-agent communication."""

    type: ActionType
    sender: str
    to: str
    content: str
    metadata: ActionMetadata = field(default_factory=ActionMetadata)

    @property
    def is_task_complete(self) -> bool:
        return self.metadata.is_task_complete


class ReplyKind(str, Enum):
    FOLLOWUP = "followup"
    COMPLETE = "complete"
    ANSWER = "answer"


class AgentReply(BaseModel):
    """Tagged reply an agent returns for one dispatched action."""

    kind: ReplyKind = Field(
        description="'followup' to ask a question, 'complete' to finish the task, "
        "'answer' when replying to another agent's question."
    )
    payload: str = Field(description="The question, the result, or the answer.")
    # False when the kind was inferred from an unformatted text reply.
    tagged: SkipJsonSchema[bool] = Field(default=True, exclude=True)


@dataclass
class WorkflowResult:
    content: str
    context: List[ContextItem]
    iterations: int = 0
