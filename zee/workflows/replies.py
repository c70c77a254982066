from __future__ import annotations

from typing import Union

from pydantic import BaseModel

from zee.schemas.messages import AgentReply, ReplyKind

FOLLOWUP_MARKER = "FOLLOWUP:"
COMPLETE_MARKER = "COMPLETE:"
ANSWER_MARKER = "ANSWER:"

_MARKERS = (
    (FOLLOWUP_MARKER, ReplyKind.FOLLOWUP),
    (COMPLETE_MARKER, ReplyKind.COMPLETE),
    (ANSWER_MARKER, ReplyKind.ANSWER),
)


def parse_reply(text: str) -> AgentReply:
    """Classify a plain-text reply by its leading marker.

    Unmarked text comes back as ``complete`` with ``tagged=False`` so the
    caller can log the fallback.
    """
    stripped = text.strip()
    for marker, kind in _MARKERS:
        if stripped.startswith(marker):
            return AgentReply(kind=kind, payload=stripped[len(marker):].strip())
    return AgentReply(kind=ReplyKind.COMPLETE, payload=stripped, tagged=False)


def to_reply(result: Union[str, BaseModel]) -> AgentReply:
    if isinstance(result, AgentReply):
        return result
    if isinstance(result, BaseModel):
        return parse_reply(result.model_dump_json())
    return parse_reply(result)
