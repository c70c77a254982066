from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

from pydantic import BaseModel, Field

from zee.errors import AgentNotFoundError, GenerationError
from zee.schemas.messages import Turn
from zee.tools.base import Tool

if TYPE_CHECKING:
    from zee.workflows.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


class ExecuteAgentArgs(BaseModel):
    agentName: str = Field(description="Name of the agent to ask.")
    tasks: List[str] = Field(description="Messages sent to the agent, one user turn each.")


class ExecuteAgentTool(Tool):
    """Lets the router fetch information from a single workflow agent."""

    def __init__(self, orchestrator: "Orchestrator") -> None:
        super().__init__(
            name="execute_agent",
            description="Get information from a single agent",
            args_schema=ExecuteAgentArgs,
        )
        self.orchestrator = orchestrator

    def run(self, query: Dict[str, Any]) -> str:
        name = query["agentName"]
        try:
            agent = self.orchestrator.get_added_agent(name)
            logger.info("Router consulting '%s'", name)
            return agent.generate_text([Turn("user", task) for task in query["tasks"]])
        except (AgentNotFoundError, GenerationError) as exc:
            return f"Error: {exc}"
