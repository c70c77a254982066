from __future__ import annotations

import logging

from zee.agents.base import Agent
from zee.memory.transcript import ContextLog
from zee.schemas.messages import Turn
from zee.utils.llm_clients import LLMClient

logger = logging.getLogger(__name__)

ENDGAME_NAME = "endgame"


def endgame_agent(llm_client: LLMClient, temperature: float) -> Agent:
    return Agent(
        name=ENDGAME_NAME,
        description="You conclude the workflow based on all completed tasks.",
        instructions=[
            "Review all completed tasks and compile in a single response.",
            "Ensure the response addresses the original goal.",
        ],
        llm_client=llm_client,
        temperature=temperature,
    )


class EndgameCompiler:
    """Compiles the final answer from the full context log."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    def compile(self, context: ContextLog) -> str:
        logger.info("Getting final compilation from '%s'", self.agent.name)
        return self.agent.generate_text([Turn("user", context.to_json())])
