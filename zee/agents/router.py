from __future__ import annotations

import json
import logging
from typing import Iterable, List

from pydantic import ValidationError

from zee.agents.base import Agent
from zee.errors import GenerationError, RouteParseError
from zee.schemas.messages import Turn
from zee.schemas.tasks import AssignedTask, Task
from zee.tools.base import Tool
from zee.utils.llm_clients import LLMClient
from zee.utils.parsing import extract_json_array

logger = logging.getLogger(__name__)

ROUTER_NAME = "router"

ROUTING_STEPS = """For each task:
1. Analyze the task requirements
2. Select the most suitable agent based on their name, description, and instructions
3. Convert the dependencies from string[] to {agentName: string, reason: string}[]:
   - For each dependency, determine which agent produces the needed output
   - Create objects with "agentName" and "reason" fields instead of string dependencies
4. Return a JSON array where each item includes the original task data plus:
   - agentName: string (the name of the chosen agent)
   - dependencies: the restructured dependencies array with objects
5. Reorder the tasks based on the dependencies for easier processing

IMPORTANT: Return ONLY the JSON array, no other text"""


def router_agent(
    llm_client: LLMClient,
    temperature: float,
    tools: Iterable[Tool] | None = None,
) -> Agent:
    return Agent(
        name=ROUTER_NAME,
        description="You coordinate information flow between agents and assign tasks "
        "to achieve the user's goal.",
        llm_client=llm_client,
        tools=tools,
        temperature=temperature,
    )


class TaskRouter:
    """Assigns every planned task to an agent and resolves its dependencies."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    def route(self, tasks: List[Task], agents: Iterable[Agent]) -> List[AssignedTask]:
        agents = list(agents)
        capabilities = json.dumps([agent.capability() for agent in agents])
        turns = [
            Turn("system", f"The available agents are: {capabilities}\n{ROUTING_STEPS}"),
            Turn("user", json.dumps([task.as_dict() for task in tasks])),
        ]
        logger.info("Assigning agents to %d task(s) via '%s'", len(tasks), self.agent.name)
        try:
            reply = self.agent.generate_text(turns)
        except GenerationError as exc:
            raise RouteParseError(f"'{self.agent.name}' did not reply: {exc}") from exc

        assigned = parse_assignments(reply)
        known = {agent.name for agent in agents}
        for index, task in enumerate(assigned, start=1):
            if task.agent_name not in known:
                logger.warning("Task %d assigned to unknown agent '%s'", index, task.agent_name)
            _log_task(index, len(assigned), task)
        return assigned


def parse_assignments(reply: str) -> List[AssignedTask]:
    try:
        raw = extract_json_array(reply)
    except ValueError as exc:
        raise RouteParseError(f"Failed to parse 'router' response: {exc}", raw=reply) from exc

    assigned: List[AssignedTask] = []
    for index, entry in enumerate(raw):
        if (
            not isinstance(entry, dict)
            or not (entry.get("agentName") or entry.get("agent_name"))
            or not isinstance(entry.get("instructions"), list)
        ):
            raise RouteParseError(f"Invalid task format at index {index}", raw=reply)
        try:
            assigned.append(AssignedTask.model_validate(entry))
        except ValidationError as exc:
            raise RouteParseError(f"Invalid task format at index {index}: {exc}", raw=reply) from exc
    return assigned


def _log_task(index: int, total: int, task: AssignedTask) -> None:
    logger.info("Task %d of %d assigned to '%s'", index, total, task.agent_name)
    for i, instruction in enumerate(task.instructions, start=1):
        logger.debug("  %d. %s", i, instruction)
    for dep in task.dependencies:
        logger.debug("  needs input from '%s': %s", dep.agent_name, dep.reason)
    for group in task.attachments:
        for part in group:
            preview = str(part.get("image") or part.get("data"))[:60]
            logger.debug("  attachment %s: %s", part.get("type"), preview)
