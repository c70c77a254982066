from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError

from zee.agents.base import Agent
from zee.errors import GenerationError, PlanParseError
from zee.schemas.messages import Turn
from zee.schemas.tasks import Task
from zee.utils.llm_clients import LLMClient
from zee.utils.parsing import extract_json_array

logger = logging.getLogger(__name__)

PLANNER_NAME = "planner"

EXAMPLE_PLAN = [
    {
        "instructions": ["Analyze the logo design"],
        "attachments": [[{"type": "image", "image": "https://example.com/logo.png"}]],
        "dependencies": [],
    },
    {
        "instructions": ["Write brand guidelines based on logo analysis"],
        "attachments": [],
        "dependencies": ["Needs logo analysis to write guidelines"],
    },
]


def planner_agent(goal: str, llm_client: LLMClient, temperature: float) -> Agent:
    return Agent(
        name=PLANNER_NAME,
        description=f'You are a task planner that wants to complete the user\'s goal - "{goal}".',
        instructions=[
            "Plan the user's goal into smaller sequential tasks.",
            "Do NOT create a task that is not directly related to the user's goal.",
            "Do NOT create a final compilation task.",
            "Return a JSON array of tasks, where each task has:\n"
            "- instructions: array of instructions for completing the task\n"
            "- attachments: array of attachment groups, each an array of "
            "{type: 'image', image: url} or {type: 'file', data: url, mimeType: mimeType}\n"
            "- dependencies: array of strings describing what this task needs from other tasks\n"
            f"Example response format:\n{json.dumps(EXAMPLE_PLAN, indent=2)}",
            "Return ONLY the JSON array, no other text",
        ],
        llm_client=llm_client,
        temperature=temperature,
    )


class TaskPlanner:
    """Turns the workflow goal into an ordered list of tasks."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    def plan(self, goal: str) -> List[Task]:
        logger.info("Getting tasks from '%s'", self.agent.name)
        try:
            reply = self.agent.generate_text([Turn("user", goal)])
        except GenerationError as exc:
            raise PlanParseError(f"'{self.agent.name}' did not reply: {exc}") from exc
        tasks = parse_tasks(reply)
        logger.info("Planned %d task(s)", len(tasks))
        return tasks


def parse_tasks(reply: str) -> List[Task]:
    try:
        raw = extract_json_array(reply)
    except ValueError as exc:
        raise PlanParseError(f"Failed to parse 'planner' response: {exc}", raw=reply) from exc

    tasks: List[Task] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict) or not isinstance(entry.get("instructions"), list):
            raise PlanParseError(f"Invalid task format at index {index}", raw=reply)
        try:
            tasks.append(Task.model_validate(entry))
        except ValidationError as exc:
            raise PlanParseError(f"Invalid task format at index {index}: {exc}", raw=reply) from exc
    return tasks
