from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from zee.agents.base import Agent
from zee.agents.endgame import ENDGAME_NAME, EndgameCompiler, endgame_agent
from zee.agents.planner import PLANNER_NAME, TaskPlanner, planner_agent
from zee.agents.router import ROUTER_NAME, TaskRouter, router_agent
from zee.errors import AgentNotFoundError, ConfigurationError, GenerationError
from zee.memory.transcript import ContextLog
from zee.schemas.messages import ERROR_ROLE, USER_ROLE, WorkflowResult
from zee.schemas.tasks import AssignedTask
from zee.tools.execute_agent import ExecuteAgentTool
from zee.utils.llm_clients import LLMClient
from zee.utils.settings import DEFAULT_MAX_ITERATIONS, DEFAULT_TEMPERATURE, check_temperature
from zee.workflows.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

DEFAULT_AGENT_NAMES = (PLANNER_NAME, ROUTER_NAME, ENDGAME_NAME)


class Orchestrator:
    """Plans, routes, dispatches and compiles one goal across a set of agents."""

    def __init__(
        self,
        goal: str,
        agents: Iterable[Agent],
        llm_client: LLMClient,
        max_iterations: int | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        if max_iterations is None or max_iterations <= 0:
            max_iterations = DEFAULT_MAX_ITERATIONS
        self.max_iterations = max_iterations
        self.temperature = check_temperature(temperature)
        self.goal = goal

        logger.info("Initializing workflow | goal: %s", goal)

        self.added_agents: Dict[str, Agent] = {}
        for agent in agents:
            if agent.name in self.added_agents or agent.name in DEFAULT_AGENT_NAMES:
                raise ConfigurationError(f"Agent '{agent.name}' already exists")
            self.added_agents[agent.name] = agent

        self.planner = TaskPlanner(planner_agent(goal, llm_client, self.temperature))
        self.router = TaskRouter(
            router_agent(llm_client, self.temperature, tools=[ExecuteAgentTool(self)])
        )
        self.endgame = EndgameCompiler(endgame_agent(llm_client, self.temperature))

        self.agents: Dict[str, Agent] = {
            PLANNER_NAME: self.planner.agent,
            ROUTER_NAME: self.router.agent,
            ENDGAME_NAME: self.endgame.agent,
            **self.added_agents,
        }

        self.context = ContextLog()
        self.context.append(USER_ROLE, goal)
        self.dispatcher = Dispatcher(self.agents.values(), self.context, router_name=ROUTER_NAME)

    def get_added_agent(self, name: str) -> Agent:
        agent = self.added_agents.get(name)
        if agent is None:
            raise AgentNotFoundError(name, list(self.added_agents))
        return agent

    def prepare(self) -> List[AssignedTask]:
        """Plan and route the goal, then seed the action queue.

        Parse failures propagate; nothing has been dispatched yet when they do.
        """
        tasks = self.planner.plan(self.goal)
        assigned = self.router.route(tasks, self.added_agents.values())
        self.dispatcher.seed(assigned)
        return assigned

    def run(self) -> WorkflowResult:
        logger.info("Starting workflow execution")
        self.prepare()

        iterations = self.dispatcher.run(self.max_iterations)

        try:
            content = self.endgame.compile(self.context)
        except GenerationError as exc:
            logger.error("Final compilation failed: %s", exc)
            content = self.context.append(
                ERROR_ROLE,
                f"Error in communication between {ROUTER_NAME} -> {ENDGAME_NAME}: {exc}",
            ).content
        logger.info("Workflow completed in %d iterations", iterations)
        return WorkflowResult(content=content, context=self.context.all(), iterations=iterations)
