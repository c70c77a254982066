from __future__ import annotations

import argparse
import logging
from typing import List

from zee.agents.base import Agent
from zee.errors import ConfigurationError, ParseError
from zee.telemetry.logging import setup_logging
from zee.tools.base import Tool
from zee.tools.notes import SharedNotes
from zee.utils.llm_clients import LLMClient, build_llm_client
from zee.utils.settings import AppConfig, load_config
from zee.utils.setup import load_api_keys
from zee.workflows.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


def build_agents(config: AppConfig, llm_client: LLMClient) -> List[Agent]:
    notes = SharedNotes()
    agents = []
    for name, agent_config in config.agents.items():
        tools: List[Tool] = []
        for tool_name in agent_config.tools:
            if tool_name != "notes":
                raise ConfigurationError(f"Unknown tool '{tool_name}' for agent '{name}'")
            tools.extend(notes.tools())
        agents.append(
            Agent(
                name=name,
                description=agent_config.description,
                instructions=agent_config.instructions,
                tools=tools,
                llm_client=llm_client,
                temperature=config.llm.temperature,
            )
        )
    return agents


def build_orchestrator(goal: str, config: AppConfig, llm_client: LLMClient) -> Orchestrator:
    return Orchestrator(
        goal=goal,
        agents=build_agents(config, llm_client),
        llm_client=llm_client,
        max_iterations=config.workflow.max_iterations,
        temperature=config.llm.temperature,
    )


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a goal through the multi-agent workflow.")
    parser.add_argument("goal", help="Goal the agents should accomplish.")
    parser.add_argument("--env", default="base", help="Config environment (base, dev, prod, ...).")
    parser.add_argument("--config-dir", default="configs", help="Directory holding <env>.yaml files.")
    parser.add_argument("--secrets", default="config.yml", help="Optional API key file.")
    parser.add_argument("--show-context", action="store_true", help="Print the full context trace.")
    args = parser.parse_args(argv)

    config = load_config(args.env, args.config_dir)
    setup_logging(config.logging.level)
    load_api_keys(args.secrets)

    orchestrator = build_orchestrator(args.goal, config, build_llm_client(config.llm))
    try:
        result = orchestrator.run()
    except ParseError as exc:
        logger.error("Workflow could not start: %s", exc)
        return 1

    if args.show_context:
        for item in result.context:
            print(f"\n[{item.role}]\n{item.content}")
    print(f"\n=== FINAL ANSWER ===\n{result.content}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
