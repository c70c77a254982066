from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from zee.errors import GenerationError
from zee.schemas.messages import Turn
from zee.tools.base import Tool
from zee.utils.llm_clients import Generation, LLMClient
from zee.utils.settings import DEFAULT_TEMPERATURE, check_temperature

logger = logging.getLogger(__name__)


class Agent:
    """A named description + instructions pair backed by a Generator.

    Agents are immutable once built; the orchestrator owns them.
    """

    def __init__(
        self,
        name: str,
        description: str,
        llm_client: LLMClient,
        instructions: Iterable[str] | None = None,
        tools: Iterable[Tool] | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self._name = name
        self._description = description
        self._instructions: Tuple[str, ...] = tuple(instructions or ())
        self._tools: Tuple[Tool, ...] = tuple(tools or ())
        self._llm_client = llm_client
        self._temperature = check_temperature(temperature)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def instructions(self) -> Tuple[str, ...]:
        return self._instructions

    @property
    def tools(self) -> Tuple[Tool, ...]:
        return self._tools

    @property
    def temperature(self) -> float:
        return self._temperature

    def capability(self) -> dict:
        """Summary the router uses to pick an owner for each task."""
        return {
            "name": self.name,
            "description": self.description,
            "instructions": list(self.instructions),
        }

    def prompt(self, turns: Sequence[Turn]) -> List[Turn]:
        system = [Turn("system", self.description)]
        system.extend(Turn("system", instruction) for instruction in self.instructions)
        return system + list(turns)

    def generate(
        self,
        turns: Sequence[Turn],
        response_model: Optional[Type[BaseModel]] = None,
    ) -> Generation:
        try:
            result = self._llm_client.generate(
                self.prompt(turns),
                temperature=self.temperature,
                tools=self.tools,
                response_model=response_model,
            )
        except GenerationError:
            raise
        except Exception as exc:
            logger.error("Generator call for '%s' failed: %s", self.name, exc)
            raise GenerationError(self.name, str(exc)) from exc

        if result is None or (isinstance(result, str) and not result.strip()):
            raise GenerationError(self.name, "empty reply")
        return result

    def generate_text(self, turns: Sequence[Turn]) -> str:
        result = self.generate(turns)
        if isinstance(result, BaseModel):
            return result.model_dump_json()
        return result

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r})"
