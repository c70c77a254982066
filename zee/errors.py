from __future__ import annotations


class ZeeError(Exception):
    """Base class for every error raised by the workflow."""


class ConfigurationError(ZeeError, ValueError):
    """Invalid workflow construction input (fatal)."""


class ParseError(ZeeError):
    """A planning-stage agent replied with something we cannot use."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class PlanParseError(ParseError):
    pass


class RouteParseError(ParseError):
    pass


class AgentNotFoundError(ZeeError, LookupError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Agent '{name}' not found. Available agents: {', '.join(available)}."
        )
        self.name = name
        self.available = list(available)


class GenerationError(ZeeError):
    """The Generator call failed or returned an unusable reply."""

    def __init__(self, agent_name: str, message: str) -> None:
        super().__init__(f"Generation failed for '{agent_name}': {message}")
        self.agent_name = agent_name
