from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from zee.errors import ConfigurationError

DEFAULT_MAX_ITERATIONS = 50
DEFAULT_TEMPERATURE = 0.5


def check_temperature(value: float) -> float:
    if not 0 <= value <= 1:
        raise ConfigurationError(f"Invalid temperature {value}. Must be between 0 and 1.")
    return value


class LLMConfig(BaseModel):
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    temperature: float = DEFAULT_TEMPERATURE
    timeout: Optional[float] = 60.0
    max_retries: int = 2
    base_url: Optional[str] = None
    api_version: Optional[str] = None
    max_tool_rounds: int = 3
    structured_replies: bool = False

    @field_validator("temperature")
    @classmethod
    def _temperature_in_range(cls, value: float) -> float:
        return check_temperature(value)


class AgentConfig(BaseModel):
    description: str
    instructions: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)


class WorkflowConfig(BaseModel):
    max_iterations: int = DEFAULT_MAX_ITERATIONS


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    llm: LLMConfig
    agents: Dict[str, AgentConfig]
    workflow: WorkflowConfig
    logging: LoggingConfig


def load_config(env: str = "base", config_dir: str | Path = "configs") -> AppConfig:
    config_dir = Path(config_dir)
    base = _read_yaml(config_dir / "base.yaml")
    if env != "base":
        override_path = config_dir / f"{env}.yaml"
        if override_path.exists():
            base = _merge_dicts(base, _read_yaml(override_path))
    try:
        return AppConfig(
            llm=LLMConfig(**base.get("llm", {})),
            agents={k: AgentConfig(**v) for k, v in (base.get("agents") or {}).items()},
            workflow=WorkflowConfig(**(base.get("workflow") or {})),
            logging=LoggingConfig(**(base.get("logging") or {"level": "INFO"})),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_dir}: {exc}") from exc


def _read_yaml(path: Path) -> Dict[str, Any]:
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged
