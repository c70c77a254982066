import pytest

from zee.errors import ConfigurationError
from zee.utils.settings import load_config

BASE = """
llm:
  provider: openai
  model: gpt-4o-mini
  temperature: 0.5
workflow:
  max_iterations: 50
agents:
  writer:
    description: Poet.
    instructions: [Write a haiku.]
"""


def write_configs(tmp_path, override=None):
    (tmp_path / "base.yaml").write_text(BASE, encoding="utf-8")
    if override is not None:
        (tmp_path / "dev.yaml").write_text(override, encoding="utf-8")
    return tmp_path


def test_load_base_config(tmp_path):
    config = load_config("base", write_configs(tmp_path))
    assert config.llm.model == "gpt-4o-mini"
    assert config.workflow.max_iterations == 50
    assert config.logging.level == "INFO"
    assert config.agents["writer"].instructions == ["Write a haiku."]


def test_env_override_is_merged(tmp_path):
    override = "llm:\n  temperature: 0.1\nlogging:\n  level: DEBUG\n"
    config = load_config("dev", write_configs(tmp_path, override))
    assert config.llm.temperature == 0.1
    assert config.llm.model == "gpt-4o-mini"
    assert config.logging.level == "DEBUG"


def test_missing_override_falls_back_to_base(tmp_path):
    config = load_config("prod", write_configs(tmp_path))
    assert config.llm.temperature == 0.5


def test_invalid_temperature_is_a_configuration_error(tmp_path):
    config_dir = write_configs(tmp_path, "llm:\n  temperature: 3\n")
    with pytest.raises(ConfigurationError):
        load_config("dev", config_dir)
