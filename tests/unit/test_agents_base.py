import pytest

from zee.agents.base import Agent
from zee.errors import ConfigurationError, GenerationError
from zee.schemas.messages import Turn
from zee.utils.llm_clients import ScriptedLLMClient


def test_prompt_puts_description_and_instructions_first():
    client = ScriptedLLMClient(["ok"])
    agent = Agent(
        name="writer",
        description="You are a poet.",
        instructions=["Write one haiku.", "Be vivid."],
        llm_client=client,
    )

    assert agent.generate([Turn("user", "autumn")]) == "ok"
    assert client.calls[0] == [
        Turn("system", "You are a poet."),
        Turn("system", "Write one haiku."),
        Turn("system", "Be vivid."),
        Turn("user", "autumn"),
    ]


def test_generator_failure_becomes_generation_error():
    agent = Agent(name="x", description="d", llm_client=ScriptedLLMClient([ValueError("bad")]))
    with pytest.raises(GenerationError) as info:
        agent.generate([Turn("user", "hi")])
    assert info.value.agent_name == "x"


def test_empty_reply_is_unusable():
    agent = Agent(name="x", description="d", llm_client=ScriptedLLMClient(["   "]))
    with pytest.raises(GenerationError):
        agent.generate([Turn("user", "hi")])


def test_temperature_must_be_in_range():
    with pytest.raises(ConfigurationError):
        Agent(name="x", description="d", llm_client=ScriptedLLMClient(), temperature=2)


def test_agent_is_read_only():
    agent = Agent(name="x", description="d", llm_client=ScriptedLLMClient(), instructions=["a"])
    with pytest.raises(AttributeError):
        agent.name = "y"
    assert agent.instructions == ("a",)
