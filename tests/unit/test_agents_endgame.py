from zee.agents.endgame import EndgameCompiler, endgame_agent
from zee.memory.transcript import ContextLog
from zee.utils.llm_clients import ScriptedLLMClient


def test_endgame_input_is_deterministic():
    client = ScriptedLLMClient(["first", "second"])
    compiler = EndgameCompiler(endgame_agent(client, temperature=0.5))
    log = ContextLog()
    log.append("user", "Write a haiku")
    log.append("writer", "Autumn moon rises")

    assert compiler.compile(log) == "first"
    assert compiler.compile(log) == "second"
    assert client.calls[0] == client.calls[1]
