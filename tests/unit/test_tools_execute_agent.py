from zee.agents.base import Agent
from zee.tools.execute_agent import ExecuteAgentTool
from zee.utils.llm_clients import ScriptedLLMClient
from zee.workflows.orchestrator import Orchestrator


def build_tool(writer_replies):
    writer_client = ScriptedLLMClient(writer_replies)
    writer = Agent(name="writer", description="Poet.", llm_client=writer_client)
    orchestrator = Orchestrator(goal="g", agents=[writer], llm_client=ScriptedLLMClient())
    return ExecuteAgentTool(orchestrator), writer_client


def test_asks_added_agent_directly():
    tool, writer_client = build_tool(["Autumn moon rises"])

    result = tool.invoke({"agentName": "writer", "tasks": ["Which haiku did you write?"]})

    assert result == "Autumn moon rises"
    assert [t.content for t in writer_client.calls[0] if t.role == "user"] == [
        "Which haiku did you write?"
    ]


def test_default_agents_are_not_reachable():
    tool, _ = build_tool([])

    result = tool.invoke({"agentName": "planner", "tasks": ["hi"]})

    assert result.startswith("Error: Agent 'planner' not found")
    assert "writer" in result


def test_generation_failure_becomes_error_text():
    tool, _ = build_tool([RuntimeError("model down")])

    result = tool.invoke({"agentName": "writer", "tasks": ["hi"]})

    assert result.startswith("Error: ")
    assert "model down" in result
