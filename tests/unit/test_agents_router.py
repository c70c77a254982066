import json

import pytest

from zee.agents.base import Agent
from zee.agents.router import TaskRouter, parse_assignments, router_agent
from zee.errors import RouteParseError
from zee.schemas.tasks import Task
from zee.utils.llm_clients import ScriptedLLMClient


def test_parse_assignments_normalizes_dependencies():
    reply = json.dumps(
        [
            {"agentName": "writer", "instructions": ["Write"], "dependencies": []},
            {
                "agentName": "translator",
                "instructions": ["Translate"],
                "dependencies": [{"agentName": "writer", "task": "needs the poem"}],
            },
        ]
    )

    writer_task, translator_task = parse_assignments(reply)

    assert writer_task.agent_name == "writer"
    [dep] = translator_task.dependencies
    assert (dep.agent_name, dep.reason) == ("writer", "needs the poem")
    assert translator_task.content == "Translate"


@pytest.mark.parametrize(
    "reply",
    [
        "writer should do it",
        '{"agentName": "writer"}',
        '[{"instructions": ["Write"]}]',
        '[{"agentName": "writer"}]',
        '[{"agentName": "writer", "instructions": ["x"], "dependencies": ["writer"]}]',
    ],
)
def test_parse_assignments_rejects_malformed_replies(reply):
    with pytest.raises(RouteParseError):
        parse_assignments(reply)


def test_route_keeps_unknown_agent_for_dispatcher(caplog):
    client = ScriptedLLMClient(['[{"agentName": "ghost", "instructions": ["Write"]}]'])
    router = TaskRouter(router_agent(client, temperature=0.5))
    writer = Agent(name="writer", description="Poet.", llm_client=client)

    [assigned] = router.route([Task(instructions=["Write"])], [writer])

    assert assigned.agent_name == "ghost"
    assert "unknown agent 'ghost'" in caplog.text
    assert json.loads(client.calls[0][-1].content) == [
        {"instructions": ["Write"], "attachments": [], "dependencies": []}
    ]
