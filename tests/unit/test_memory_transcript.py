from zee.memory.transcript import ContextLog
from zee.schemas.messages import Action, ActionMetadata, ActionType
from zee.schemas.tasks import Dependency


def build_log():
    log = ContextLog()
    log.append("user", "goal")
    log.append("writer", "poem")
    log.append("critic", "review")
    log.append("error", "oops")
    return log


def action(to, type_=ActionType.REQUEST, deps=()):
    metadata = ActionMetadata(dependencies=[Dependency(agent_name=d) for d in deps])
    return Action(type=type_, sender="router", to=to, content="task", metadata=metadata)


def test_router_followup_sees_everything():
    relevant = build_log().relevant_to(action("router", ActionType.FOLLOWUP), "router")
    assert relevant == "user: goal\nwriter: poem\ncritic: review\nerror: oops"


def test_router_request_skips_the_goal():
    relevant = build_log().relevant_to(action("router"), "router")
    assert relevant == "writer: poem\ncritic: review\nerror: oops"


def test_agent_sees_only_goal_and_dependencies():
    relevant = build_log().relevant_to(action("translator", deps=["writer"]), "router")
    assert relevant == "user: goal\nwriter: poem"
    assert "critic" not in relevant


def test_empty_selection_is_none():
    log = ContextLog()
    log.append("writer", "poem")
    assert log.relevant_to(action("translator"), "router") is None


def test_log_is_append_only_view():
    log = build_log()
    snapshot = log.all()
    snapshot.clear()
    assert len(log) == 4
    assert log.roles() == ["user", "writer", "critic", "error"]
