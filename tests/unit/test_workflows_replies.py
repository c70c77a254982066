from zee.schemas.messages import AgentReply, ReplyKind
from zee.workflows.replies import parse_reply, to_reply


def test_markers_are_recognized_and_stripped():
    assert parse_reply("FOLLOWUP: what language?") == AgentReply(
        kind=ReplyKind.FOLLOWUP, payload="what language?"
    )
    assert parse_reply("  COMPLETE: done\n").payload == "done"
    assert parse_reply("ANSWER: Spanish").kind is ReplyKind.ANSWER


def test_unmarked_text_falls_back_to_complete():
    reply = parse_reply("Here is the poem")
    assert reply.kind is ReplyKind.COMPLETE
    assert reply.payload == "Here is the poem"
    assert reply.tagged is False


def test_structured_reply_passes_through():
    structured = AgentReply(kind=ReplyKind.FOLLOWUP, payload="which tone?")
    assert to_reply(structured) is structured
