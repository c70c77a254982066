from zee.tools.base import FunctionTool
from zee.tools.notes import ReadNotesArgs, SharedNotes


def test_notes_are_shared_between_tools():
    notes = SharedNotes()
    save, read = notes.tools()

    assert read.invoke({}) == "(no notes yet)"
    assert save.invoke({"note": "haiku drafted"}) == "Saved. Notes now have 1 entries."
    assert read.invoke({}) == "- haiku drafted"


def test_function_tool_exposes_langchain_tool():
    tool = FunctionTool(
        name="ping",
        description="Reply with pong.",
        args_schema=ReadNotesArgs,
        func=lambda: "pong",
    )
    lc_tool = tool.as_langchain_tool()
    assert lc_tool.name == "ping"
    assert lc_tool.invoke({}) == "pong"
