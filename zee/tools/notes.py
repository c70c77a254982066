from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from zee.tools.base import Tool


class SaveNoteArgs(BaseModel):
    note: str = Field(description="Short note to share with the other agents.")


class ReadNotesArgs(BaseModel):
    pass


class SharedNotes:
    """Scratchpad shared by the agents of one workflow."""

    def __init__(self) -> None:
        self._notes: List[str] = []

    def add(self, note: str) -> int:
        self._notes.append(note)
        return len(self._notes)

    def render(self) -> str:
        return "\n".join(f"- {n}" for n in self._notes) or "(no notes yet)"

    def tools(self) -> List[Tool]:
        return [SaveNoteTool(self), ReadNotesTool(self)]


class SaveNoteTool(Tool):
    def __init__(self, notes: SharedNotes) -> None:
        super().__init__(
            name="save_note",
            description="Append a short note to a shared note list accessible by all agents.",
            args_schema=SaveNoteArgs,
        )
        self.notes = notes

    def run(self, query: Dict[str, Any]) -> str:
        count = self.notes.add(query["note"])
        return f"Saved. Notes now have {count} entries."


class ReadNotesTool(Tool):
    def __init__(self, notes: SharedNotes) -> None:
        super().__init__(
            name="read_notes",
            description="Read all shared notes, concatenated.",
            args_schema=ReadNotesArgs,
        )
        self.notes = notes

    def run(self, query: Dict[str, Any]) -> str:
        return self.notes.render()
