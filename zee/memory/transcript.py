from __future__ import annotations

import json
from typing import Iterable, Iterator, List, Optional

from zee.schemas.messages import USER_ROLE, Action, ActionType, ContextItem


class ContextLog:
    """Append-only context log backing the dispatcher."""

    def __init__(self, initial: Iterable[ContextItem] | None = None) -> None:
        self._items: List[ContextItem] = list(initial or [])

    def append(self, role: str, content: str) -> ContextItem:
        item = ContextItem(role=role, content=content)
        self._items.append(item)
        return item

    def all(self) -> List[ContextItem]:
        return list(self._items)

    def roles(self) -> List[str]:
        return [item.role for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ContextItem]:
        return iter(list(self._items))

    def relevant_to(self, action: Action, router_name: str) -> Optional[str]:
        """Serialize the slice of the log the action's target may see.

        The router answering a follow-up sees everything; the router handling
        a request sees everything except the goal; any other agent only sees
        the goal and the output of the agents it depends on. Returns ``None``
        when nothing survives the filter.
        """
        if action.to == router_name:
            if action.type is ActionType.FOLLOWUP:
                selected = self._items
            else:
                selected = [item for item in self._items if item.role != USER_ROLE]
        else:
            allowed = set(action.metadata.dependency_names)
            selected = [
                item
                for item in self._items
                if item.role == USER_ROLE or item.role in allowed
            ]
        return "\n".join(f"{item.role}: {item.content}" for item in selected) or None

    def to_json(self) -> str:
        return json.dumps([item.as_dict() for item in self._items], ensure_ascii=False)
