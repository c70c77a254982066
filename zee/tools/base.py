from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Type

from langchain_core.tools import StructuredTool
from pydantic import BaseModel


class Tool(ABC):
    """Callable capability an agent may bind; always returns text."""

    name: str

    def __init__(self, name: str, description: str, args_schema: Type[BaseModel]) -> None:
        self.name = name
        self.description = description
        self.args_schema = args_schema

    @abstractmethod
    def run(self, query: Dict[str, Any]) -> str:
        """Execute tool logic and return its textual result."""

    def invoke(self, arguments: Dict[str, Any]) -> str:
        parsed = self.args_schema.model_validate(arguments or {})
        return str(self.run(parsed.model_dump()))

    def as_langchain_tool(self) -> StructuredTool:
        return StructuredTool.from_function(
            func=lambda **kwargs: self.invoke(kwargs),
            name=self.name,
            description=self.description,
            args_schema=self.args_schema,
        )


class FunctionTool(Tool):
    """Adapts a plain function taking the schema's fields as keyword args."""

    def __init__(
        self,
        name: str,
        description: str,
        args_schema: Type[BaseModel],
        func: Callable[..., Any],
    ) -> None:
        super().__init__(name=name, description=description, args_schema=args_schema)
        self.func = func

    def run(self, query: Dict[str, Any]) -> str:
        return str(self.func(**query))
