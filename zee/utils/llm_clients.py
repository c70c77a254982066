from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, Union

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from pydantic import BaseModel

from zee.schemas.messages import Turn
from zee.tools.base import Tool
from zee.utils.settings import LLMConfig

logger = logging.getLogger(__name__)

Generation = Union[str, BaseModel]
Responder = Callable[[List[Turn]], Generation]


class LLMClient(ABC):
    """Lightweight interface so agents can swap between real and stub models."""

    @abstractmethod
    def generate(
        self,
        turns: Sequence[Turn],
        *,
        temperature: Optional[float] = None,
        tools: Sequence[Tool] = (),
        response_model: Optional[Type[BaseModel]] = None,
    ) -> Generation:
        """Return text, or an instance of ``response_model`` when supported."""


class ScriptedLLMClient(LLMClient):
    """Replays canned replies; used for local runs and tests without external APIs.

    Replies are consumed in order. A ``responder`` callable, when given, is
    consulted once the canned replies run out. Exceptions in the script are
    raised instead of returned.
    """

    def __init__(
        self,
        replies: Iterable[Union[Generation, Exception]] | None = None,
        responder: Responder | None = None,
    ) -> None:
        self._replies: List[Union[Generation, Exception]] = list(replies or [])
        self._responder = responder
        self.calls: List[List[Turn]] = []

    def generate(
        self,
        turns: Sequence[Turn],
        *,
        temperature: Optional[float] = None,
        tools: Sequence[Tool] = (),
        response_model: Optional[Type[BaseModel]] = None,
    ) -> Generation:
        self.calls.append(list(turns))
        if self._replies:
            reply = self._replies.pop(0)
        elif self._responder is not None:
            reply = self._responder(list(turns))
        else:
            raise RuntimeError("scripted client has no reply left")
        if isinstance(reply, Exception):
            raise reply
        return reply


class ChatModelClient(LLMClient):
    """Generator backed by a langchain chat model.

    Timeouts and retries with backoff are the chat model's own
    (``timeout`` / ``max_retries``). Tool calls are executed locally and fed
    back for at most ``max_tool_rounds`` rounds.
    """

    def __init__(
        self,
        chat_model: BaseChatModel,
        max_tool_rounds: int = 3,
        structured_replies: bool = False,
    ) -> None:
        self.chat_model = chat_model
        self.max_tool_rounds = max_tool_rounds
        self.structured_replies = structured_replies

    def generate(
        self,
        turns: Sequence[Turn],
        *,
        temperature: Optional[float] = None,
        tools: Sequence[Tool] = (),
        response_model: Optional[Type[BaseModel]] = None,
    ) -> Generation:
        model = self._with_temperature(temperature)
        messages = to_langchain_messages(turns)

        if tools:
            return self._run_with_tools(model, messages, tools)
        if response_model is not None and self.structured_replies:
            return model.with_structured_output(response_model).invoke(messages)

        reply = model.invoke(messages)
        return _text_of(reply)

    def _with_temperature(self, temperature: Optional[float]) -> BaseChatModel:
        if temperature is None or "temperature" not in type(self.chat_model).model_fields:
            return self.chat_model
        return self.chat_model.model_copy(update={"temperature": temperature})

    def _run_with_tools(
        self,
        model: BaseChatModel,
        messages: List[BaseMessage],
        tools: Sequence[Tool],
    ) -> str:
        by_name: Dict[str, Tool] = {tool.name: tool for tool in tools}
        bound = model.bind_tools([tool.as_langchain_tool() for tool in tools])

        reply = bound.invoke(messages)
        for _ in range(self.max_tool_rounds):
            calls = getattr(reply, "tool_calls", None) or []
            if not calls:
                break
            messages = messages + [reply]
            for call in calls:
                tool = by_name.get(call["name"])
                if tool is None:
                    result = f"Unknown tool '{call['name']}'."
                else:
                    logger.info("Running tool '%s'", tool.name)
                    try:
                        result = tool.invoke(call.get("args") or {})
                    except Exception as exc:
                        # Reported back as the tool result so the model can correct the call.
                        logger.warning("Tool '%s' failed: %s", tool.name, exc)
                        result = f"Error: {exc}"
                messages.append(ToolMessage(content=result, tool_call_id=call["id"]))
            reply = bound.invoke(messages)

        if getattr(reply, "tool_calls", None):
            logger.warning("Tool round limit (%s) reached", self.max_tool_rounds)
        return _text_of(reply)


def to_langchain_messages(turns: Sequence[Turn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in turns:
        if turn.role == "system":
            messages.append(SystemMessage(content=turn.content))
        elif turn.role == "assistant":
            messages.append(AIMessage(content=turn.content))
        elif isinstance(turn.content, str):
            messages.append(HumanMessage(content=turn.content))
        else:
            messages.append(HumanMessage(content=[_content_block(p) for p in turn.content]))
    return messages


def _content_block(part: Dict[str, Any]) -> Dict[str, Any]:
    if part.get("type") == "image":
        return {"type": "image_url", "image_url": {"url": part["image"]}}
    return {
        "type": "file",
        "source_type": "url",
        "url": part["data"],
        "mime_type": part["mimeType"],
    }


def _text_of(reply: Any) -> str:
    content = getattr(reply, "content", reply)
    if isinstance(content, list):
        return "".join(
            block if isinstance(block, str) else block.get("text", "")
            for block in content
        )
    return content if isinstance(content, str) else str(content)


def build_chat_model(config: LLMConfig) -> BaseChatModel:
    """Instantiate the configured provider's chat model."""
    provider = config.provider.lower()
    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
            base_url=config.base_url,
        )
    if provider == "deepseek":
        from langchain_deepseek import ChatDeepSeek

        return ChatDeepSeek(
            model=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
    if provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
    if provider == "mistral":
        from langchain_mistralai import ChatMistralAI

        return ChatMistralAI(
            model=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
    if provider == "azure":
        from langchain_openai import AzureChatOpenAI

        # Unset values fall back to AZURE_OPENAI_ENDPOINT / OPENAI_API_VERSION.
        optional = {"azure_endpoint": config.base_url, "api_version": config.api_version}
        return AzureChatOpenAI(
            azure_deployment=config.model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=config.max_retries,
            **{key: value for key, value in optional.items() if value is not None},
        )
    raise ValueError(f"Unsupported LLM provider: {config.provider}")


def build_llm_client(config: LLMConfig) -> ChatModelClient:
    return ChatModelClient(
        build_chat_model(config),
        max_tool_rounds=config.max_tool_rounds,
        structured_replies=config.structured_replies,
    )
