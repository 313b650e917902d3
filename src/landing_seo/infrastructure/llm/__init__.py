"""Structured model call layer.

This sub-package provides the one operation the orchestration loops depend
on: *call a model with role-tagged messages and a declared tool schema*.
The loops never talk to a network transport directly.

Public API
----------
StructuredCallRequest
    Messages, tool schema, model, temperature and provider routing for one
    call.
StructuredResponse
    The tool call (if any) and text content returned by the model.
StructuredCaller
    Abstract base class for anything that can execute a request.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from langchain_core.messages import AIMessage, BaseMessage
from pydantic import BaseModel

if TYPE_CHECKING:
    from landing_seo.infrastructure.deadline import Deadline

logger = logging.getLogger(__name__)


# =========================================================================== #
#  Data structures                                                             #
# =========================================================================== #

@dataclass(frozen=True)
class ModelSettings:
    """Per-model sampling and routing settings.

    Hashable, so chat-model instances can be cached per settings.
    """

    model: str
    temperature: float = 0.7
    providers: tuple[str, ...] = ()
    allow_fallbacks: bool = False

    @property
    def provider_preferences(self) -> dict[str, Any]:
        """OpenRouter ``provider`` routing object."""
        prefs: dict[str, Any] = {"allow_fallbacks": self.allow_fallbacks}
        if self.providers:
            prefs["order"] = list(self.providers)
        return prefs


@dataclass(frozen=True)
class StructuredCallRequest:
    """One structured model call.

    Attributes
    ----------
    messages:
        Conversation sent to the model, oldest first.
    tool:
        Pydantic model declaring the expected structured answer.  Its class
        name is the tool name and its docstring the tool description.
    settings:
        Model, temperature and provider routing.
    force_tool:
        If ``True``, the model is required to answer with the tool.
    """

    messages: tuple[BaseMessage, ...]
    tool: type[BaseModel]
    settings: ModelSettings
    force_tool: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))
        if not self.messages:
            raise ValueError("StructuredCallRequest.messages must not be empty")

    @property
    def tool_name(self) -> str:
        return self.tool.__name__


@dataclass(frozen=True)
class StructuredResponse:
    """What came back from one structured call.

    Attributes
    ----------
    tool_name:
        Name of the first tool the model called, or ``None``.
    arguments:
        Arguments of that tool call, or ``None``.
    text:
        Plain-text content of the reply (may be empty).
    message:
        The raw ``AIMessage``, kept for conversation history.
    """

    tool_name: str | None = None
    arguments: Mapping[str, Any] | None = None
    text: str = ""
    message: AIMessage | None = None
    usage: Mapping[str, int] = field(default_factory=dict)

    @property
    def has_tool_call(self) -> bool:
        return self.tool_name is not None

    @classmethod
    def from_message(cls, message: AIMessage) -> StructuredResponse:
        """Build a response from an ``AIMessage``, keeping the first tool call."""
        text = message.content if isinstance(message.content, str) else _join_text(message.content)
        tool_calls = list(getattr(message, "tool_calls", None) or [])
        usage = dict(getattr(message, "usage_metadata", None) or {})
        if tool_calls:
            first = tool_calls[0]
            if len(tool_calls) > 1:
                logger.debug(
                    "StructuredResponse: %d tool calls returned, using %r",
                    len(tool_calls),
                    first.get("name"),
                )
            return cls(
                tool_name=first.get("name"),
                arguments=dict(first.get("args") or {}),
                text=text.strip(),
                message=message,
                usage=usage,
            )
        return cls(text=text.strip(), message=message, usage=usage)


def _join_text(blocks: Sequence[Any]) -> str:
    """Concatenate the text parts of a content-block list."""
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


# =========================================================================== #
#  Abstract caller                                                             #
# =========================================================================== #

class StructuredCaller(ABC):
    """Abstract base class for structured model call backends.

    Implementations must be safe to share between independent runs.
    """

    @abstractmethod
    def call(
        self,
        request: StructuredCallRequest,
        deadline: Deadline | None = None,
    ) -> StructuredResponse:
        """Execute *request*, honoring *deadline*.

        Returns
        -------
        StructuredResponse

        Raises
        ------
        ExternalCallFailure
            On transport, provider or timeout failure (including an
            already-expired deadline).
        """
        ...


__all__ = [
    "ModelSettings",
    "StructuredCallRequest",
    "StructuredResponse",
    "StructuredCaller",
]
