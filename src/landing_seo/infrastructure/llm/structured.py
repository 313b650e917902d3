"""LangChain-backed implementation of :class:`StructuredCaller`.

Binds the request's tool schema to a ``BaseChatModel`` with
``bind_tools()`` and invokes it with the request's messages.  The call runs
on a daemon worker thread so the caller waits at most the time left on the
run's :class:`Deadline`, and an abandoned call never keeps the interpreter
alive.  When the caller knows the transport's request timeout, the time
left is also passed down as the per-call ``timeout`` option so the HTTP
request itself is aborted at the deadline.  An expired deadline is
reported as an :class:`ExternalCallFailure` and never retried here.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage

from landing_seo.domain.exceptions import ExternalCallFailure
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import (
    ModelSettings,
    StructuredCallRequest,
    StructuredCaller,
    StructuredResponse,
)

logger = logging.getLogger(__name__)

# Builds a chat model for the given model/temperature/routing settings.
ChatModelFactory = Callable[[ModelSettings], BaseChatModel]


class ChatModelStructuredCaller(StructuredCaller):
    """Execute structured calls through LangChain chat models.

    Parameters
    ----------
    model_factory:
        Callable returning a ``BaseChatModel`` for a :class:`ModelSettings`.
        Models are cached per settings, so the factory runs once per
        distinct model/temperature/routing combination.
    request_timeout:
        The transport's own per-request timeout in seconds, or ``None`` if
        the models do not accept a ``timeout`` call option.  When set, calls
        made under a deadline pass ``timeout=min(request_timeout,
        deadline.remaining())`` to the model.
    """

    def __init__(
        self,
        model_factory: ChatModelFactory,
        request_timeout: float | None = None,
    ) -> None:
        self._model_factory = model_factory
        self._request_timeout = request_timeout
        self._models: dict[ModelSettings, BaseChatModel] = {}
        self._lock = threading.Lock()

    @property
    def request_timeout(self) -> float | None:
        return self._request_timeout

    def _get_model(self, settings: ModelSettings) -> BaseChatModel:
        with self._lock:
            model = self._models.get(settings)
            if model is None:
                model = self._model_factory(settings)
                self._models[settings] = model
            return model

    def _bind(self, request: StructuredCallRequest) -> Any:
        model = self._get_model(request.settings)
        if request.force_tool:
            return model.bind_tools([request.tool], tool_choice=request.tool_name)
        return model.bind_tools([request.tool])

    def call(
        self,
        request: StructuredCallRequest,
        deadline: Deadline | None = None,
    ) -> StructuredResponse:
        model_name = request.settings.model
        if deadline is not None and deadline.expired:
            raise ExternalCallFailure(
                "Deadline expired before the call was issued",
                model=model_name,
            ) from TimeoutError(f"deadline of {deadline.timeout}s exceeded")

        logger.debug(
            "ChatModelStructuredCaller: calling %s with %d message(s), tool=%s",
            model_name,
            len(request.messages),
            request.tool_name,
        )

        try:
            runnable = self._bind(request)
            message = self._invoke_with_deadline(
                runnable, list(request.messages), deadline, model_name,
            )
        except ExternalCallFailure:
            raise
        except Exception as exc:
            raise ExternalCallFailure(
                f"Model call to {model_name} failed: {exc}",
                model=model_name,
                details={"error_type": type(exc).__name__},
            ) from exc

        if not isinstance(message, AIMessage):
            raise ExternalCallFailure(
                f"Model call to {model_name} returned {type(message).__name__}, "
                "expected AIMessage",
                model=model_name,
            )

        response = StructuredResponse.from_message(message)
        logger.debug(
            "ChatModelStructuredCaller: %s replied (tool=%s, text=%d chars)",
            model_name,
            response.tool_name,
            len(response.text),
        )
        return response

    def _invoke_with_deadline(
        self,
        runnable: Any,
        messages: list[Any],
        deadline: Deadline | None,
        model_name: str,
    ) -> Any:
        """Invoke *runnable*, waiting at most the time left on *deadline*."""
        if deadline is None:
            return runnable.invoke(messages)

        options: dict[str, Any] = {}
        if self._request_timeout is not None:
            options["timeout"] = min(self._request_timeout, deadline.remaining())
        outcome: dict[str, Any] = {}

        def _run() -> None:
            try:
                outcome["message"] = runnable.invoke(messages, **options)
            except Exception as exc:
                outcome["error"] = exc

        worker = threading.Thread(target=_run, name=f"structured-call:{model_name}", daemon=True)
        worker.start()
        worker.join(deadline.remaining())

        if worker.is_alive():
            logger.warning(
                "ChatModelStructuredCaller: %s still running at the %.1fs deadline, abandoning",
                model_name,
                deadline.timeout,
            )
            raise ExternalCallFailure(
                f"Call to {model_name} exceeded the overall deadline of {deadline.timeout}s",
                model=model_name,
                details={"timeout": deadline.timeout},
            ) from TimeoutError(f"deadline of {deadline.timeout}s exceeded")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["message"]

    def __repr__(self) -> str:
        return f"ChatModelStructuredCaller(cached_models={len(self._models)})"
