"""Generic think-act-observe-refine driver.

The driver runs one task described by an :class:`AgentConfig`: it sends
the full conversation history on every call and finishes as soon as the
model answers through the configured tool.  Plain-text replies are kept
as interim results and answered with a reminder to use the tool.
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import START, StateGraph

from landing_seo.domain.enums import AgentStopReason
from landing_seo.domain.values import AgentResult
from landing_seo.graph.edges import should_continue, should_observe
from landing_seo.graph.nodes import (
    make_act_node,
    make_agent_refine_node,
    make_observe_node,
    make_think_node,
)
from landing_seo.graph.state import AgentExecutionState
from landing_seo.infrastructure.config import AgentConfig
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredCaller

logger = logging.getLogger(__name__)


def build_agent_graph(caller: StructuredCaller, config: AgentConfig) -> Any:
    """Build and compile the think-act-observe-refine StateGraph.

    Returns
    -------
    CompiledStateGraph
        A compiled graph ready for ``.invoke()``.
    """
    graph = StateGraph(AgentExecutionState)

    graph.add_node("think", make_think_node(config))
    graph.add_node("act", make_act_node(caller, config))
    graph.add_node("observe", make_observe_node(config))
    graph.add_node("refine", make_agent_refine_node(config))

    graph.add_edge(START, "think")
    graph.add_edge("think", "act")
    graph.add_conditional_edges("act", should_observe)
    graph.add_edge("observe", "refine")
    graph.add_conditional_edges("refine", should_continue)

    return graph.compile()


class AgentRunner:
    """Runs tasks for one :class:`AgentConfig` against a structured caller.

    Parameters
    ----------
    config:
        Task description.  Validated on construction.
    caller:
        Structured call backend.
    """

    def __init__(self, config: AgentConfig, caller: StructuredCaller) -> None:
        config.validate()
        self._config = config
        self._caller = caller
        self._app = build_agent_graph(caller, config)

    @property
    def config(self) -> AgentConfig:
        return self._config

    def run(self, user_input: str, deadline: Deadline | None = None) -> AgentResult:
        """Drive the loop to completion or failure.

        Never raises for call or protocol failures; they are reported
        through ``AgentResult.error`` and ``AgentResult.stop_reason``.
        """
        config = self._config
        logger.info(
            "AgentRunner: starting %s task on %s (max %d iterations)",
            config.tool_name,
            config.model_name,
            config.max_iterations,
        )
        initial: dict[str, Any] = {
            "deadline": deadline,
            "iteration": 0,
            "completed": False,
            "stalled_responses": 0,
            "stop_reason": None,
            "history": [
                SystemMessage(content=config.system_prompt),
                HumanMessage(content=config.render_user_prompt(user_input)),
            ],
            "response": None,
            "result": None,
            "error": None,
        }
        # four nodes per iteration plus slack for the start transition
        recursion_limit = 4 * config.max_iterations + 10
        final = self._app.invoke(initial, config={"recursion_limit": recursion_limit})

        stop_reason = final.get("stop_reason") or AgentStopReason.ERROR
        success = stop_reason is AgentStopReason.COMPLETED
        result = AgentResult(
            success=success,
            result=final.get("result"),
            iterations=final.get("iteration", 0),
            history=tuple(final.get("history", ())),
            error=final.get("error"),
            stop_reason=stop_reason,
            metadata=dict(config.metadata),
        )
        if success:
            logger.info(
                "AgentRunner: %s completed in %d iteration(s)",
                config.tool_name,
                result.iterations,
            )
        else:
            logger.warning(
                "AgentRunner: %s stopped after %d iteration(s) (%s): %s",
                config.tool_name,
                result.iterations,
                stop_reason.value,
                result.error,
            )
        return result


def run_agent(
    config: AgentConfig,
    user_input: str,
    caller: StructuredCaller,
    deadline: Deadline | None = None,
) -> AgentResult:
    """Run a single task with a throwaway :class:`AgentRunner`."""
    return AgentRunner(config, caller).run(user_input, deadline=deadline)
