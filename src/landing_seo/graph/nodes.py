"""LangGraph node factories for the orchestration loops.

Each factory closes over its collaborators (the structured caller and a
frozen config) and returns a node function that takes the current state
and returns a partial update dict.  Nodes never raise domain errors into
LangGraph: a failure is recorded in the ``error`` channel and the routing
edges end the run.

Refinement loop nodes
    generate -> evaluate -> (refine -> evaluate)* -> END

Generic driver nodes
    think -> act -> observe -> refine -> (think ...)* -> END
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from langchain_core.messages import AIMessage, HumanMessage

from landing_seo.domain.enums import (
    AgentPhase,
    AgentStopReason,
    RefinementOutcome,
    RefinementPhase,
)
from landing_seo.domain.exceptions import (
    AgentStalled,
    BudgetExhausted,
    LandingSeoError,
    NoUsableResponse,
    SchemaViolation,
)
from landing_seo.infrastructure.config import AgentConfig, RefinementConfig
from landing_seo.infrastructure.llm import (
    ModelSettings,
    StructuredCallRequest,
    StructuredCaller,
)
from landing_seo.services.extraction import extract_string_list
from landing_seo.services.prompts import (
    SEARCH_TERMS_GENERATION_PROMPT,
    SEARCH_TERMS_REFINEMENT_PROMPT,
    TOOL_REMINDER_PROMPT,
    format_keywords,
    format_terms_for_prompt,
)
from landing_seo.services.quality import (
    evaluate_quality,
    format_missing_patterns,
    is_good_enough,
)
from landing_seo.services.schemas import SEARCH_TERMS_FIELD, search_terms_tool

logger = logging.getLogger(__name__)

Node = Callable[[dict[str, Any]], dict[str, Any]]


# ===================================================================== #
#  Refinement loop                                                       #
# ===================================================================== #


def _refinement_settings(config: RefinementConfig, temperature: float) -> ModelSettings:
    return ModelSettings(
        model=config.model,
        temperature=temperature,
        providers=config.providers,
        allow_fallbacks=config.allow_fallbacks,
    )


def make_generate_node(caller: StructuredCaller, config: RefinementConfig) -> Node:
    """INITIAL: one generation call for exactly ``target_count`` terms.

    Any failure is fatal (FAILED_HARD): there is no earlier term set to
    fall back on.
    """
    tool = search_terms_tool(config.target_count)
    settings = _refinement_settings(config, config.generation_temperature)

    def generate_node(state: dict[str, Any]) -> dict[str, Any]:
        messages = SEARCH_TERMS_GENERATION_PROMPT.format_messages(
            count=config.target_count,
            theme=state["theme"],
            base_keywords=format_keywords(state.get("base_keywords", [])),
            tool_name=tool.__name__,
        )
        request = StructuredCallRequest(
            messages=tuple(messages), tool=tool, settings=settings, force_tool=True,
        )
        try:
            response = caller.call(request, state.get("deadline"))
            terms = extract_string_list(
                response, tool, SEARCH_TERMS_FIELD, config.target_count,
            )
        except LandingSeoError as exc:
            logger.error("SearchTermRefiner: initial generation failed: %s", exc)
            return {
                "calls_made": 1,
                "terms": [],
                "phase": RefinementPhase.FAILED_HARD,
                "outcome": RefinementOutcome.FAILED_HARD,
                "error": exc,
            }

        logger.info("SearchTermRefiner: generated %d initial terms", len(terms))
        return {
            "calls_made": 1,
            "iteration": 0,
            "terms": terms,
            "phase": RefinementPhase.EVALUATE,
        }

    return generate_node


def make_evaluate_node(config: RefinementConfig) -> Node:
    """EVALUATE: local quality check deciding between DONE and REFINE."""

    def evaluate_node(state: dict[str, Any]) -> dict[str, Any]:
        terms = state.get("terms", [])
        iteration = state.get("iteration", 0)
        report = evaluate_quality(terms)
        good = is_good_enough(
            report,
            target_count=config.target_count,
            min_patterns=config.min_patterns,
            min_diversity=config.min_diversity,
        )
        update: dict[str, Any] = {"quality": report, "good_enough": good}

        if good:
            logger.info(
                "SearchTermRefiner: quality target reached after %d total calls "
                "(patterns=%d/6, diversity=%.2f)",
                state.get("calls_made", 0),
                report.pattern_count,
                report.diversity_score,
            )
            update["phase"] = RefinementPhase.DONE
            update["outcome"] = RefinementOutcome.DONE
        elif iteration >= config.max_refinements:
            logger.info(
                "SearchTermRefiner: refinement budget of %d exhausted "
                "(patterns=%d/6, diversity=%.2f)",
                config.max_refinements,
                report.pattern_count,
                report.diversity_score,
            )
            update["phase"] = RefinementPhase.DONE
            update["outcome"] = RefinementOutcome.DONE
        else:
            update["phase"] = RefinementPhase.REFINE
        return update

    return evaluate_node


def make_refine_node(caller: StructuredCaller, config: RefinementConfig) -> Node:
    """REFINE: one stateless refinement call from the current snapshot.

    On failure the current terms are kept and the run stops (FAILED_SOFT).
    """
    tool = search_terms_tool(config.target_count)
    settings = _refinement_settings(config, config.refinement_temperature)

    def refine_node(state: dict[str, Any]) -> dict[str, Any]:
        current = state["terms"]
        iteration = state.get("iteration", 0)
        calls_made = state.get("calls_made", 0) + 1

        logger.info(
            "SearchTermRefiner: refinement iteration %d: improving coverage",
            iteration + 1,
        )
        messages = SEARCH_TERMS_REFINEMENT_PROMPT.format_messages(
            current_count=len(current),
            theme=state["theme"],
            current_terms=format_terms_for_prompt(current),
            missing_patterns=format_missing_patterns(state["quality"]),
            count=config.target_count,
            tool_name=tool.__name__,
        )
        request = StructuredCallRequest(
            messages=tuple(messages), tool=tool, settings=settings, force_tool=True,
        )
        try:
            response = caller.call(request, state.get("deadline"))
            refined = extract_string_list(
                response, tool, SEARCH_TERMS_FIELD, config.target_count,
            )
        except LandingSeoError as exc:
            logger.warning(
                "SearchTermRefiner: refinement %d failed, keeping current terms: %s",
                iteration + 1,
                exc,
            )
            return {
                "calls_made": calls_made,
                "phase": RefinementPhase.FAILED_SOFT,
                "outcome": RefinementOutcome.FAILED_SOFT,
                "error": exc,
            }

        return {
            "calls_made": calls_made,
            "iteration": iteration + 1,
            "terms": refined,
            "phase": RefinementPhase.EVALUATE,
        }

    return refine_node


# ===================================================================== #
#  Generic think-act-observe-refine driver                               #
# ===================================================================== #


def make_think_node(config: AgentConfig) -> Node:
    """THINK: reasoning is delegated to the model; only starts an iteration."""

    def think_node(state: dict[str, Any]) -> dict[str, Any]:
        iteration = state.get("iteration", 0) + 1
        logger.debug(
            "AgentRunner: iteration %d/%d (%s)",
            iteration,
            config.max_iterations,
            config.tool_name,
        )
        return {"iteration": iteration, "phase": AgentPhase.THINK, "response": None}

    return think_node


def make_act_node(caller: StructuredCaller, config: AgentConfig) -> Node:
    """ACT: one structured call carrying the full conversation history."""
    settings = ModelSettings(
        model=config.model_name,
        temperature=config.temperature,
        providers=config.providers,
        allow_fallbacks=config.allow_fallbacks,
    )

    def act_node(state: dict[str, Any]) -> dict[str, Any]:
        request = StructuredCallRequest(
            messages=tuple(state["history"]),
            tool=config.tool_schema,
            settings=settings,
        )
        try:
            response = caller.call(request, state.get("deadline"))
        except LandingSeoError as exc:
            logger.error(
                "AgentRunner: call failed on iteration %d: %s",
                state.get("iteration", 0),
                exc,
            )
            return {"phase": AgentPhase.ACT, "response": None, "error": exc}
        return {"phase": AgentPhase.ACT, "response": response}

    return act_node


def make_observe_node(config: AgentConfig) -> Node:
    """OBSERVE: a tool result completes the run; text is an interim result.

    A text reply is appended to the history together with a reminder to
    use the tool, so the next call does not repeat an identical
    conversation.
    """
    reminder = TOOL_REMINDER_PROMPT.format(tool_name=config.tool_name)

    def observe_node(state: dict[str, Any]) -> dict[str, Any]:
        response = state["response"]

        if response.has_tool_call:
            if response.tool_name != config.tool_name:
                return {
                    "phase": AgentPhase.OBSERVE,
                    "error": SchemaViolation(
                        f"expected a {config.tool_name} call, got {response.tool_name}",
                        tool_name=config.tool_name,
                    ),
                }
            history = [response.message] if response.message is not None else []
            return {
                "phase": AgentPhase.OBSERVE,
                "completed": True,
                "result": dict(response.arguments or {}),
                "stalled_responses": 0,
                "history": history,
            }

        if response.text:
            stalled = state.get("stalled_responses", 0) + 1
            logger.info(
                "AgentRunner: text reply without %s call (%d consecutive)",
                config.tool_name,
                stalled,
            )
            return {
                "phase": AgentPhase.OBSERVE,
                "result": response.text,
                "stalled_responses": stalled,
                "history": [AIMessage(content=response.text), HumanMessage(content=reminder)],
            }

        return {
            "phase": AgentPhase.OBSERVE,
            "error": NoUsableResponse(
                f"Reply carried neither a {config.tool_name} call nor text",
            ),
        }

    return observe_node


def make_agent_refine_node(config: AgentConfig) -> Node:
    """REFINE: decide whether to stop or run another iteration."""

    def refine_node(state: dict[str, Any]) -> dict[str, Any]:
        iteration = state.get("iteration", 0)

        if state.get("error") is not None:
            return {"phase": AgentPhase.REFINE, "stop_reason": AgentStopReason.ERROR}

        if state.get("completed"):
            return {"phase": AgentPhase.REFINE, "stop_reason": AgentStopReason.COMPLETED}

        stalled = state.get("stalled_responses", 0)
        if stalled >= config.max_stalled_responses:
            return {
                "phase": AgentPhase.REFINE,
                "stop_reason": AgentStopReason.STALLED,
                "error": AgentStalled(
                    f"{stalled} consecutive text replies without a "
                    f"{config.tool_name} call",
                    consecutive_replies=stalled,
                ),
            }

        if iteration >= config.max_iterations:
            return {
                "phase": AgentPhase.REFINE,
                "stop_reason": AgentStopReason.MAX_ITERATIONS,
                "error": BudgetExhausted(
                    f"max iterations ({config.max_iterations}) reached without completion",
                    iterations=iteration,
                ),
            }

        return {"phase": AgentPhase.REFINE}

    return refine_node
