"""Bounded stateless search-term refinement.

``build_refinement_graph()`` wires the generate, evaluate and refine nodes
into a compiled LangGraph.  ``SearchTermRefiner`` runs that graph once per
theme and folds the final state into a :class:`RefinementResult`.

Each refinement call is built from the current term snapshot only, so
request size stays constant regardless of how many iterations run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from langgraph.graph import START, StateGraph

from landing_seo.domain.enums import RefinementOutcome, RefinementPhase
from landing_seo.domain.values import RefinementResult
from landing_seo.graph.edges import should_evaluate, should_refine
from landing_seo.graph.nodes import (
    make_evaluate_node,
    make_generate_node,
    make_refine_node,
)
from landing_seo.graph.state import RefinementState
from landing_seo.infrastructure.config import RefinementConfig
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredCaller

logger = logging.getLogger(__name__)


def build_refinement_graph(caller: StructuredCaller, config: RefinementConfig) -> Any:
    """Build and compile the refinement StateGraph.

    Parameters
    ----------
    caller:
        Structured call backend shared by every node.
    config:
        Loop parameters (target count, refinement budget, thresholds).

    Returns
    -------
    CompiledStateGraph
        A compiled graph ready for ``.invoke()``.
    """
    graph = StateGraph(RefinementState)

    graph.add_node("generate", make_generate_node(caller, config))
    graph.add_node("evaluate", make_evaluate_node(config))
    graph.add_node("refine", make_refine_node(caller, config))

    graph.add_edge(START, "generate")
    graph.add_conditional_edges("generate", should_evaluate)
    graph.add_conditional_edges("evaluate", should_refine)
    graph.add_conditional_edges("refine", should_evaluate)

    return graph.compile()


class SearchTermRefiner:
    """Generate search terms and refine them until good enough or out of budget.

    Parameters
    ----------
    caller:
        Structured call backend.
    config:
        Loop parameters.  Defaults to ``RefinementConfig()``.
    """

    def __init__(
        self,
        caller: StructuredCaller,
        config: RefinementConfig | None = None,
    ) -> None:
        self._config = config if config is not None else RefinementConfig()
        self._config.validate()
        self._caller = caller
        self._app = build_refinement_graph(caller, self._config)

    @property
    def config(self) -> RefinementConfig:
        return self._config

    def run(
        self,
        theme: str,
        base_keywords: Sequence[str] = (),
        deadline: Deadline | None = None,
    ) -> RefinementResult:
        """Run the loop once and report how it ended.

        Never raises for call failures: a failed initial call yields a
        ``FAILED_HARD`` result with no terms, a failed refinement call a
        ``FAILED_SOFT`` result with the last good terms.
        """
        logger.info(
            "SearchTermRefiner: generating %d terms for theme %r "
            "(max %d refinements, %d calls)",
            self._config.target_count,
            theme,
            self._config.max_refinements,
            self._config.max_calls,
        )
        initial: dict[str, Any] = {
            "theme": theme,
            "base_keywords": list(base_keywords),
            "deadline": deadline,
            "phase": RefinementPhase.INITIAL,
            "iteration": 0,
            "calls_made": 0,
            "outcome": None,
            "terms": [],
            "quality": None,
            "good_enough": False,
            "error": None,
        }
        # generate + (evaluate, refine) per refinement + the final evaluate
        recursion_limit = 2 * self._config.max_refinements + 5
        final = self._app.invoke(initial, config={"recursion_limit": recursion_limit})

        outcome = final.get("outcome") or RefinementOutcome.DONE
        terms = tuple(final.get("terms") or ()) if outcome.has_terms else ()
        result = RefinementResult(
            terms=terms,
            outcome=outcome,
            iterations=final.get("iteration", 0),
            calls_made=final.get("calls_made", 0),
            quality=final.get("quality"),
            good_enough=final.get("good_enough", False),
            error=final.get("error"),
        )
        logger.info(
            "SearchTermRefiner: final: %d terms after %d total calls (%s)",
            len(result.terms),
            result.calls_made,
            result.outcome.value,
        )
        return result

    def generate(
        self,
        theme: str,
        base_keywords: Sequence[str] = (),
        deadline: Deadline | None = None,
    ) -> list[str]:
        """Return the final term list, raising if the initial call failed."""
        result = self.run(theme, base_keywords, deadline=deadline)
        result.raise_for_failure()
        return list(result.terms)

    def __repr__(self) -> str:
        return (
            f"SearchTermRefiner(target_count={self._config.target_count}, "
            f"max_refinements={self._config.max_refinements})"
        )
