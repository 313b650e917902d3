"""LangGraph orchestration loops.

Public API
----------
build_refinement_graph
    Build and compile the generate-evaluate-refine graph.
SearchTermRefiner
    Runs the bounded stateless refinement loop for one theme.
build_agent_graph
    Build and compile the think-act-observe-refine graph.
AgentRunner, run_agent
    Drive one structured-call conversation to a tool result.
RefinementState, AgentExecutionState
    The TypedDict states flowing through the graphs.

Edge functions:
    should_evaluate, should_refine, should_observe, should_continue
"""

from landing_seo.graph.agent import AgentRunner, build_agent_graph, run_agent
from landing_seo.graph.edges import (
    should_continue,
    should_evaluate,
    should_observe,
    should_refine,
)
from landing_seo.graph.refinement import SearchTermRefiner, build_refinement_graph
from landing_seo.graph.state import AgentExecutionState, RefinementState

__all__ = [
    "AgentExecutionState",
    "AgentRunner",
    "RefinementState",
    "SearchTermRefiner",
    "build_agent_graph",
    "build_refinement_graph",
    "run_agent",
    "should_continue",
    "should_evaluate",
    "should_observe",
    "should_refine",
]
