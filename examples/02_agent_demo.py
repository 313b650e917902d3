#!/usr/bin/env python3
"""Example 02: one driver, different tasks.

The think-act-observe-refine driver is configured entirely from outside:
a system prompt, a user prompt with an ``{input}`` placeholder and a tool
schema.  Here it solves a math problem; the model first answers in prose,
is reminded to use the tool, and then submits the answer.

Self-contained: runs with a mock chat model by default (no API key
required).  Set OPENROUTER_API_KEY for real mode.

Run:
    PYTHONPATH=src python examples/02_agent_demo.py
"""

from __future__ import annotations

import os

from landing_seo import run_agent
from landing_seo.infrastructure import AgentConfig, Deadline, OpenRouterSettings
from landing_seo.infrastructure.llm.models import KIMI_K2_THINKING
from landing_seo.infrastructure.llm.openrouter import build_openrouter_caller
from landing_seo.services import make_string_list_tool

submit_answer = make_string_list_tool(
    "submit_answer",
    "steps",
    description="Submit the final answer to the math problem",
    item_description="Reasoning steps, the last one stating the final answer",
)

MATH_CONFIG = AgentConfig(
    model_name=KIMI_K2_THINKING.name,
    providers=KIMI_K2_THINKING.providers("google"),
    system_prompt=(
        "You are a brilliant mathematician. Solve problems step-by-step "
        "with clear reasoning."
    ),
    user_prompt_format=(
        "Solve this math problem: {input}\n\n"
        "Use the submit_answer tool to provide your final answer."
    ),
    tool_schema=submit_answer,
    temperature=0.3,
    max_iterations=5,
)


def _build_mock_caller():
    from landing_seo.testing import make_mock_caller, tool_call_message

    caller, _, _ = make_mock_caller(
        "The primes below 20 are 2, 3, 5, 7, 11, 13, 17 and 19.",
        tool_call_message(
            "submit_answer",
            {"steps": ["primes: 2, 3, 5, 7, 11, 13, 17, 19", "sum = 77"]},
        ),
    )
    return caller


def main() -> None:
    if os.environ.get("OPENROUTER_API_KEY"):
        caller = build_openrouter_caller(OpenRouterSettings.from_env())
    else:
        caller = _build_mock_caller()

    result = run_agent(
        MATH_CONFIG,
        "What is the sum of all prime numbers less than 20?",
        caller,
        deadline=Deadline(60.0),
    )

    print(f"Success: {result.success} ({result.stop_reason.value})")
    print(f"Iterations: {result.iterations}")
    print(f"History: {len(result.history)} messages")
    if result.success:
        for step in result.result["steps"]:
            print(f"  - {step}")
    else:
        print(f"Error: {result.error}")


if __name__ == "__main__":
    main()
