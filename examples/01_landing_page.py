#!/usr/bin/env python3
"""Example 01: keywords and refined search terms for one landing page.

Demonstrates the full pipeline:
- the keyword agent preset produces base keywords (theme appended)
- the stateless refinement loop generates 15 search terms, evaluates them
  locally and refines once to cover the missing patterns

Self-contained: runs with a mock chat model by default (no API key
required).  Set OPENROUTER_API_KEY for real mode.

Run:
    PYTHONPATH=src python examples/01_landing_page.py
"""

from __future__ import annotations

import logging
import os

from landing_seo import SearchTermRefiner, generate_keywords
from landing_seo.infrastructure import Deadline, OpenRouterSettings
from landing_seo.infrastructure.llm.openrouter import build_openrouter_caller
from landing_seo.services import evaluate_quality, identify_missing_patterns

THEME = "romance audiobooks"


def _build_mock_caller():
    """Scripted replies in the order the pipeline consumes them.

    1. keywords
    2. initial search terms: only 3 patterns, low diversity
    3. refined search terms: 5 patterns, diversity 0.74
    """
    from landing_seo.testing import make_mock_caller, search_terms_message, tool_call_message

    weak = ["best romance audiobooks"] + [
        f"romance audiobooks for {who}"
        for who in (
            "women", "teens", "commute", "sleep", "travel", "beginners", "adults",
            "summer", "couples", "students", "moms", "workouts", "weekends", "readers",
        )
    ]
    refined = [
        "romance audiobooks vs ebooks",
        "where to stream romance audiobooks",
        "best romance audiobooks 2025",
        "unlimited romance listening",
        "spicy enemies to lovers stories",
        "historical regency novels narrated",
        "contemporary love stories online",
        "dark romance series app",
        "small town romance listens",
        "slow burn fantasy romance",
        "billionaire romance narrators",
        "second chance love audio",
        "romcom audio collection",
        "paranormal romance playlist",
        "sweet clean romance titles",
    ]
    keywords = [
        "romance audiobooks",
        "best romance books",
        "romance ebooks",
        "unlimited romance audiobooks",
        "romance books for commute",
        "top romance novels 2025",
        "free romance audiobook trial",
        "romance book recommendations",
    ]
    caller, _, _ = make_mock_caller(
        tool_call_message("submit_keywords", {"keywords": keywords}),
        search_terms_message(weak),
        search_terms_message(refined),
    )
    return caller


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if os.environ.get("OPENROUTER_API_KEY"):
        caller = build_openrouter_caller(OpenRouterSettings.from_env())
        print("Mode: OpenRouter")
    else:
        caller = _build_mock_caller()
        print("Mode: mock (set OPENROUTER_API_KEY for real calls)")

    deadline = Deadline(120.0)
    keywords = generate_keywords(THEME, caller, deadline=deadline)
    print(f"\nKeywords ({len(keywords)}): {', '.join(keywords)}")

    result = SearchTermRefiner(caller).run(THEME, keywords, deadline=deadline)
    result.raise_for_failure()

    print(f"\nOutcome: {result.outcome.value}")
    print(f"  Calls: {result.calls_made}  Refinements: {result.iterations}")
    if result.quality is not None:
        print(f"  Patterns: {result.quality.pattern_count}/6")
        print(f"  Diversity: {result.quality.diversity_score:.2f}")
    print("\nSearch terms:")
    for i, term in enumerate(result.terms, start=1):
        print(f"  {i:2d}. {term}")

    print("\nStill missing:")
    print("\n".join(identify_missing_patterns(evaluate_quality(result.terms))))


if __name__ == "__main__":
    main()
