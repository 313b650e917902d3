"""Command-line interface for landing-seo.

Reads a landing page theme, generates SEO keywords for it, then generates
must-target search terms from the theme and those keywords, and prints
both as numbered lists.

Entry point
-----------
The ``main()`` function is registered as a console script in
``pyproject.toml``::

    [project.scripts]
    landing-seo = "landing_seo.cli:main"

Usage examples::

    landing-seo --theme "romance audiobooks"
    landing-seo --theme "thriller ebooks" --strategy agent --timeout 180
    landing-seo --verbose      # prompts for the theme
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

from landing_seo.domain.exceptions import ConfigurationError, LandingSeoError
from landing_seo.infrastructure.config import OpenRouterSettings
from landing_seo.infrastructure.deadline import Deadline
from landing_seo.infrastructure.llm import StructuredCaller
from landing_seo.infrastructure.llm.openrouter import build_openrouter_caller
from landing_seo.services.generation import generate_keywords, generate_search_terms
from landing_seo.services.strategies import (
    ConversationalAgentStrategy,
    SearchTermStrategy,
    StatelessRefinementStrategy,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="landing-seo",
        description=(
            "Generate SEO keywords and must-target search terms for a "
            "landing page theme."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Show version and exit.",
    )
    parser.add_argument(
        "--theme",
        type=str,
        default=None,
        help="Landing page theme (e.g. 'romance books').  Prompted for if omitted.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Overall deadline in seconds for all calls. (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        default="refine",
        choices=["refine", "agent"],
        help=(
            "Search-term strategy: 'refine' runs the bounded stateless "
            "refinement loop, 'agent' one conversational run. (default: refine)"
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )
    return parser


def _read_theme(args: argparse.Namespace, stdin: TextIO) -> str:
    if args.theme is not None:
        return args.theme.strip()
    print(
        "What landing page idea? (e.g., romance books, thriller audiobooks): ",
        end="",
        flush=True,
    )
    return stdin.readline().strip()


def _make_strategy(name: str, caller: StructuredCaller) -> SearchTermStrategy:
    if name == "agent":
        return ConversationalAgentStrategy(caller)
    return StatelessRefinementStrategy(caller)


def _print_numbered(title: str, items: Sequence[str], rule: str, width: int) -> None:
    print(f"\n{title}:")
    print(rule * width)
    for i, item in enumerate(items, start=1):
        print(f"  {i:2d}. {item}")
    print(rule * width)


def run(
    args: argparse.Namespace,
    *,
    caller: StructuredCaller | None = None,
    environ: Mapping[str, str] | None = None,
    stdin: TextIO | None = None,
) -> int:
    """Run the keyword and search-term pipeline; return the exit code.

    Parameters
    ----------
    args:
        Parsed command-line arguments.
    caller:
        Structured call backend.  Built from the OpenRouter environment
        settings when omitted.
    environ:
        Environment mapping.  Defaults to ``os.environ``.
    stdin:
        Stream to read the theme from when ``--theme`` is omitted.
    """
    theme = _read_theme(args, stdin if stdin is not None else sys.stdin)
    if not theme:
        print("Error: no theme provided", file=sys.stderr)
        return EXIT_USAGE

    if caller is None:
        try:
            settings = OpenRouterSettings.from_env(environ if environ is not None else os.environ)
            caller = build_openrouter_caller(settings)
        except ConfigurationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_USAGE

    if args.timeout is not None and args.timeout <= 0:
        print("Error: --timeout must be > 0", file=sys.stderr)
        return EXIT_USAGE
    deadline = Deadline.from_timeout(args.timeout)

    print(f"\nBuilding landing page for: {theme}")
    print("Generating SEO keywords...")
    try:
        keywords = generate_keywords(theme, caller, deadline=deadline)
    except LandingSeoError as exc:
        print(f"Error generating keywords: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    _print_numbered("Generated Keywords", keywords, "-", 50)
    print(f"\nTotal: {len(keywords)} keywords")

    print("\nGenerating must-target search terms...")
    try:
        terms = generate_search_terms(
            theme,
            keywords,
            caller,
            strategy=_make_strategy(args.strategy, caller),
            deadline=deadline,
        )
    except LandingSeoError as exc:
        print(f"Error generating search terms: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    _print_numbered("Must-Target Search Terms", terms, "=", 60)
    print(f"\nTotal: {len(terms)} search terms")
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from landing_seo import __version__
        print(f"landing-seo {__version__}")
        sys.exit(EXIT_OK)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        exit_code = run(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130

    sys.exit(exit_code)
