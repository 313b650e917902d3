"""Catalog of OpenRouter models used for landing-page generation.

Each entry is an immutable :class:`ModelDescriptor` with named provider
routes, so callers write ``MINIMAX_M2.providers("minimax")`` instead of
looking routes up by string key.
"""

from __future__ import annotations

from landing_seo.domain.values import ModelDescriptor

MINIMAX_M2 = ModelDescriptor(
    name="minimax/minimax-m2",
    minimax="minimax/fp8",
    google="google-vertex",
)

KIMI_K2_THINKING = ModelDescriptor(
    name="moonshotai/kimi-k2-thinking",
    google="google-vertex",
)

# Search terms are generated on MiniMax served by MiniMax itself; keywords
# use Kimi K2 on Vertex.
DEFAULT_SEARCH_TERM_MODEL = MINIMAX_M2
DEFAULT_SEARCH_TERM_PROVIDERS = MINIMAX_M2.providers("minimax")
DEFAULT_KEYWORD_MODEL = KIMI_K2_THINKING
DEFAULT_KEYWORD_PROVIDERS = KIMI_K2_THINKING.providers("google")

__all__ = [
    "MINIMAX_M2",
    "KIMI_K2_THINKING",
    "DEFAULT_SEARCH_TERM_MODEL",
    "DEFAULT_SEARCH_TERM_PROVIDERS",
    "DEFAULT_KEYWORD_MODEL",
    "DEFAULT_KEYWORD_PROVIDERS",
]
