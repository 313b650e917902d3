"""Public testing utilities for landing-seo.

Provides a mock tool-calling chat model for writing self-contained
examples and tests without requiring an API key.
"""

from landing_seo.testing.mock_llm import (
    MockToolCallingChatModel,
    make_mock_caller,
    search_terms_message,
    tool_call_message,
)

__all__ = [
    "MockToolCallingChatModel",
    "make_mock_caller",
    "search_terms_message",
    "tool_call_message",
]
