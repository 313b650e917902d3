"""Validation of structured answers against their tool schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from landing_seo.domain.exceptions import NoUsableResponse, SchemaViolation
from landing_seo.domain.values import AgentResult
from landing_seo.infrastructure.llm import StructuredResponse

logger = logging.getLogger(__name__)


def _validate_arguments(
    tool: type[BaseModel],
    arguments: Mapping[str, Any],
    field_name: str,
    expected_count: int | None,
) -> list[str]:
    tool_name = tool.__name__
    try:
        parsed = tool.model_validate(dict(arguments))
    except ValidationError as exc:
        raise SchemaViolation(
            f"Arguments for {tool_name} failed validation: {exc.error_count()} error(s)",
            tool_name=tool_name,
            details={"errors": exc.errors(include_url=False)},
        ) from exc

    values = [str(v).strip() for v in getattr(parsed, field_name)]
    if expected_count is not None and len(values) != expected_count:
        raise SchemaViolation(
            f"expected {expected_count} {field_name}, got {len(values)}",
            tool_name=tool_name,
            expected_count=expected_count,
            actual_count=len(values),
        )
    return values


def extract_string_list(
    response: StructuredResponse,
    tool: type[BaseModel],
    field_name: str,
    expected_count: int | None = None,
) -> list[str]:
    """Pull the list field *field_name* out of a structured response.

    Raises
    ------
    SchemaViolation
        If the model answered in text only, called another tool, sent
        arguments that fail the schema, or returned the wrong count.
    NoUsableResponse
        If the reply carried neither a tool call nor any text.
    """
    tool_name = tool.__name__
    if not response.has_tool_call:
        if not response.text:
            raise NoUsableResponse(f"Empty reply: no {tool_name} call and no text")
        raise SchemaViolation(
            f"no {tool_name} call in response",
            tool_name=tool_name,
            details={"text": response.text[:200]},
        )
    if response.tool_name != tool_name:
        raise SchemaViolation(
            f"expected a {tool_name} call, got {response.tool_name}",
            tool_name=tool_name,
        )
    return _validate_arguments(tool, response.arguments or {}, field_name, expected_count)


def extract_list_result(
    result: AgentResult,
    tool: type[BaseModel],
    field_name: str,
    expected_count: int | None = None,
) -> list[str]:
    """Pull the list field *field_name* out of a completed agent result.

    Raises
    ------
    SchemaViolation
        If the result holds no tool arguments or they fail validation.
    """
    if not result.success or not isinstance(result.result, Mapping):
        raise SchemaViolation(
            f"agent result holds no {tool.__name__} arguments",
            tool_name=tool.__name__,
        )
    return _validate_arguments(tool, result.result, field_name, expected_count)
