"""Tool schemas declared to the model for structured answers.

Every schema is a pydantic model whose class name is the tool name and
whose docstring is the tool description.  Element counts are advertised
to the model through ``minItems`` / ``maxItems`` but enforced by
:mod:`landing_seo.services.extraction`, so a wrong count surfaces as a
:class:`SchemaViolation` carrying both counts.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field, create_model

SEARCH_TERMS_TOOL = "submit_search_terms"
SEARCH_TERMS_FIELD = "search_terms"
KEYWORDS_TOOL = "submit_keywords"
KEYWORDS_FIELD = "keywords"


def make_string_list_tool(
    tool_name: str,
    field_name: str,
    description: str,
    item_description: str,
    count: int | None = None,
) -> type[BaseModel]:
    """Build a tool schema with a single required list-of-strings field.

    Parameters
    ----------
    tool_name:
        Tool name (becomes the model class name).
    field_name:
        Name of the list field.
    description:
        Tool description shown to the model.
    item_description:
        Description of the list field.
    count:
        If given, advertised as both ``minItems`` and ``maxItems``.
    """
    extra = {"minItems": count, "maxItems": count} if count is not None else None
    return create_model(
        tool_name,
        __doc__=description,
        **{
            field_name: (
                list[str],
                Field(description=item_description, json_schema_extra=extra),
            )
        },
    )


@lru_cache(maxsize=16)
def search_terms_tool(count: int = 15) -> type[BaseModel]:
    """``submit_search_terms`` tool for exactly *count* terms."""
    return make_string_list_tool(
        SEARCH_TERMS_TOOL,
        SEARCH_TERMS_FIELD,
        description=f"Submit exactly {count} specific must-target search terms",
        item_description=f"Array of exactly {count} specific search terms",
        count=count,
    )


@lru_cache(maxsize=16)
def keywords_tool(count: int = 8) -> type[BaseModel]:
    """``submit_keywords`` tool; *count* is advisory only."""
    return make_string_list_tool(
        KEYWORDS_TOOL,
        KEYWORDS_FIELD,
        description="Submit the generated SEO keywords",
        item_description=f"Array of {count} SEO keywords",
    )
