"""OpenRouter chat-model factory.

OpenRouter exposes an OpenAI-compatible API, so models are plain
``langchain_openai.ChatOpenAI`` instances pointed at the OpenRouter base
URL.  Provider preference order and the fallback flag travel in the
request body's ``provider`` object; app attribution travels in the
``HTTP-Referer`` / ``X-Title`` headers.

Usage::

    settings = OpenRouterSettings.from_env()
    caller = build_openrouter_caller(settings)
"""

from __future__ import annotations

import logging

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from landing_seo.infrastructure.config import OpenRouterSettings
from landing_seo.infrastructure.llm import ModelSettings
from landing_seo.infrastructure.llm.structured import ChatModelStructuredCaller

logger = logging.getLogger(__name__)


class OpenRouterChatModelFactory:
    """Create ``ChatOpenAI`` models routed through OpenRouter.

    Parameters
    ----------
    settings:
        Validated transport settings.

    Raises
    ------
    ConfigurationError
        If the settings are incomplete (e.g. no API key).
    """

    def __init__(self, settings: OpenRouterSettings) -> None:
        settings.validate()
        self._settings = settings

    @property
    def settings(self) -> OpenRouterSettings:
        return self._settings

    def __call__(self, model_settings: ModelSettings) -> BaseChatModel:
        logger.info(
            "OpenRouterChatModelFactory: creating %s (providers=%s, fallbacks=%s)",
            model_settings.model,
            list(model_settings.providers),
            model_settings.allow_fallbacks,
        )
        return ChatOpenAI(
            model=model_settings.model,
            temperature=model_settings.temperature,
            api_key=self._settings.api_key,
            base_url=self._settings.base_url,
            timeout=self._settings.request_timeout,
            max_retries=self._settings.max_retries,
            default_headers=self._settings.headers,
            extra_body={"provider": model_settings.provider_preferences},
        )

    def __repr__(self) -> str:
        return f"OpenRouterChatModelFactory(base_url={self._settings.base_url!r})"


def build_openrouter_caller(settings: OpenRouterSettings) -> ChatModelStructuredCaller:
    """Return a structured caller that talks to OpenRouter."""
    return ChatModelStructuredCaller(
        OpenRouterChatModelFactory(settings),
        request_timeout=settings.request_timeout,
    )
