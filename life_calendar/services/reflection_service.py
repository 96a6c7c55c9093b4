"""Reflection service: a short LLM-generated reflection on the time left.

One request per call, no retry and no cache. Every failure is contained
here and replaced with a fixed fallback string.
"""

import asyncio
import logging
import os
from typing import Any, Optional

import litellm

from ..core.config import Settings, get_settings
from ..domain.errors import ReflectionFailure
from ..utils.logging import log_reflection_failure, log_reflection_request

logger = logging.getLogger(__name__)

# Shown before any reflection has been received
DEFAULT_REFLECTION = (
    "What matters is not how many years you live, but how you live those years."
)
# Model answered with empty text
EMPTY_RESPONSE_REFLECTION = (
    "Every day is a gift, which is why we call it the present."
)
# Request failed for any reason
FALLBACK_REFLECTION = (
    "Life is not measured by the number of breaths we take, "
    "but by the moments that take our breath away."
)

_PROMPT_TEMPLATE = (
    "I am {age} years old, with roughly {weeks_remaining} weeks left "
    "in an expected lifespan of {expected_lifespan} years.\n"
    "Offer a short, warm and thoughtful reflection or reminder (at most 3 sentences), "
    "like a gentle elder reminding me how precious life and the present moment are.\n"
    "Answer in {language}. Output only the text, without labels, quotes or explanations."
)


def build_reflection_prompt(
    age: int, weeks_remaining: int, expected_lifespan: int, language: str = "English"
) -> str:
    return _PROMPT_TEMPLATE.format(
        age=age,
        weeks_remaining=weeks_remaining,
        expected_lifespan=expected_lifespan,
        language=language,
    )


class LLMReflectionProvider:
    """Reflection provider backed by LiteLLM."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.model = self.settings.llm_model
        self._setup_api_keys()

    def _setup_api_keys(self) -> None:
        """Export configured API keys where LiteLLM looks for them"""
        if api_key := self.settings.gemini_api_key:
            os.environ.setdefault("GEMINI_API_KEY", api_key)

        if api_key := self.settings.openai_api_key:
            os.environ.setdefault("OPENAI_API_KEY", api_key)

        if api_key := self.settings.anthropic_api_key:
            os.environ.setdefault("ANTHROPIC_API_KEY", api_key)

    async def request(
        self, age: int, weeks_remaining: int, expected_lifespan: int
    ) -> str:
        """Request a reflection; never raises.

        Returns:
            The model's text, EMPTY_RESPONSE_REFLECTION when the model
            returned nothing, or FALLBACK_REFLECTION on any failure.
        """
        context = {
            "age": age,
            "weeks_remaining": weeks_remaining,
            "expected_lifespan": expected_lifespan,
            "model": self.model,
        }
        log_reflection_request(context)

        try:
            text = await self._complete(
                build_reflection_prompt(
                    age,
                    weeks_remaining,
                    expected_lifespan,
                    self.settings.reflection_language,
                )
            )
        except Exception as e:
            logger.error(f"Reflection request failed: {e}")
            log_reflection_failure(e, context)
            return FALLBACK_REFLECTION

        if not text:
            logger.info("Reflection model returned empty text")
            return EMPTY_RESPONSE_REFLECTION
        return text

    async def _complete(self, prompt: str) -> str:
        response = await asyncio.to_thread(
            litellm.completion,
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.settings.reflection_temperature,
            top_p=self.settings.reflection_top_p,
            max_tokens=self.settings.reflection_max_tokens,
            timeout=self.settings.reflection_timeout,
        )
        return _extract_text(response)


def _extract_text(response: Any) -> str:
    """Pull the message text out of a completion response."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as e:
        raise ReflectionFailure(f"Malformed completion response: {e}") from e

    if content is None:
        return ""
    if not isinstance(content, str):
        raise ReflectionFailure(
            f"Unexpected completion content type: {type(content).__name__}"
        )
    return content.strip()


# Global provider instance
_reflection_provider: Optional[LLMReflectionProvider] = None


def get_reflection_provider() -> LLMReflectionProvider:
    """Get the global reflection provider instance"""
    global _reflection_provider
    if _reflection_provider is None:
        _reflection_provider = LLMReflectionProvider()
    return _reflection_provider
