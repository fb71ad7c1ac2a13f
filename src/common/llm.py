"""
Shared LLM helpers.

This module centralizes the OpenAI-compatible chat completion call so every
OpenAI-backed classifier reuses the same retry behaviour and client setup.
"""

import openai

from .utils import retry

RETRYABLE_OPENAI_EXCEPTIONS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
)


def build_openai_client(
    api_key: str, base_url: str | None, timeout: float
) -> openai.OpenAI:
    """Create an SDK client with SDK-level retries disabled; ``retry`` owns that policy."""
    return openai.OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
    )


class OpenAIChatMixin:
    """
    Mixin providing a retried OpenAI-compatible chat completion call.

    The mixin expects ``self.settings`` to expose ``MAX_RETRIES`` and
    ``MAX_RETRY_BACKOFF_SECONDS`` for the retry decorator, and the class to
    implement ``_openai_client()`` returning an ``openai.OpenAI`` instance.
    """

    def _openai_client(self) -> openai.OpenAI:
        raise NotImplementedError

    @retry(retryable_exceptions=RETRYABLE_OPENAI_EXCEPTIONS)
    def _create_completion(self, **kwargs):
        """Call the OpenAI-compatible chat completion API with retries."""
        return self._openai_client().chat.completions.create(**kwargs)
