"""
Classification Providers
========================

This module turns a note and a list of candidate folders into a single
folder name by asking a hosted LLM. It defines a common interface for
classification clients and implementations for Google Gemini, Anthropic
Claude and OpenAI GPT (or any OpenAI-compatible server).

The providers differ only in endpoint, authentication and where the answer
lives in the response. Callers select one through `create_classifier` and
never branch on the provider name themselves.

A provider answer without any text is a soft failure (``None``); a transport
failure raises `TransportError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import openai
import requests
import structlog

from common.config import Settings
from common.llm import OpenAIChatMixin, build_openai_client
from common.utils import retry

from .errors import AuthError, TransportError
from .models import ClassificationRequest

log = structlog.get_logger(__name__)

RETRYABLE_HTTP_EXCEPTIONS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


def _dig(data: Any, *path) -> Any:
    """Follow ``path`` (dict keys / list indices) into ``data``; None if any step is missing."""
    current = data
    for key in path:
        try:
            current = current[key]
        except (KeyError, IndexError, TypeError):
            return None
    return current


def _clean_answer(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class ClassificationClient(ABC):
    """Abstract base class for classification providers."""

    name: str = ""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def api_key(self) -> str:
        return self.settings.api_key_for(self.name)

    def check_credentials(self) -> None:
        """Raise `AuthError` if no credential is configured for this provider."""
        if not (self.api_key or "").strip():
            raise AuthError(self.name)

    def close(self) -> None:
        """Release any network resources held by the client."""

    def classify(self, content: str, labels: Sequence[str]) -> str | None:
        """
        Ask the model which of ``labels`` fits ``content`` best.

        Returns the raw (trimmed) answer or None if the model gave no text.
        The answer is not checked against ``labels`` here.
        """
        request = ClassificationRequest.build(
            content, labels, self.settings.MAX_CONTENT_CHARS
        )
        answer = self._complete(request.prompt)
        if answer is None:
            log.warning("Provider returned no label", provider=self.name)
        return answer

    @abstractmethod
    def _complete(self, prompt: str) -> str | None:
        """Send ``prompt`` and return the first text completion, or None."""
        raise NotImplementedError


class HttpClassificationClient(ClassificationClient):
    """Base for providers called with a plain JSON-over-HTTPS POST."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        super().__init__(settings)
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    @retry(retryable_exceptions=RETRYABLE_HTTP_EXCEPTIONS)
    def _post(self, url: str, **kwargs) -> requests.Response:
        """A retriable version of session.post."""
        return self._session.post(url, timeout=self.settings.REQUEST_TIMEOUT, **kwargs)

    def _post_json(self, url: str, **kwargs) -> Any:
        try:
            response = self._post(url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(None, str(e), provider=self.name) from e

        if not response.ok:
            raise TransportError(
                response.status_code, "Provider returned an error", provider=self.name
            )
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                response.status_code,
                "Provider response is not valid JSON",
                provider=self.name,
            ) from e


class GeminiClient(HttpClassificationClient):
    """Google Gemini ``generateContent``; the key travels as a query parameter."""

    name = "gemini"

    def _complete(self, prompt: str) -> str | None:
        url = (
            f"{self.settings.GEMINI_BASE_URL}/models/"
            f"{self.settings.GEMINI_MODEL}:generateContent"
        )
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": self.settings.MAX_OUTPUT_TOKENS,
                "temperature": 0.1,
            },
        }
        data = self._post_json(url, params={"key": self.api_key}, json=payload)
        return _clean_answer(_dig(data, "candidates", 0, "content", "parts", 0, "text"))


class ClaudeClient(HttpClassificationClient):
    """Anthropic Messages API."""

    name = "claude"
    url = "https://api.anthropic.com/v1/messages"
    api_version = "2023-06-01"

    def _complete(self, prompt: str) -> str | None:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }
        payload = {
            "model": self.settings.CLAUDE_MODEL,
            "max_tokens": self.settings.MAX_OUTPUT_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        data = self._post_json(self.url, headers=headers, json=payload)
        return _clean_answer(_dig(data, "content", 0, "text"))


class OpenAIClient(OpenAIChatMixin, ClassificationClient):
    """OpenAI chat completions, or any OpenAI-compatible server via ``OPENAI_BASE_URL``."""

    name = "gpt"

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client: openai.OpenAI | None = None

    def _openai_client(self) -> openai.OpenAI:
        # Built lazily: the SDK refuses to construct a client without a key.
        if self._client is None:
            self._client = build_openai_client(
                self.api_key, self.settings.OPENAI_BASE_URL, self.settings.REQUEST_TIMEOUT
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _complete(self, prompt: str) -> str | None:
        params = {
            "model": self.settings.GPT_MODEL,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.settings.MAX_OUTPUT_TOKENS,
            "temperature": 0.1,
        }
        try:
            response = self._create_completion(**params)
        except openai.APIStatusError as e:
            raise TransportError(e.status_code, e.message, provider=self.name) from e
        except openai.APIError as e:
            raise TransportError(None, str(e), provider=self.name) from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        return _clean_answer(choices[0].message.content)


PROVIDERS: dict[str, type[ClassificationClient]] = {
    GeminiClient.name: GeminiClient,
    ClaudeClient.name: ClaudeClient,
    OpenAIClient.name: OpenAIClient,
}


def create_classifier(settings: Settings) -> ClassificationClient:
    """Instantiate the provider selected by ``settings.AI_PROVIDER``."""
    try:
        provider_cls = PROVIDERS[settings.AI_PROVIDER]
    except KeyError:
        raise ValueError(f"Unknown AI provider '{settings.AI_PROVIDER}'") from None
    return provider_cls(settings)
