"""
Configuration module for the note sorter.

This module centralizes the loading and validation of all configuration
parameters from environment variables. It provides a single `Settings`
class that acts as a container for all configurable values, ensuring
that they are defined in one place and can be easily imported and used
throughout the application.
"""

from __future__ import annotations

import os
from typing import Literal

PROVIDER_NAMES = ("gemini", "claude", "gpt")
LABEL_MATCH_MODES = ("exact", "case-insensitive")

MAX_WORKERS_LIMIT = 20


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """
    A container for all configuration settings, loaded from environment variables.

    This class centralizes configuration, providing default values for optional
    settings and raising errors for missing or invalid settings. Credentials are
    optional here: a missing key for the selected provider is reported when a
    sort run starts, not at load time.
    """

    # --- Document store ---
    VAULT_PATH: str
    SOURCE_FOLDER: str
    DOCUMENT_EXTENSIONS: list[str]

    # --- LLM Provider Configuration ---
    AI_PROVIDER: Literal["gemini", "claude", "gpt"]
    GEMINI_API_KEY: str
    CLAUDE_API_KEY: str
    OPENAI_API_KEY: str
    OPENAI_BASE_URL: str | None

    # --- Model Selection ---
    GEMINI_MODEL: str
    GEMINI_BASE_URL: str
    CLAUDE_MODEL: str
    GPT_MODEL: str
    MAX_OUTPUT_TOKENS: int
    MAX_CONTENT_CHARS: int

    # --- Target folders ---
    AUTO_DETECT_FOLDERS: bool
    TARGET_FOLDERS: list[str]
    LABEL_MATCH: Literal["exact", "case-insensitive"]

    # --- Batch Configuration ---
    MAX_WORKERS: int
    BATCH_PAUSE_SECONDS: float
    MAX_RETRIES: int
    MAX_RETRY_BACKOFF_SECONDS: int
    REQUEST_TIMEOUT: int

    # --- Logging ---
    LOG_FORMAT: Literal["console", "json"]
    LOG_LEVEL: str

    def __init__(self):
        """
        Loads settings from environment variables and performs validation.
        """
        # --- Document store ---
        self.VAULT_PATH = self._get_required_env("VAULT_PATH")
        self.SOURCE_FOLDER = os.getenv("SOURCE_FOLDER", "").strip().strip("/")
        extensions = _parse_csv(os.getenv("DOCUMENT_EXTENSIONS", ".md"))
        self.DOCUMENT_EXTENSIONS = [
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in extensions
        ]
        if not self.DOCUMENT_EXTENSIONS:
            raise ValueError("DOCUMENT_EXTENSIONS must list at least one suffix")

        # --- LLM Provider Configuration ---
        self.AI_PROVIDER = os.getenv("AI_PROVIDER", "gemini").strip().lower()
        if self.AI_PROVIDER not in PROVIDER_NAMES:
            raise ValueError("AI_PROVIDER must be 'gemini', 'claude' or 'gpt'")

        self.GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
        self.CLAUDE_API_KEY = os.getenv("CLAUDE_API_KEY", "")
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
        self.OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None

        # --- Model Selection ---
        self.GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
        self.GEMINI_BASE_URL = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).rstrip("/")
        self.CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-3-haiku-20240307")
        self.GPT_MODEL = os.getenv("GPT_MODEL", "gpt-3.5-turbo")
        self.MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", 100))
        self.MAX_CONTENT_CHARS = int(os.getenv("MAX_CONTENT_CHARS", 4000))
        if self.MAX_CONTENT_CHARS < 1:
            raise ValueError("MAX_CONTENT_CHARS must be >= 1")

        # --- Target folders ---
        self.AUTO_DETECT_FOLDERS = _parse_bool(os.getenv("AUTO_DETECT_FOLDERS", "true"))
        self.TARGET_FOLDERS = _parse_csv(os.getenv("TARGET_FOLDERS", ""))
        self.LABEL_MATCH = os.getenv("LABEL_MATCH", "exact").strip().lower()
        if self.LABEL_MATCH not in LABEL_MATCH_MODES:
            raise ValueError("LABEL_MATCH must be 'exact' or 'case-insensitive'")

        # --- Batch Configuration ---
        workers = int(os.getenv("MAX_WORKERS", 10))
        self.MAX_WORKERS = min(MAX_WORKERS_LIMIT, max(1, workers))
        self.BATCH_PAUSE_SECONDS = max(0.0, float(os.getenv("BATCH_PAUSE_SECONDS", 1.0)))
        self.MAX_RETRIES = int(os.getenv("MAX_RETRIES", 1))
        if self.MAX_RETRIES < 1:
            raise ValueError("MAX_RETRIES must be >= 1")
        self.MAX_RETRY_BACKOFF_SECONDS = int(os.getenv("MAX_RETRY_BACKOFF_SECONDS", 30))
        self.REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 60))

        # --- Logging ---
        self.LOG_FORMAT = os.getenv("LOG_FORMAT", "console").strip().lower()
        if self.LOG_FORMAT not in ("console", "json"):
            raise ValueError("LOG_FORMAT must be 'console' or 'json'")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    def api_key_for(self, provider: str) -> str:
        """Return the configured credential for ``provider`` (empty if unset)."""
        keys = {
            "gemini": self.GEMINI_API_KEY,
            "claude": self.CLAUDE_API_KEY,
            "gpt": self.OPENAI_API_KEY,
        }
        return keys.get(provider, "")

    def _get_required_env(self, var_name: str) -> str:
        """
        Gets a required environment variable, raising an error if it's not set.
        """
        value = os.getenv(var_name)
        if value is None or not value.strip():
            raise ValueError(f"Required environment variable '{var_name}' is not set.")
        return value
