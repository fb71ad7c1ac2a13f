import os

import pytest

from common.config import Settings
from sorter.models import SortOptions


def test_settings_default_values(mocker, tmp_path):
    """
    Test that the Settings class loads default values correctly when only the
    required environment variables are set.
    """
    mocker.patch.dict(os.environ, {"VAULT_PATH": str(tmp_path)}, clear=True)

    settings = Settings()

    assert settings.VAULT_PATH == str(tmp_path)
    assert settings.AI_PROVIDER == "gemini"
    assert settings.GEMINI_MODEL == "gemini-1.5-flash-latest"
    assert settings.CLAUDE_MODEL == "claude-3-haiku-20240307"
    assert settings.GPT_MODEL == "gpt-3.5-turbo"
    assert settings.SOURCE_FOLDER == ""
    assert settings.AUTO_DETECT_FOLDERS is True
    assert settings.TARGET_FOLDERS == []
    assert settings.LABEL_MATCH == "exact"
    assert settings.MAX_WORKERS == 10
    assert settings.BATCH_PAUSE_SECONDS == 1.0
    assert settings.MAX_CONTENT_CHARS == 4000
    assert settings.MAX_OUTPUT_TOKENS == 100
    assert settings.MAX_RETRIES == 1
    assert settings.DOCUMENT_EXTENSIONS == [".md"]
    assert settings.GEMINI_API_KEY == ""
    assert settings.OPENAI_BASE_URL is None


def test_settings_from_environment_variables(mocker, tmp_path):
    """
    Test that the Settings class correctly loads values from environment variables.
    """
    mocker.patch.dict(
        os.environ,
        {
            "VAULT_PATH": str(tmp_path),
            "AI_PROVIDER": "Claude",
            "CLAUDE_API_KEY": "claude_key",
            "SOURCE_FOLDER": "/Inbox/",
            "AUTO_DETECT_FOLDERS": "false",
            "TARGET_FOLDERS": "Work, Personal ,, Maths",
            "LABEL_MATCH": "case-insensitive",
            "MAX_WORKERS": "4",
            "BATCH_PAUSE_SECONDS": "0.5",
            "DOCUMENT_EXTENSIONS": "md, .TXT",
            "OPENAI_BASE_URL": "http://ollama:11434/v1/",
        },
        clear=True,
    )

    settings = Settings()

    assert settings.AI_PROVIDER == "claude"
    assert settings.api_key_for("claude") == "claude_key"
    assert settings.SOURCE_FOLDER == "Inbox"
    assert settings.AUTO_DETECT_FOLDERS is False
    assert settings.TARGET_FOLDERS == ["Work", "Personal", "Maths"]
    assert settings.LABEL_MATCH == "case-insensitive"
    assert settings.MAX_WORKERS == 4
    assert settings.BATCH_PAUSE_SECONDS == 0.5
    assert settings.DOCUMENT_EXTENSIONS == [".md", ".txt"]
    assert settings.OPENAI_BASE_URL == "http://ollama:11434/v1/"


@pytest.mark.parametrize("raw, expected", [("0", 1), ("-3", 1), ("7", 7), ("50", 20)])
def test_max_workers_is_clamped(mocker, tmp_path, raw, expected):
    mocker.patch.dict(
        os.environ, {"VAULT_PATH": str(tmp_path), "MAX_WORKERS": raw}, clear=True
    )

    assert Settings().MAX_WORKERS == expected


def test_settings_missing_vault_path(mocker):
    """
    Test that the Settings class raises a ValueError if VAULT_PATH is not set.
    """
    mocker.patch.dict(os.environ, {}, clear=True)

    with pytest.raises(
        ValueError, match="Required environment variable 'VAULT_PATH' is not set."
    ):
        Settings()


def test_invalid_ai_provider(mocker, tmp_path):
    mocker.patch.dict(
        os.environ,
        {"VAULT_PATH": str(tmp_path), "AI_PROVIDER": "llama"},
        clear=True,
    )

    with pytest.raises(ValueError, match="AI_PROVIDER must be"):
        Settings()


def test_invalid_label_match(mocker, tmp_path):
    mocker.patch.dict(
        os.environ,
        {"VAULT_PATH": str(tmp_path), "LABEL_MATCH": "fuzzy"},
        clear=True,
    )

    with pytest.raises(ValueError, match="LABEL_MATCH must be"):
        Settings()


def test_zero_retries_rejected(mocker, tmp_path):
    mocker.patch.dict(
        os.environ,
        {"VAULT_PATH": str(tmp_path), "MAX_RETRIES": "0"},
        clear=True,
    )

    with pytest.raises(ValueError, match="MAX_RETRIES must be >= 1"):
        Settings()


def test_sort_options_from_settings(settings):
    settings.MAX_WORKERS = 3
    settings.BATCH_PAUSE_SECONDS = 2.0
    settings.LABEL_MATCH = "case-insensitive"

    options = SortOptions.from_settings(settings)

    assert options == SortOptions(
        concurrency=3, pause_seconds=2.0, case_sensitive_labels=False
    )
