"""
Pytest configuration.

The project uses a ``src/`` layout (package code lives in ``src/sorter`` and
``src/common``). Normally, developers run tests after installing the package
(e.g. ``pip install -e .``).

When the package cannot be imported that way (for example a hidden ``.pth``
file in a dot-prefixed virtualenv), this file adds ``src/`` to ``sys.path``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    try:
        import sorter  # noqa: F401
        return
    except ModuleNotFoundError:
        pass

    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


_ensure_src_on_path()


@pytest.fixture
def base_env(tmp_path):
    """Minimal environment for a valid ``Settings``."""
    return {
        "VAULT_PATH": str(tmp_path),
        "GEMINI_API_KEY": "test_gemini_key",
    }


@pytest.fixture
def settings(mocker, base_env):
    """Fixture to create a Settings object for tests."""
    from common.config import Settings

    mocker.patch.dict("os.environ", base_env, clear=True)
    return Settings()
