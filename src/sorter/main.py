"""
Note Sorter Command
===================

Sorts the notes of a vault into its folders using an LLM. The command loads
settings from environment variables, resolves the target folders (detected
from the vault's top-level folders or taken from ``TARGET_FOLDERS``), asks for
confirmation and then runs a `BatchSorter` over the source folder.

Exit codes: 0 when every note was handled, 1 when some notes failed or the
user cancelled, 2 on configuration or credential errors.
"""

from __future__ import annotations

import argparse
from typing import Callable, Sequence

from common.config import Settings
from common.logging_config import configure_logging

from .batch import BatchSorter
from .errors import AuthError
from .labels import resolve_labels
from .models import SortOptions
from .providers import create_classifier
from .vault import FilesystemVault


def _notify(message: str) -> None:
    print(message, flush=True)


def _confirm(
    settings: Settings,
    labels: Sequence[str],
    document_count: int,
    ask: Callable[[str], str] | None = None,
) -> bool:
    """Describe the pending run and ask the user to go ahead."""
    ask = ask or input
    source = settings.SOURCE_FOLDER or "root folder"
    mode = "Auto-detected" if settings.AUTO_DETECT_FOLDERS else "Custom"
    lines = [
        f'This will sort {document_count} notes in "{source}" using '
        f"{settings.AI_PROVIDER.upper()} into the following folders:",
        f"Folder detection: {mode}",
        *(f"  - {label}" for label in labels),
        "Files will be moved permanently. Make sure you have a backup if needed.",
    ]
    _notify("\n".join(lines))
    answer = ask("Sort notes? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="note-sorter", description="Sort notes into folders with an LLM."
    )
    parser.add_argument(
        "-y", "--yes", action="store_true", help="do not ask for confirmation"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one sort of the configured vault."""
    args = _parse_args(argv)

    try:
        settings = Settings()
        configure_logging(settings)
        store = FilesystemVault(settings.VAULT_PATH, settings.DOCUMENT_EXTENSIONS)
    except ValueError as e:
        _notify(f"Configuration error: {e}")
        return 2

    classifier = create_classifier(settings)
    try:
        return _sort(args, settings, store, classifier)
    except AuthError as e:
        _notify(str(e))
        return 2
    finally:
        classifier.close()


def _sort(args, settings, store, classifier) -> int:
    classifier.check_credentials()

    labels = resolve_labels(settings, store)
    if not labels:
        _notify("No target folders found; nothing to sort.")
        return 0

    documents = store.list_documents(settings.SOURCE_FOLDER)
    if not documents:
        _notify("No notes found in the specified source folder.")
        return 0

    if not args.yes and not _confirm(settings, labels, len(documents)):
        _notify("Sorting cancelled.")
        return 1

    sorter = BatchSorter(
        store, classifier, SortOptions.from_settings(settings), notify=_notify
    )
    summary = sorter.run(documents, labels)
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
