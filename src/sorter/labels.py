"""
Candidate labels: building the set of legal answers and checking model output
against it.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from common.config import Settings

from .vault import DocumentStore

log = structlog.get_logger(__name__)


def candidate_labels(values: Iterable[str]) -> tuple[str, ...]:
    """Trim, drop empties and deduplicate while preserving order."""
    seen = set()
    output = []
    for value in values:
        label = (value or "").strip()
        if not label or label in seen:
            continue
        seen.add(label)
        output.append(label)
    return tuple(output)


def parse_label_list(text: str) -> tuple[str, ...]:
    """Parse a comma-separated folder list such as ``"Work, Personal"``."""
    return candidate_labels(text.split(","))


def detect_labels(store: DocumentStore) -> tuple[str, ...]:
    """Use the store's top-level locations as the label set."""
    return candidate_labels(store.list_locations())


def resolve_labels(settings: Settings, store: DocumentStore) -> tuple[str, ...]:
    """Return the label set for a run according to the configured mode."""
    if settings.AUTO_DETECT_FOLDERS:
        labels = detect_labels(store)
        log.info("Auto-detected target folders", labels=list(labels))
    else:
        labels = candidate_labels(settings.TARGET_FOLDERS)
    return labels


def validate_label(
    raw: str | None, labels: Iterable[str], case_sensitive: bool = True
) -> str | None:
    """
    Return the label ``raw`` names, or None if it is not one of ``labels``.

    Matching is exact after trimming. With ``case_sensitive=False`` the
    spelling from ``labels`` is returned so the folder name stays canonical.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    if case_sensitive:
        return value if value in set(labels) else None

    folded = value.casefold()
    for label in labels:
        if label.casefold() == folded:
            return label
    return None
