"""
Value types shared across the sorting pipeline.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum

from common.config import Settings

PROMPT_TEMPLATE = (
    "Analyze the following note content and determine the best folder for it "
    "from this list: {labels}. Respond with only the single, most appropriate "
    "folder name from the list and nothing else.\n"
    "\n"
    "Note Content:\n"
    "---\n"
    "{content}"
)


@dataclass(frozen=True)
class Document:
    """A document in the store, addressed by its store-relative POSIX path."""

    identifier: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.identifier)

    @property
    def location(self) -> str:
        """Parent folder path; ``""`` for documents at the store root."""
        return posixpath.dirname(self.identifier)

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class ClassificationRequest:
    content: str
    labels: tuple[str, ...]

    @classmethod
    def build(
        cls, content: str, labels, max_chars: int
    ) -> "ClassificationRequest":
        """Truncate ``content`` to its first ``max_chars`` characters."""
        return cls(content=content[:max_chars], labels=tuple(labels))

    @property
    def prompt(self) -> str:
        return PROMPT_TEMPLATE.format(
            labels=", ".join(self.labels), content=self.content
        )


class OutcomeStatus(str, Enum):
    MOVED = "moved"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(str, Enum):
    EMPTY_CONTENT = "empty_content"
    NO_LABEL = "no_label"
    INVALID_LABEL = "invalid_label"


@dataclass(frozen=True)
class Outcome:
    """Terminal state of a single document in a run."""

    document: Document
    status: OutcomeStatus
    label: str | None = None
    reason: str = ""

    @classmethod
    def moved(cls, document: Document, label: str) -> "Outcome":
        return cls(document=document, status=OutcomeStatus.MOVED, label=label)

    @classmethod
    def skipped(
        cls, document: Document, reason: SkipReason, label: str | None = None
    ) -> "Outcome":
        return cls(
            document=document,
            status=OutcomeStatus.SKIPPED,
            label=label,
            reason=reason.value,
        )

    @classmethod
    def failed(
        cls, document: Document, reason: str, label: str | None = None
    ) -> "Outcome":
        return cls(
            document=document, status=OutcomeStatus.FAILED, label=label, reason=reason
        )


@dataclass(frozen=True)
class RunSummary:
    moved: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.moved + self.skipped + self.failed

    def __str__(self) -> str:
        return f"Moved: {self.moved}, Skipped: {self.skipped}, Errors: {self.failed}"


@dataclass(frozen=True)
class SortOptions:
    """
    Immutable per-run configuration consumed by the batch sorter.

    Built from ``Settings`` once per run so that nothing in the pipeline reads
    mutable global configuration.
    """

    concurrency: int = 10
    pause_seconds: float = 1.0
    case_sensitive_labels: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "SortOptions":
        return cls(
            concurrency=settings.MAX_WORKERS,
            pause_seconds=settings.BATCH_PAUSE_SECONDS,
            case_sensitive_labels=settings.LABEL_MATCH == "exact",
        )
