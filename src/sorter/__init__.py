"""
Note sorting package.

This package contains:

- the classification providers (prompt + LLM calls for Gemini, Claude, GPT)
- candidate label handling and validation
- the document store contract and its filesystem implementation
- the per-document worker and the windowed batch sorter
- the command-line entry point
"""

from .batch import BatchSorter
from .errors import (
    AuthError,
    ClassificationError,
    MoveError,
    ReadError,
    SorterError,
    StoreError,
    TransportError,
)
from .labels import detect_labels, parse_label_list, resolve_labels, validate_label
from .models import (
    ClassificationRequest,
    Document,
    Outcome,
    OutcomeStatus,
    RunSummary,
    SkipReason,
    SortOptions,
)
from .providers import (
    ClassificationClient,
    ClaudeClient,
    GeminiClient,
    OpenAIClient,
    create_classifier,
)
from .relocation import RelocationApplier
from .summary import summarize
from .vault import DocumentStore, FilesystemVault
from .worker import DocumentSorter

__all__ = [
    "AuthError",
    "BatchSorter",
    "ClassificationClient",
    "ClassificationError",
    "ClassificationRequest",
    "ClaudeClient",
    "Document",
    "DocumentSorter",
    "DocumentStore",
    "FilesystemVault",
    "GeminiClient",
    "MoveError",
    "OpenAIClient",
    "Outcome",
    "OutcomeStatus",
    "ReadError",
    "RelocationApplier",
    "RunSummary",
    "SkipReason",
    "SortOptions",
    "SorterError",
    "StoreError",
    "TransportError",
    "create_classifier",
    "detect_labels",
    "parse_label_list",
    "resolve_labels",
    "summarize",
    "validate_label",
]
