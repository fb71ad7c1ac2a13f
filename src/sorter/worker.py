"""
Document Sorting Worker
=======================

This module defines the `DocumentSorter`, which runs a single document through
the sorting pipeline: read its content, ask the classifier for a folder,
check the answer against the candidate labels and move the document.

Every per-document failure ends here as an `Outcome`; nothing raised while
sorting one document reaches its siblings or the run.
"""

from __future__ import annotations

import datetime as dt
from typing import Sequence

import structlog

from .errors import ClassificationError, ReadError
from .labels import validate_label
from .models import Document, Outcome, SkipReason
from .providers import ClassificationClient
from .relocation import RelocationApplier
from .vault import DocumentStore

log = structlog.get_logger(__name__)


class DocumentSorter:
    """
    Classifies and relocates documents against a fixed label set.
    """

    def __init__(
        self,
        store: DocumentStore,
        classifier: ClassificationClient,
        labels: Sequence[str],
        case_sensitive: bool = True,
    ):
        self.store = store
        self.classifier = classifier
        self.labels = tuple(labels)
        self.case_sensitive = case_sensitive
        self.applier = RelocationApplier(store)

    def process(self, document: Document) -> Outcome:
        """
        Execute the read → classify → validate → relocate pipeline for one document.
        """
        start_time = dt.datetime.now()
        outcome = self._process(document)
        elapsed_time = (dt.datetime.now() - start_time).total_seconds()
        log.info(
            "Finished document",
            doc=document.identifier,
            status=outcome.status.value,
            label=outcome.label,
            reason=outcome.reason or None,
            elapsed_time=f"{elapsed_time:.2f}s",
        )
        return outcome

    def _process(self, document: Document) -> Outcome:
        try:
            content = self.store.read_content(document)
        except ReadError as e:
            log.warning("Failed to read document", doc=document.identifier, error=str(e))
            return Outcome.failed(document, str(e))

        if not content.strip():
            return Outcome.skipped(document, SkipReason.EMPTY_CONTENT)

        try:
            raw_label = self.classifier.classify(content, self.labels)
        except ClassificationError as e:
            log.warning("Classification failed", doc=document.identifier, error=str(e))
            return Outcome.failed(document, str(e))

        if raw_label is None:
            return Outcome.skipped(document, SkipReason.NO_LABEL)

        label = validate_label(raw_label, self.labels, self.case_sensitive)
        if label is None:
            log.info(
                "Classifier answered with an unknown folder",
                doc=document.identifier,
                answer=raw_label,
            )
            return Outcome.skipped(document, SkipReason.INVALID_LABEL, label=raw_label)

        return self.applier.apply(document, label)
