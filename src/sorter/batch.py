"""
Batch Sorting
=============

`BatchSorter` is the entry point of the sorting library. It takes a list of
documents and a candidate label set, runs every document through a
`DocumentSorter` in windows of bounded concurrency, pauses between windows to
respect provider rate limits, and folds the per-document outcomes into a
`RunSummary`.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, Sequence

import structlog

from common.batch_loop import iter_windows, run_windowed_threadpool

from .labels import candidate_labels
from .models import Document, Outcome, RunSummary, SortOptions
from .providers import ClassificationClient
from .summary import summarize
from .vault import DocumentStore
from .worker import DocumentSorter

log = structlog.get_logger(__name__)


def _ignore(_message: str) -> None:
    return None


class BatchSorter:
    """Sorts many documents with bounded concurrency."""

    def __init__(
        self,
        store: DocumentStore,
        classifier: ClassificationClient,
        options: SortOptions,
        notify: Callable[[str], None] = _ignore,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.classifier = classifier
        self.options = options
        self.notify = notify
        self.sleep = sleep

    def run(
        self,
        documents: Iterable[Document],
        labels: Iterable[str],
        concurrency: int | None = None,
    ) -> RunSummary:
        """
        Classify and relocate ``documents`` into folders named by ``labels``.

        Raises:
            AuthError: the selected provider has no credential. Raised before
                any document is read.
        """
        self.classifier.check_credentials()

        label_set = candidate_labels(labels)
        if not label_set:
            log.warning("No target folders available; nothing to sort")
            return RunSummary()

        documents = list(documents)
        if not documents:
            log.info("No documents to sort")
            return RunSummary()

        concurrency = max(1, int(concurrency or self.options.concurrency))
        window_count = sum(1 for _ in iter_windows(documents, concurrency))

        self.notify(
            f"Starting AI sorting of {len(documents)} notes "
            f"using {self.classifier.name.upper()}..."
        )
        log.info(
            "Starting sort run",
            provider=self.classifier.name,
            document_count=len(documents),
            labels=list(label_set),
            concurrency=concurrency,
            window_count=window_count,
        )

        sorter = DocumentSorter(
            self.store,
            self.classifier,
            label_set,
            case_sensitive=self.options.case_sensitive_labels,
        )
        outcomes: Sequence[Outcome] = run_windowed_threadpool(
            job_name="sort",
            items=documents,
            process_item=sorter.process,
            on_error=lambda doc, exc: Outcome.failed(doc, f"Unexpected error: {exc}"),
            window_size=concurrency,
            pause_seconds=self.options.pause_seconds,
            sleep=self.sleep,
        )

        summary = summarize(outcomes)
        log.info(
            "Sort run complete",
            moved=summary.moved,
            skipped=summary.skipped,
            failed=summary.failed,
        )
        self.notify(f"AI sorting complete! {summary}")
        return summary
