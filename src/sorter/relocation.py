"""
Moving classified documents into their target folders.
"""

from __future__ import annotations

import posixpath

import structlog

from .errors import MoveError
from .models import Document, Outcome
from .vault import DocumentStore

log = structlog.get_logger(__name__)


class RelocationApplier:
    """
    Moves a document into the location named after its (already validated) label.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def apply(self, document: Document, label: str) -> Outcome:
        if document.location == label:
            log.info("Document already in target folder", doc=document.identifier, label=label)
            return Outcome.moved(document, label)

        new_identifier = posixpath.join(label, document.name)
        try:
            if not self.store.location_exists(label):
                log.info("Creating target folder", label=label)
                self.store.create_location(label)
            self.store.move_document(document, new_identifier)
        except MoveError as e:
            log.warning(
                "Failed to move document",
                doc=document.identifier,
                destination=new_identifier,
                error=str(e),
            )
            return Outcome.failed(document, str(e), label=label)

        log.info("Moved document", doc=document.identifier, destination=new_identifier)
        return Outcome.moved(document, label)
