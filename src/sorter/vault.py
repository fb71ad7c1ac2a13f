"""
Document Store
==============

This module defines the storage contract the sorting pipeline depends on and
a filesystem implementation of it. A vault is a directory tree of text notes;
its top-level folders are the locations notes get sorted into.

The `DocumentStore` abstract base class keeps the pipeline independent of
where documents actually live, so tests and other hosts can supply their own
store.
"""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

import structlog

from .errors import MoveError, ReadError
from .models import Document

log = structlog.get_logger(__name__)


class DocumentStore(ABC):
    """Abstract base class for document stores."""

    @abstractmethod
    def list_documents(self, scope: str = "") -> list[Document]:
        """
        Return documents in ``scope``.

        An empty scope means documents directly at the store root; a folder
        scope includes every document below that folder.
        """
        raise NotImplementedError

    @abstractmethod
    def list_locations(self) -> list[str]:
        """Return the names of top-level locations."""
        raise NotImplementedError

    @abstractmethod
    def read_content(self, document: Document) -> str:
        raise NotImplementedError

    @abstractmethod
    def location_exists(self, name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def create_location(self, name: str) -> None:
        """Create a location. Creating an existing location is a no-op."""
        raise NotImplementedError

    @abstractmethod
    def move_document(self, document: Document, new_identifier: str) -> Document:
        """Move ``document`` to ``new_identifier`` and return the moved document."""
        raise NotImplementedError


def _is_hidden(parts) -> bool:
    return any(part.startswith(".") for part in parts)


class FilesystemVault(DocumentStore):
    """A document store backed by a directory tree."""

    def __init__(self, root: str | os.PathLike, extensions=(".md",)):
        self.root = Path(root).expanduser()
        self.extensions = tuple(ext.lower() for ext in extensions)
        # Serializes the exists-check + rename pair across worker threads.
        self._move_lock = threading.Lock()
        if not self.root.is_dir():
            raise ValueError(f"Vault path '{self.root}' is not a directory.")

    def _path(self, identifier: str) -> Path:
        return self.root.joinpath(*PurePosixPath(identifier).parts)

    def _is_document(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.extensions

    def list_documents(self, scope: str = "") -> list[Document]:
        scope = scope.strip("/")
        if not scope:
            candidates = [p for p in self.root.iterdir() if not p.name.startswith(".")]
        else:
            base = self._path(scope)
            if not base.is_dir():
                log.warning("Source folder does not exist", scope=scope)
                return []
            candidates = [
                p
                for p in base.rglob("*")
                if not _is_hidden(p.relative_to(self.root).parts)
            ]

        documents = [
            Document(p.relative_to(self.root).as_posix())
            for p in candidates
            if self._is_document(p)
        ]
        return sorted(documents, key=lambda doc: doc.identifier)

    def list_locations(self) -> list[str]:
        return sorted(
            p.name
            for p in self.root.iterdir()
            if p.is_dir() and not p.name.startswith(".")
        )

    def read_content(self, document: Document) -> str:
        try:
            return self._path(document.identifier).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Cannot read {document.identifier}: {e}") from e

    def location_exists(self, name: str) -> bool:
        # Only single top-level folder names count as locations.
        if not self._is_location_name(name):
            return False
        return self._path(name).is_dir()

    def create_location(self, name: str) -> None:
        self._check_location_name(name)
        try:
            self._path(name).mkdir(exist_ok=True)
        except OSError as e:
            raise MoveError(f"Cannot create folder: {e}", destination=name) from e

    def move_document(self, document: Document, new_identifier: str) -> Document:
        source = self._path(document.identifier)
        destination = self._path(new_identifier)
        if not self._inside_root(source) or not self._inside_root(destination):
            raise MoveError(
                "Path escapes the vault",
                identifier=document.identifier,
                destination=new_identifier,
            )
        with self._move_lock:
            if destination.exists():
                raise MoveError(
                    "Destination already exists",
                    identifier=document.identifier,
                    destination=new_identifier,
                )
            try:
                source.rename(destination)
            except OSError as e:
                raise MoveError(
                    str(e), identifier=document.identifier, destination=new_identifier
                ) from e
        return Document(new_identifier)

    def _inside_root(self, path: Path) -> bool:
        root = self.root.resolve()
        resolved = path.resolve()
        return resolved != root and resolved.is_relative_to(root)

    @staticmethod
    def _is_location_name(name: str) -> bool:
        parts = PurePosixPath(name).parts
        return len(parts) == 1 and name not in (".", "..") and "\\" not in name

    @classmethod
    def _check_location_name(cls, name: str) -> None:
        if not cls._is_location_name(name):
            raise MoveError("Invalid folder name", destination=name)
