"""Exceptions for document store operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared_kernel.document_store.protocols import DocumentPath


class DocumentStoreError(Exception):
    """Base exception for document store failures."""

    pass


class DocumentAlreadyExistsError(DocumentStoreError):
    """Raised when inserting a document whose path is already taken."""

    def __init__(self, path: DocumentPath):
        super().__init__(f"Document already exists: {path}")
        self.path = path


class DocumentNotFoundError(DocumentStoreError):
    """Raised when updating a document that does not exist."""

    def __init__(self, path: DocumentPath):
        super().__init__(f"Document not found: {path}")
        self.path = path
