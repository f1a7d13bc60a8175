"""Observability for document store operations."""

from shared_kernel.document_store.observability.document_store_probe import (
    DefaultDocumentStoreProbe,
    DocumentStoreProbe,
)

__all__ = [
    "DocumentStoreProbe",
    "DefaultDocumentStoreProbe",
]
