"""Document store protocol and addressing.

The document store is treated as a black-box CRUD service: no transactions,
no queries, only point reads and writes addressed by path. Documents may be
nested under a parent document (e.g. events under a talk room).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class DocumentPath:
    """Address of a single document, optionally nested under a parent.

    Example:
        room = DocumentPath("talkRooms", "01H...")
        event = room.child("events", "01J...")
        str(event)  # "talkRooms/01H.../events/01J..."
    """

    collection: str
    document_id: str
    parent: DocumentPath | None = None

    def child(self, collection: str, document_id: str) -> DocumentPath:
        """Address a document in a sub-collection of this document."""
        return DocumentPath(
            collection=collection, document_id=document_id, parent=self
        )

    def __str__(self) -> str:
        """Return the slash-separated document path."""
        prefix = f"{self.parent}/" if self.parent is not None else ""
        return f"{prefix}{self.collection}/{self.document_id}"


@runtime_checkable
class DocumentStore(Protocol):
    """Point-access CRUD over a hierarchical document store."""

    async def insert(self, path: DocumentPath, data: dict[str, Any]) -> None:
        """Create a document at path.

        Raises:
            DocumentAlreadyExistsError: If a document already exists at path
            DocumentStoreError: On any other store failure
        """
        ...

    async def update(self, path: DocumentPath, data: dict[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If no document exists at path
            DocumentStoreError: On any other store failure
        """
        ...

    async def get(self, path: DocumentPath) -> dict[str, Any] | None:
        """Read a document.

        Returns:
            The document fields, or None if no document exists at path

        Raises:
            DocumentStoreError: On store failure
        """
        ...
