"""Firestore client implementation of the DocumentStore protocol.

Wraps the async google-cloud-firestore client, translating Google API errors
into the document store exception hierarchy.
"""

from __future__ import annotations

from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from shared_kernel.document_store.exceptions import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentStoreError,
)
from shared_kernel.document_store.observability import (
    DefaultDocumentStoreProbe,
    DocumentStoreProbe,
)
from shared_kernel.document_store.protocols import DocumentPath


class FirestoreDocumentStore:
    """Firestore implementation of the DocumentStore protocol.

    The underlying AsyncClient is created lazily so that constructing the
    store never performs network or credential lookups. When the
    FIRESTORE_EMULATOR_HOST environment variable is set, the client library
    talks to the emulator instead of Google Cloud.
    """

    def __init__(
        self,
        project_id: str,
        database: str = "(default)",
        client: firestore.AsyncClient | None = None,
        probe: DocumentStoreProbe | None = None,
    ):
        """Initialize Firestore document store.

        Args:
            project_id: Google Cloud project id
            database: Firestore database id
            client: Optional pre-built AsyncClient (for testing)
            probe: Optional domain probe for observability
        """
        self._project_id = project_id
        self._database = database
        self._client = client
        self._probe = probe or DefaultDocumentStoreProbe()

    def _ensure_client(self) -> firestore.AsyncClient:
        """Lazily initialize the Firestore client."""
        if self._client is None:
            try:
                self._client = firestore.AsyncClient(
                    project=self._project_id,
                    database=self._database,
                )
            except Exception as e:
                raise DocumentStoreError(
                    f"Failed to create Firestore client for {self._project_id}: {e}"
                ) from e
        return self._client

    def _reference(self, path: DocumentPath) -> firestore.AsyncDocumentReference:
        return self._ensure_client().document(str(path))

    async def insert(self, path: DocumentPath, data: dict[str, Any]) -> None:
        """Create a document, failing if one already exists at path."""
        try:
            await self._reference(path).create(data)
        except google_exceptions.Conflict as e:
            self._probe.document_write_failed(str(path), "insert", e)
            raise DocumentAlreadyExistsError(path) from e
        except google_exceptions.GoogleAPIError as e:
            self._probe.document_write_failed(str(path), "insert", e)
            raise DocumentStoreError(f"Failed to insert {path}: {e}") from e

        self._probe.document_inserted(str(path))

    async def update(self, path: DocumentPath, data: dict[str, Any]) -> None:
        """Merge fields into an existing document."""
        try:
            await self._reference(path).update(data)
        except google_exceptions.NotFound as e:
            self._probe.document_write_failed(str(path), "update", e)
            raise DocumentNotFoundError(path) from e
        except google_exceptions.GoogleAPIError as e:
            self._probe.document_write_failed(str(path), "update", e)
            raise DocumentStoreError(f"Failed to update {path}: {e}") from e

        self._probe.document_updated(str(path))

    async def get(self, path: DocumentPath) -> dict[str, Any] | None:
        """Read a document, returning None when it does not exist."""
        try:
            snapshot = await self._reference(path).get()
        except google_exceptions.GoogleAPIError as e:
            self._probe.document_read_failed(str(path), e)
            raise DocumentStoreError(f"Failed to read {path}: {e}") from e

        self._probe.document_read(str(path), found=snapshot.exists)
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def close(self) -> None:
        """Close the underlying client, if it was created.

        AsyncClient.close() only releases the HTTP session; the gRPC
        channel belongs to the generated API client's transport and is
        closed separately.
        """
        if self._client is None:
            return
        client, self._client = self._client, None
        await client._firestore_api.transport.close()
        client.close()
