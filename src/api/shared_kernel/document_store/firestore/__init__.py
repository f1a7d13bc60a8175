"""Firestore implementation of the DocumentStore protocol."""

from shared_kernel.document_store.firestore.client import FirestoreDocumentStore

__all__ = ["FirestoreDocumentStore"]
