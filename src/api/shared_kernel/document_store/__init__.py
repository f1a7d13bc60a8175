"""Document store primitives shared across bounded contexts.

Contexts persist denormalized, frequently updated state through the
DocumentStore protocol. The Firestore implementation lives in the
``firestore`` sub-package.
"""

from shared_kernel.document_store.exceptions import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentStoreError,
)
from shared_kernel.document_store.protocols import DocumentPath, DocumentStore

__all__ = [
    "DocumentAlreadyExistsError",
    "DocumentNotFoundError",
    "DocumentPath",
    "DocumentStore",
    "DocumentStoreError",
]
