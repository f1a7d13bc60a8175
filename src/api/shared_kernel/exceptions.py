"""Repository error taxonomy shared by all bounded contexts.

Every store adapter reports failures through these classes so that the
application layer can tell control-flow signals ("not there yet") apart
from genuine failures without knowing which store produced them.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for persistence failures across both stores."""

    pass


class NotFoundError(RepositoryError):
    """Raised when a resource addressed by key does not exist.

    Attributes:
        resource: Table or collection name that was queried
        key: Key that was looked up
    """

    def __init__(self, resource: str, key: str):
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class NotAuthFoundError(RepositoryError):
    """Raised when no user is bound to an external auth identity."""

    def __init__(self, auth_id: str):
        super().__init__(f"No user for auth id: {auth_id}")
        self.auth_id = auth_id


class CouldNotInsertError(RepositoryError):
    """Raised when a document-store insert fails or times out."""

    def __init__(self, resource: str, key: str):
        super().__init__(f"Could not insert into {resource}: {key}")
        self.resource = resource
        self.key = key


class CouldNotUpdateError(RepositoryError):
    """Raised when a document-store update fails or times out."""

    def __init__(self, resource: str, key: str):
        super().__init__(f"Could not update {resource}: {key}")
        self.resource = resource
        self.key = key


class UnexpectedRepositoryError(RepositoryError):
    """Raised for store failures that fit no other category."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
