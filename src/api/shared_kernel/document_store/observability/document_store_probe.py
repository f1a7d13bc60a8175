"""Domain probe for document store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to document reads and writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DocumentStoreProbe(Protocol):
    """Domain probe for document store operations."""

    def document_inserted(self, path: str) -> None:
        """Record that a document was created."""
        ...

    def document_updated(self, path: str) -> None:
        """Record that a document was updated."""
        ...

    def document_read(self, path: str, found: bool) -> None:
        """Record that a document was read."""
        ...

    def document_write_failed(
        self,
        path: str,
        operation: str,
        error: Exception,
    ) -> None:
        """Record that a document write failed."""
        ...

    def document_read_failed(self, path: str, error: Exception) -> None:
        """Record that a document read failed."""
        ...

    def with_context(self, context: ObservationContext) -> DocumentStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDocumentStoreProbe:
    """Default implementation of DocumentStoreProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDocumentStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultDocumentStoreProbe(logger=self._logger, context=context)

    def document_inserted(self, path: str) -> None:
        """Record that a document was created."""
        self._logger.debug(
            "document_inserted",
            path=path,
            **self._get_context_kwargs(),
        )

    def document_updated(self, path: str) -> None:
        """Record that a document was updated."""
        self._logger.debug(
            "document_updated",
            path=path,
            **self._get_context_kwargs(),
        )

    def document_read(self, path: str, found: bool) -> None:
        """Record that a document was read."""
        self._logger.debug(
            "document_read",
            path=path,
            found=found,
            **self._get_context_kwargs(),
        )

    def document_write_failed(
        self,
        path: str,
        operation: str,
        error: Exception,
    ) -> None:
        """Record that a document write failed."""
        self._logger.error(
            "document_write_failed",
            path=path,
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def document_read_failed(self, path: str, error: Exception) -> None:
        """Record that a document read failed."""
        self._logger.error(
            "document_read_failed",
            path=path,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
