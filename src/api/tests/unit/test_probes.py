"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from identity.infrastructure.observability import DefaultUserRepositoryProbe
from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import DefaultConnectionProbe
from linebot.application.observability import DefaultWebhookServiceProbe
from shared_kernel.document_store.observability import DefaultDocumentStoreProbe
from talk.infrastructure.observability import DefaultTalkRoomRepositoryProbe


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_engine_created_logs_info(self):
        """engine_created should log the pool shape."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(
            connection_string="postgresql://u@h:5432/d",
            pool_size=2,
            max_connections=10,
        )

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            connection_string="postgresql://u@h:5432/d",
            pool_size=2,
            max_connections=10,
        )


class TestDocumentStoreProbe:
    """Tests for DocumentStoreProbe."""

    def test_write_failed_logs_error_type(self):
        """document_write_failed should log the error and its type."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultDocumentStoreProbe(logger=mock_logger)

        probe.document_write_failed("talkRooms/1", "insert", TimeoutError("slow"))

        mock_logger.error.assert_called_once_with(
            "document_write_failed",
            path="talkRooms/1",
            operation="insert",
            error="slow",
            error_type="TimeoutError",
        )


class TestProbeContext:
    """Tests for observation context binding."""

    def test_with_context_adds_context_to_events(self):
        """Bound context should be merged into every event."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(request_id="evt-1", sender_id="U100")
        probe = DefaultUserRepositoryProbe(logger=mock_logger).with_context(context)

        probe.user_created("01H", "U100", "line")

        mock_logger.info.assert_called_once_with(
            "user_created",
            primary_user_id="01H",
            auth_id="U100",
            provider="line",
            request_id="evt-1",
            sender_id="U100",
        )

    def test_context_keys_do_not_collide_with_event_fields(self):
        """A fully populated context can be bound to any probe."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(
            request_id="evt-1",
            sender_id="U100",
            user_id="01H",
            talk_room_id="01J",
        )

        DefaultTalkRoomRepositoryProbe(logger=mock_logger).with_context(
            context
        ).talk_room_created("01H", "01J")
        DefaultWebhookServiceProbe(logger=mock_logger).with_context(
            context
        ).message_recorded("01J", "01K")
        DefaultUserRepositoryProbe(logger=mock_logger).with_context(
            context
        ).duplicate_auth_identity("U100")

        assert mock_logger.info.call_count == 2
        mock_logger.warning.assert_called_once()

    def test_with_context_keeps_logger(self):
        """with_context should return a new probe sharing the logger."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultWebhookServiceProbe(logger=mock_logger)

        bound = probe.with_context(ObservationContext(request_id="evt-1"))

        assert bound is not probe
        assert bound._logger is mock_logger
