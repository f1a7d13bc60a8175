"""Observability probes for the LINE bot application layer."""

from linebot.application.observability.webhook_service_probe import (
    DefaultWebhookServiceProbe,
    WebhookServiceProbe,
)

__all__ = [
    "DefaultWebhookServiceProbe",
    "WebhookServiceProbe",
]
