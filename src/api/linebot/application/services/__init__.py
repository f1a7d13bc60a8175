"""Application services for the LINE bot context."""

from linebot.application.services.webhook_service import LinebotWebhookService

__all__ = ["LinebotWebhookService"]
