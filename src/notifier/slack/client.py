"""Slack incoming-webhook client.

This module provides an async wrapper around a Slack incoming webhook:
one JSON POST per message, bounded by a timeout, with no retries. A
failed delivery is logged and raised as SlackDeliveryError so the caller
can report it without the process going down.

Source:
- src/notifier/slack/models.py (OutboundMessage)
- src/notifier/config.py (slack_webhook_url, slack_timeout_seconds)
"""

import logging
from typing import Any, Optional

import httpx

from src.notifier.slack.models import OutboundMessage


logger = logging.getLogger(__name__)


class SlackDeliveryError(Exception):
    """Raised when a message could not be delivered to Slack.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from Slack, if a response arrived.
        channel: The channel the message was addressed to.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        channel: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.channel = channel
        super().__init__(message)


class SlackWebhookClient:
    """Async client for a single Slack incoming webhook.

    Attributes:
        webhook_url: The incoming-webhook URL. Treat it as a secret.
        timeout: Request timeout in seconds.

    Example:
        >>> client = SlackWebhookClient("https://hooks.slack.com/services/...")
        >>> async with client:
        ...     await client.post_message(message)
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Slack client.

        Args:
            webhook_url: The Slack incoming-webhook URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SlackWebhookClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    async def post_message(self, message: OutboundMessage) -> None:
        """POST ``message`` to the webhook.

        Args:
            message: The message to deliver.

        Raises:
            SlackDeliveryError: On transport errors, timeouts, or a non-2xx
                response from Slack.
        """
        try:
            response = await self.client.post(
                self.webhook_url,
                json=message.to_payload(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as e:
            logger.error(
                "Slack webhook request timed out",
                extra={"channel": message.channel, "timeout": self.timeout},
            )
            raise SlackDeliveryError(
                message=f"Slack webhook timed out after {self.timeout}s",
                channel=message.channel,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Slack webhook request failed",
                extra={"channel": message.channel, "error": str(e)},
            )
            raise SlackDeliveryError(
                message=f"Slack webhook request failed: {e}",
                channel=message.channel,
            ) from e

        if not response.is_success:
            logger.error(
                "Slack webhook rejected message",
                extra={
                    "channel": message.channel,
                    "status_code": response.status_code,
                },
            )
            raise SlackDeliveryError(
                message=f"Slack webhook error: {response.status_code}",
                status_code=response.status_code,
                channel=message.channel,
            )

        logger.info("Delivered notification to %s", message.channel)
