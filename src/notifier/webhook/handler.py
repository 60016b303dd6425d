"""GitHub webhook handler for the notifier.

This module provides the WebhookHandler class that turns a raw delivery
(headers and body bytes) into a decoded ``InboundEvent``:

1. Read the ``X-GitHub-Event`` header. Unhandled event types are returned
   as ``UnrecognizedEvent`` without touching the body.
2. Reject empty bodies.
3. Verify the HMAC signature for ``issues`` and ``issue_comment``.
   ``project_card`` deliveries skip this step unless
   ``verify_project_card_signature`` is enabled; GitHub signs them too, so
   enabling it is safe once the secret is configured.
4. Decode the JSON body and route it to the matching event variant.

Each failure raises a ``WebhookError`` subclass carrying the HTTP status
the endpoint answers with.

GitHub Webhook Payload Structure (issue_comment event):
{
  "action": "created",
  "issue": {"title": "Issue title", "html_url": "https://github.com/...", ...},
  "comment": {"body": "cc @octocat", "html_url": "https://github.com/...", ...},
  "repository": {"full_name": "owner/repo", ...}
}
"""

import json
import logging
from typing import Mapping

from src.notifier.webhook.errors import (
    BodyMissing,
    DecodeFailure,
    MissingEventHeader,
    SignatureInvalid,
)
from src.notifier.webhook.models import (
    GitHubEventType,
    InboundEvent,
    UnrecognizedEvent,
)
from src.notifier.webhook.router import parse_event_type, route_event
from src.notifier.webhook.signature import select_signature, verify_signature

logger = logging.getLogger(__name__)

EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"


class WebhookHandler:
    """Verifies and decodes GitHub webhook deliveries.

    Attributes:
        secret: The webhook secret. Empty disables signature verification.
        verify_project_card_signature: Whether ``project_card`` deliveries
            are signature-checked like the other event types.
    """

    def __init__(
        self,
        secret: str,
        verify_project_card_signature: bool = False,
    ) -> None:
        """Initialize the webhook handler.

        Args:
            secret: The GitHub webhook secret.
            verify_project_card_signature: Also verify ``project_card``
                deliveries. Off by default.
        """
        self.secret = secret
        self.verify_project_card_signature = verify_project_card_signature

    def parse(self, headers: Mapping[str, str], body: bytes) -> InboundEvent:
        """Verify and decode a webhook delivery.

        Args:
            headers: Request headers (case-insensitive mapping).
            body: Raw request body.

        Returns:
            The decoded event; ``UnrecognizedEvent`` for unhandled types.

        Raises:
            MissingEventHeader: If ``X-GitHub-Event`` is absent.
            BodyMissing: If the body is empty.
            SignatureInvalid: If the signature is missing or wrong.
            DecodeFailure: If the body is not a valid payload.
        """
        event_type = (headers.get(EVENT_HEADER) or "").strip()
        if not event_type:
            raise MissingEventHeader(f"Missing {EVENT_HEADER} header")

        kind = parse_event_type(event_type)
        if kind is None:
            return UnrecognizedEvent(event_type=event_type)

        delivery = headers.get(DELIVERY_HEADER, "-")

        if not body:
            logger.warning("Empty %s delivery %s", event_type, delivery)
            raise BodyMissing(f"Empty body for {event_type} event")

        if self._requires_signature(kind):
            if not verify_signature(body, self.secret, select_signature(headers)):
                logger.warning(
                    "Signature verification failed for %s delivery %s",
                    event_type,
                    delivery,
                )
                raise SignatureInvalid("Invalid webhook signature")

        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "Undecodable %s delivery %s: %s", event_type, delivery, e
            )
            raise DecodeFailure(f"Invalid JSON body for {event_type} event") from e

        event = route_event(event_type, payload)

        logger.info(
            "Parsed %s event: action=%s, delivery=%s",
            event_type,
            getattr(event, "action", ""),
            delivery,
        )
        return event

    def _requires_signature(self, kind: GitHubEventType) -> bool:
        """Decide whether a delivery of ``kind`` must carry a valid signature."""
        if not self.secret:
            return False
        if kind is GitHubEventType.PROJECT_CARD:
            return self.verify_project_card_signature
        return True
