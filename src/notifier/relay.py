"""Notification relay connecting matching, formatting and delivery.

Takes a decoded webhook event and drives it through the rest of the
request: rule matching → message formatting → Slack delivery.

Each match is delivered independently. A failed delivery is logged and
counted; it does not stop the remaining matches from being attempted.

Source:
- src/notifier/rules/matcher.py (RuleMatcher)
- src/notifier/slack/formatting.py (format_message)
- src/notifier/slack/client.py (SlackWebhookClient)
"""

import logging
from dataclasses import dataclass, field
from typing import List

from src.notifier.rules.matcher import RuleMatcher
from src.notifier.slack.client import SlackDeliveryError, SlackWebhookClient
from src.notifier.slack.formatting import format_message
from src.notifier.webhook.models import InboundEvent

logger = logging.getLogger(__name__)


@dataclass
class RelayResult:
    """Outcome of relaying one event.

    Attributes:
        matched: Number of rules the event matched.
        delivered: Number of messages Slack accepted.
        errors: Delivery errors, one per failed message.
    """

    matched: int = 0
    delivered: int = 0
    errors: List[SlackDeliveryError] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def success(self) -> bool:
        return not self.errors


class NotificationRelay:
    """Relays matched events to Slack.

    Attributes:
        matcher: Evaluates the rule table against events.
        slack_client: Posts formatted messages to the incoming webhook.
    """

    def __init__(self, matcher: RuleMatcher, slack_client: SlackWebhookClient):
        self.matcher = matcher
        self.slack_client = slack_client

    async def dispatch(self, event: InboundEvent) -> RelayResult:
        """Send one notification per rule ``event`` matches.

        Args:
            event: Decoded webhook event.

        Returns:
            RelayResult with match and delivery counts.
        """
        matches = self.matcher.match(event)
        result = RelayResult(matched=len(matches))

        for match in matches:
            message = format_message(match)
            try:
                await self.slack_client.post_message(message)
            except SlackDeliveryError as exc:
                logger.error(
                    "Failed to deliver notification",
                    extra={"channel": message.channel, "event": event.kind},
                )
                result.errors.append(exc)
                continue
            result.delivered += 1

        if matches:
            logger.info(
                "Relayed %s event: matched=%d delivered=%d failed=%d",
                event.kind,
                result.matched,
                result.delivered,
                result.failed,
            )
        return result
