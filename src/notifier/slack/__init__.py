"""Slack delivery for the notifier.

This module formats matched events as Slack messages and posts them to an
incoming webhook.
"""

from src.notifier.slack.client import SlackDeliveryError, SlackWebhookClient
from src.notifier.slack.formatting import format_message
from src.notifier.slack.models import Attachment, AttachmentField, OutboundMessage

__all__ = [
    "Attachment",
    "AttachmentField",
    "OutboundMessage",
    "SlackDeliveryError",
    "SlackWebhookClient",
    "format_message",
]
