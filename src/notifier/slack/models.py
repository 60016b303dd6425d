"""Slack incoming-webhook message models.

Field names match the JSON Slack expects, so ``model_dump()`` is the wire
format:

{
  "username": "Github Notification",
  "channel": "#team",
  "text": "<https://github.com/owner/repo/issues/1|Title>",
  "icon_emoji": ":github:",
  "attachments": [
    {
      "fallback": "You have been mentioned",
      "pretext": "",
      "color": "warning",
      "fields": [{"title": "", "value": "body", "short": false}]
    }
  ]
}
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class AttachmentField(BaseModel):
    """A title/value pair rendered inside an attachment."""

    title: str = ""
    value: str = ""
    short: bool = False


class Attachment(BaseModel):
    """Legacy Slack message attachment.

    Attributes:
        fallback: Plain-text summary for clients that cannot render attachments.
        pretext: Text shown above the attachment block.
        color: Sidebar color; "good", "warning", "danger" or a hex value.
        fields: Title/value pairs shown in the attachment.
    """

    fallback: str = ""
    pretext: str = ""
    color: str = ""
    fields: List[AttachmentField] = Field(default_factory=list)


class OutboundMessage(BaseModel):
    """A message posted to a Slack incoming webhook.

    Attributes:
        username: Display name the message is posted under.
        icon_emoji: Emoji used as the poster's avatar.
        channel: Target channel, overriding the webhook's default.
        text: Main message text in Slack mrkdwn.
        attachments: Optional attachment blocks.
    """

    username: str
    icon_emoji: str
    channel: str
    text: str
    attachments: List[Attachment] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON object posted to Slack."""
        return self.model_dump(mode="json")
