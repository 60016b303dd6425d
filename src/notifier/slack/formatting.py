"""Slack message formatting for matched webhook events.

This module turns a RuleMatch into the OutboundMessage posted to Slack:

- Issue / comment mentions link to the issue (or comment) and quote the
  full body in a "warning" colored attachment.
- Project card moves link to the card on the project board and name the
  column it moved to; they carry no attachment.

Source:
- src/notifier/rules/matcher.py (RuleMatch)
"""

from src.notifier.rules.matcher import RuleMatch
from src.notifier.rules.models import MentionRule, ProjectColumnRule
from src.notifier.slack.models import Attachment, AttachmentField, OutboundMessage
from src.notifier.webhook.models import (
    IssueCommentEvent,
    IssueEvent,
    ProjectCardEvent,
)


USERNAME = "Github Notification"
ICON_EMOJI = ":github:"
MENTION_FALLBACK = "You have been mentioned"
MENTION_COLOR = "warning"
GITHUB_URL = "https://github.com"


def format_message(match: RuleMatch) -> OutboundMessage:
    """Build the Slack message for one matched rule.

    Args:
        match: The event and the rule it matched.

    Returns:
        A fully populated OutboundMessage addressed to the rule's channel.

    Raises:
        TypeError: If the event and rule kinds do not belong together.

    Example:
        >>> match = RuleMatch(
        ...     event=IssueEvent(
        ...         title="Crash on start",
        ...         body="ping @octocat",
        ...         html_url="https://github.com/o/r/issues/1",
        ...     ),
        ...     rule=MentionRule(mention="@octocat", channel="#octo"),
        ... )
        >>> format_message(match).text
        '<https://github.com/o/r/issues/1|Crash on start>'
    """
    event, rule = match.event, match.rule

    if isinstance(event, IssueEvent) and isinstance(rule, MentionRule):
        return _mention_message(rule, event.html_url, event.title, event.body)

    if isinstance(event, IssueCommentEvent) and isinstance(rule, MentionRule):
        return _mention_message(
            rule, event.comment_html_url, event.issue_title, event.comment_body
        )

    if isinstance(event, ProjectCardEvent) and isinstance(rule, ProjectColumnRule):
        url = build_project_card_url(
            event.repository_full_name, rule.project_id, event.card_id
        )
        return OutboundMessage(
            username=USERNAME,
            icon_emoji=ICON_EMOJI,
            channel=rule.channel,
            text=f"{slack_link(url, 'This issue')} just moved to {rule.column_name}",
        )

    raise TypeError(
        f"Cannot format {type(event).__name__} matched by {type(rule).__name__}"
    )


def build_project_card_url(
    repository_full_name: str, project_id: int, card_id: int
) -> str:
    """Link to a card on a repository project board."""
    return f"{GITHUB_URL}/{repository_full_name}/projects/{project_id}#card-{card_id}"


def slack_link(url: str, label: str) -> str:
    """Format a link in Slack mrkdwn: ``<url|label>``."""
    return f"<{url}|{label}>"


def _mention_message(
    rule: MentionRule, url: str, title: str, body: str
) -> OutboundMessage:
    return OutboundMessage(
        username=USERNAME,
        icon_emoji=ICON_EMOJI,
        channel=rule.channel,
        text=slack_link(url, title),
        attachments=[
            Attachment(
                fallback=MENTION_FALLBACK,
                pretext="",
                color=MENTION_COLOR,
                fields=[AttachmentField(title="", value=body, short=False)],
            )
        ],
    )
