"""Event routing from decoded JSON payloads to ``InboundEvent`` variants.

The router picks the decode path from the ``X-GitHub-Event`` value and
reduces the payload to the matching tagged variant. Event types the
notifier does not subscribe to become ``UnrecognizedEvent`` and are
dropped downstream without error.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from src.notifier.webhook.errors import DecodeFailure
from src.notifier.webhook.models import (
    GitHubEventType,
    InboundEvent,
    IssueCommentEvent,
    IssueCommentPayload,
    IssueEvent,
    IssuesPayload,
    ProjectCardEvent,
    ProjectCardPayload,
    UnrecognizedEvent,
)

logger = logging.getLogger(__name__)


def parse_event_type(event_type: str) -> Optional[GitHubEventType]:
    """Map a header value onto a handled event type, or None."""
    try:
        return GitHubEventType(event_type)
    except ValueError:
        return None


def route_event(event_type: str, payload: Dict[str, Any]) -> InboundEvent:
    """Decode ``payload`` into the variant selected by ``event_type``.

    Args:
        event_type: Value of the ``X-GitHub-Event`` header.
        payload: The JSON-decoded request body.

    Returns:
        The decoded event. Unhandled event types yield ``UnrecognizedEvent``.

    Raises:
        DecodeFailure: If the payload does not have the shape GitHub sends
            for ``event_type``.
    """
    kind = parse_event_type(event_type)
    if kind is None:
        logger.debug("Ignoring unhandled event type: %s", event_type)
        return UnrecognizedEvent(event_type=event_type)

    if not isinstance(payload, dict):
        raise DecodeFailure(
            f"Invalid {event_type} payload: expected object, got "
            f"{type(payload).__name__}"
        )

    try:
        if kind is GitHubEventType.ISSUES:
            issues = IssuesPayload.model_validate(payload)
            return IssueEvent(
                action=issues.action,
                title=issues.issue.title,
                body=issues.issue.body,
                html_url=issues.issue.html_url,
            )

        if kind is GitHubEventType.ISSUE_COMMENT:
            comment = IssueCommentPayload.model_validate(payload)
            return IssueCommentEvent(
                action=comment.action,
                issue_title=comment.issue.title,
                comment_body=comment.comment.body,
                comment_html_url=comment.comment.html_url,
            )

        card = ProjectCardPayload.model_validate(payload)
        return ProjectCardEvent(
            action=card.action,
            repository_full_name=card.repository.full_name,
            card_id=card.project_card.id,
            column_id=card.project_card.column_id,
        )

    except ValidationError as e:
        logger.warning(
            "Malformed %s payload: %d validation error(s)",
            event_type,
            e.error_count(),
        )
        raise DecodeFailure(f"Malformed {event_type} payload") from e
