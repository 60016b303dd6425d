"""GitHub webhook handling for the notifier.

This module receives and decodes GitHub webhook events, specifically:
- issues - Issue opened, edited, ...
- issue_comment - Comment added to an issue
- project_card - Card created or moved on a project board

Any other event type is decoded as UnrecognizedEvent and ignored.
"""

from .errors import (
    BodyMissing,
    DecodeFailure,
    MissingEventHeader,
    SignatureInvalid,
    WebhookError,
)
from .handler import WebhookHandler
from .models import (
    GitHubEventType,
    InboundEvent,
    IssueCommentEvent,
    IssueEvent,
    ProjectCardEvent,
    UnrecognizedEvent,
)
from .router import route_event

__all__ = [
    "BodyMissing",
    "DecodeFailure",
    "GitHubEventType",
    "InboundEvent",
    "IssueCommentEvent",
    "IssueEvent",
    "MissingEventHeader",
    "ProjectCardEvent",
    "SignatureInvalid",
    "UnrecognizedEvent",
    "WebhookError",
    "WebhookHandler",
    "route_event",
]
