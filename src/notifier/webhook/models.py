"""GitHub webhook event models for the notifier.

Inbound deliveries are decoded into one variant of the ``InboundEvent``
tagged union, discriminated by ``kind``:

- IssueEvent: an ``issues`` delivery (opened, edited, ...)
- IssueCommentEvent: an ``issue_comment`` delivery
- ProjectCardEvent: a ``project_card`` delivery (moved, created, ...)
- UnrecognizedEvent: any other event type; handled as a no-op

The ``*Payload`` models mirror only the slice of GitHub's payload the
notifier reads. Unknown keys are ignored, which keeps the project-card
decoder tolerant of the many fields GitHub sends that are never used here.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class GitHubEventType(str, Enum):
    """Values of the ``X-GitHub-Event`` header the notifier decodes.

    Attributes:
        ISSUES: Issue opened, edited, closed, ...
        ISSUE_COMMENT: Comment created on an issue or pull request.
        PROJECT_CARD: Card created or moved on a classic project board.
    """

    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"
    PROJECT_CARD = "project_card"


# =============================================================================
# Raw payload slices
# =============================================================================


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _none_to_empty(v: Optional[str]) -> str:
    # GitHub sends "body": null for issues and comments created without text
    return "" if v is None else v


NullableText = Annotated[str, BeforeValidator(_none_to_empty)]


class IssuePayloadIssue(_Payload):
    title: str
    html_url: str
    body: NullableText = ""


class IssuePayloadComment(_Payload):
    html_url: str
    body: NullableText = ""


class IssuesPayload(_Payload):
    """Payload of an ``issues`` delivery."""

    action: str = ""
    issue: IssuePayloadIssue


class IssueCommentPayload(_Payload):
    """Payload of an ``issue_comment`` delivery."""

    action: str = ""
    issue: IssuePayloadIssue
    comment: IssuePayloadComment


class ProjectCardPayloadCard(_Payload):
    id: int
    # null for cards that are not (or no longer) on a column
    column_id: Optional[int] = None


class ProjectCardPayloadRepository(_Payload):
    full_name: str


class ProjectCardPayload(_Payload):
    """Payload of a ``project_card`` delivery.

    Only the card id, its column and the repository are required; the
    rest of GitHub's project-card payload is ignored.
    """

    action: str = ""
    project_card: ProjectCardPayloadCard
    repository: ProjectCardPayloadRepository


# =============================================================================
# Decoded events
# =============================================================================


class IssueEvent(BaseModel):
    """An issue delivery, reduced to what the notifier needs.

    Attributes:
        action: The issue action (e.g. "opened").
        title: The issue title.
        body: The issue body; empty when GitHub sends null.
        html_url: Link to the issue on github.com.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["issue"] = "issue"
    action: str = ""
    title: str
    body: str = ""
    html_url: str

    @property
    def text(self) -> str:
        """Free text searched for mentions."""
        return self.body


class IssueCommentEvent(BaseModel):
    """An issue comment delivery.

    Attributes:
        action: The comment action (e.g. "created").
        issue_title: Title of the issue the comment belongs to.
        comment_body: The comment text.
        comment_html_url: Link to the comment on github.com.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["issue_comment"] = "issue_comment"
    action: str = ""
    issue_title: str
    comment_body: str = ""
    comment_html_url: str

    @property
    def text(self) -> str:
        """Free text searched for mentions."""
        return self.comment_body


class ProjectCardEvent(BaseModel):
    """A project card delivery.

    Attributes:
        action: The card action (e.g. "moved").
        repository_full_name: ``owner/repo`` the board belongs to.
        card_id: GitHub id of the card.
        column_id: GitHub id of the column the card is in now, if any.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["project_card"] = "project_card"
    action: str = ""
    repository_full_name: str
    card_id: int
    column_id: Optional[int] = None


class UnrecognizedEvent(BaseModel):
    """Any delivery whose event type the notifier does not handle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"
    event_type: str


InboundEvent = Annotated[
    Union[IssueEvent, IssueCommentEvent, ProjectCardEvent, UnrecognizedEvent],
    Field(discriminator="kind"),
]

MentionEvent = Union[IssueEvent, IssueCommentEvent]
