"""Subscription rule models.

Two kinds of rules decide who gets notified:

- MentionRule: a GitHub handle that, when it appears in an issue or comment
  body, routes a notification to a Slack channel.
- ProjectColumnRule: a project board column that, when a card lands in it,
  routes a notification to a Slack channel.

All models are frozen; rule tables are built once at startup and shared by
concurrent requests.
"""

from pydantic import BaseModel, ConfigDict, Field


class MentionRule(BaseModel):
    """Notify ``channel`` whenever ``mention`` appears in a body.

    Attributes:
        mention: The handle to look for, including the ``@`` (e.g. "@octocat").
        channel: Slack channel the notification is posted to.
    """

    model_config = ConfigDict(frozen=True)

    mention: str = Field(
        ...,
        min_length=1,
        description="Handle searched for in issue and comment bodies",
    )

    channel: str = Field(
        ...,
        min_length=1,
        description="Slack channel receiving the notification",
    )


class ProjectColumnRule(BaseModel):
    """Notify ``channel`` whenever a project card moves into ``column_id``.

    Attributes:
        project_id: Repository project number, used to build the board URL.
        column_id: GitHub id of the watched column.
        column_name: Human-readable column name used in the message.
        channel: Slack channel receiving the notification.
    """

    model_config = ConfigDict(frozen=True)

    project_id: int = Field(..., gt=0)
    column_id: int = Field(..., gt=0)
    column_name: str = Field(..., min_length=1)
    channel: str = Field(..., min_length=1)


class RuleTable(BaseModel):
    """The complete, read-only set of subscriptions."""

    model_config = ConfigDict(frozen=True)

    mention_rules: tuple[MentionRule, ...] = ()
    project_column_rules: tuple[ProjectColumnRule, ...] = ()


DEFAULT_MENTION_RULES = (
    MentionRule(mention="@andrkrn", channel="#id-andrkrn"),
)

# TODO: look up project id and column name through the GitHub API instead of
# hard-coding them next to the column id.
DEFAULT_PROJECT_COLUMN_RULES = (
    ProjectColumnRule(
        project_id=1,
        column_id=13982492,
        column_name="QA Test",
        channel="#id-andrkrn",
    ),
)

DEFAULT_RULE_TABLE = RuleTable(
    mention_rules=DEFAULT_MENTION_RULES,
    project_column_rules=DEFAULT_PROJECT_COLUMN_RULES,
)
