"""Rule matching for decoded webhook events.

The matcher evaluates the static rule table against one event and returns
every (event, rule) pair that should produce a notification:

- Issue and comment events are matched against mention rules. A rule
  matches when its handle occurs anywhere in the body as a literal,
  case-sensitive substring. There is no word-boundary check, so
  "@octocat" also matches inside "@octocat2".
- Project card events are matched against project column rules by column
  id alone. The rule's project id only feeds the board URL.

Unrecognized events never match.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from src.notifier.rules.models import MentionRule, ProjectColumnRule, RuleTable
from src.notifier.webhook.models import (
    InboundEvent,
    IssueCommentEvent,
    IssueEvent,
    MentionEvent,
    ProjectCardEvent,
    UnrecognizedEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleMatch:
    """One notification to send: the event and the rule it matched."""

    event: Union[IssueEvent, IssueCommentEvent, ProjectCardEvent]
    rule: Union[MentionRule, ProjectColumnRule]


class RuleMatcher:
    """Matches events against a read-only rule table.

    Attributes:
        rules: The rule table, shared by all requests.
    """

    def __init__(self, rules: RuleTable) -> None:
        self.rules = rules

    def match(self, event: InboundEvent) -> List[RuleMatch]:
        """Return the matches for ``event`` in rule-table order.

        Args:
            event: A decoded inbound event.

        Returns:
            One RuleMatch per matching rule; empty if nothing matches.
        """
        if isinstance(event, (IssueEvent, IssueCommentEvent)):
            matches = self._match_mentions(event)
        elif isinstance(event, ProjectCardEvent):
            matches = self._match_project_columns(event)
        elif isinstance(event, UnrecognizedEvent):
            matches = []
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

        logger.debug("Event %s matched %d rule(s)", event.kind, len(matches))
        return matches

    def _match_mentions(self, event: MentionEvent) -> List[RuleMatch]:
        return [
            RuleMatch(event=event, rule=rule)
            for rule in self.rules.mention_rules
            if rule.mention in event.text
        ]

    def _match_project_columns(self, event: ProjectCardEvent) -> List[RuleMatch]:
        return [
            RuleMatch(event=event, rule=rule)
            for rule in self.rules.project_column_rules
            if event.column_id is not None and event.column_id == rule.column_id
        ]
