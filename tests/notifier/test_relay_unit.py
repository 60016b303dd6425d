"""Unit tests for the NotificationRelay.

The Slack client is mocked so the tests can assert exactly which messages
were sent and how delivery failures are accounted for.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from src.notifier.relay import NotificationRelay
from src.notifier.rules import (
    DEFAULT_RULE_TABLE,
    MentionRule,
    RuleMatcher,
    RuleTable,
)
from src.notifier.slack import SlackDeliveryError, SlackWebhookClient
from src.notifier.webhook.models import (
    IssueEvent,
    ProjectCardEvent,
    UnrecognizedEvent,
)


def run_async(coro):
    return asyncio.run(coro)


def _slack_client() -> MagicMock:
    client = MagicMock(spec=SlackWebhookClient)
    client.post_message = AsyncMock(return_value=None)
    return client


def _issue(body: str) -> IssueEvent:
    return IssueEvent(
        action="opened",
        title="Crash on start",
        body=body,
        html_url="https://github.com/acme/widgets/issues/7",
    )


THREE_MENTIONS = RuleTable(
    mention_rules=(
        MentionRule(mention="@alice", channel="#alice"),
        MentionRule(mention="@bob", channel="#bob"),
        MentionRule(mention="@carol", channel="#carol"),
    )
)


class TestDispatch:

    def test_issue_mention_delivered(self):
        slack = _slack_client()
        relay = NotificationRelay(RuleMatcher(DEFAULT_RULE_TABLE), slack)

        result = run_async(relay.dispatch(_issue("ping @andrkrn")))

        assert result.matched == 1
        assert result.delivered == 1
        assert result.success
        (message,) = slack.post_message.await_args.args
        assert message.channel == "#id-andrkrn"
        assert "https://github.com/acme/widgets/issues/7" in message.text

    def test_project_card_delivered(self):
        slack = _slack_client()
        relay = NotificationRelay(RuleMatcher(DEFAULT_RULE_TABLE), slack)
        event = ProjectCardEvent(
            action="moved",
            repository_full_name="acme/widgets",
            card_id=555,
            column_id=13982492,
        )

        result = run_async(relay.dispatch(event))

        assert result.delivered == 1
        (message,) = slack.post_message.await_args.args
        assert "#card-555" in message.text
        assert "projects/1" in message.text

    def test_no_match_sends_nothing(self):
        slack = _slack_client()
        relay = NotificationRelay(RuleMatcher(DEFAULT_RULE_TABLE), slack)

        result = run_async(relay.dispatch(_issue("nobody mentioned")))

        assert result.matched == 0
        assert result.success
        slack.post_message.assert_not_awaited()

    def test_unrecognized_sends_nothing(self):
        slack = _slack_client()
        relay = NotificationRelay(RuleMatcher(DEFAULT_RULE_TABLE), slack)

        result = run_async(relay.dispatch(UnrecognizedEvent(event_type="star")))

        assert result.matched == 0
        slack.post_message.assert_not_awaited()

    def test_one_message_per_matching_rule_in_order(self):
        slack = _slack_client()
        relay = NotificationRelay(RuleMatcher(THREE_MENTIONS), slack)

        result = run_async(relay.dispatch(_issue("@carol @alice")))

        assert result.matched == 2
        channels = [c.args[0].channel for c in slack.post_message.await_args_list]
        assert channels == ["#alice", "#carol"]


class TestDeliveryFailures:

    def test_failure_does_not_stop_remaining_matches(self):
        slack = _slack_client()
        slack.post_message.side_effect = [
            None,
            SlackDeliveryError("Slack webhook error: 500", status_code=500),
            None,
        ]
        relay = NotificationRelay(RuleMatcher(THREE_MENTIONS), slack)

        result = run_async(relay.dispatch(_issue("@alice @bob @carol")))

        assert slack.post_message.await_count == 3
        assert result.matched == 3
        assert result.delivered == 2
        assert result.failed == 1
        assert not result.success
        assert result.errors[0].status_code == 500
