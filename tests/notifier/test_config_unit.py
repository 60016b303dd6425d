"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from src.notifier.config import NotifierSettings, get_settings
from src.notifier.rules import DEFAULT_RULE_TABLE, MentionRule, ProjectColumnRule

SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


@pytest.fixture
def base_env(clean_env, monkeypatch):
    monkeypatch.setenv("SLACK_WEBHOOK_URL", SLACK_URL)


class TestLoadSettings:

    def test_defaults(self, base_env):
        settings = get_settings()

        assert settings.secret == ""
        assert settings.slack_webhook_url == SLACK_URL
        assert settings.slack_timeout_seconds == 10.0
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.verify_project_card_signature is False
        assert settings.rule_table() == DEFAULT_RULE_TABLE

    def test_from_env(self, base_env, monkeypatch):
        monkeypatch.setenv("SECRET", "s3cret")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("SLACK_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("VERIFY_PROJECT_CARD_SIGNATURE", "true")

        settings = get_settings()

        assert settings.secret == "s3cret"
        assert settings.port == 8080
        assert settings.slack_timeout_seconds == 2.5
        assert settings.verify_project_card_signature is True

    def test_rules_from_json(self, base_env, monkeypatch):
        monkeypatch.setenv(
            "MENTION_RULES", '[{"mention": "@octocat", "channel": "#octo"}]'
        )
        monkeypatch.setenv(
            "PROJECT_COLUMN_RULES",
            '[{"project_id": 2, "column_id": 77, "column_name": "Done",'
            ' "channel": "#done"}]',
        )

        table = get_settings().rule_table()

        assert table.mention_rules == (MentionRule(mention="@octocat", channel="#octo"),)
        assert table.project_column_rules == (
            ProjectColumnRule(
                project_id=2, column_id=77, column_name="Done", channel="#done"
            ),
        )

    def test_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text(
            f"SLACK_WEBHOOK_URL={SLACK_URL}\nSECRET=from-dotenv\n"
        )
        assert get_settings().secret == "from-dotenv"


class TestValidation:

    def test_missing_slack_url(self, clean_env):
        with pytest.raises(ValidationError):
            get_settings()

    def test_slack_url_must_be_http(self, clean_env):
        with pytest.raises(ValidationError):
            NotifierSettings(slack_webhook_url="ftp://hooks.slack.test/x")

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, clean_env, port):
        with pytest.raises(ValidationError):
            NotifierSettings(slack_webhook_url=SLACK_URL, port=port)

    def test_timeout_positive(self, clean_env):
        with pytest.raises(ValidationError):
            NotifierSettings(slack_webhook_url=SLACK_URL, slack_timeout_seconds=0)

    def test_rule_requires_channel(self, clean_env):
        with pytest.raises(ValidationError):
            NotifierSettings(
                slack_webhook_url=SLACK_URL,
                mention_rules=[{"mention": "@octocat", "channel": ""}],
            )


class TestRuleTableImmutability:

    def test_rules_are_frozen(self, base_env):
        table = get_settings().rule_table()
        with pytest.raises(ValidationError):
            table.mention_rules[0].channel = "#elsewhere"
