"""Notifier configuration using pydantic-settings.

This module defines the NotifierSettings class that reads configuration
from environment variables (and an optional ``.env`` file). The rule tables
default to the deployment's built-in subscriptions and may be overridden
with JSON-encoded lists, e.g.::

    MENTION_RULES='[{"mention": "@octocat", "channel": "#octo"}]'

The rule models themselves live in ``src.notifier.rules.models`` and are
frozen, so a table built at startup cannot be mutated while requests are
being handled.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.notifier.rules.models import (
    DEFAULT_MENTION_RULES,
    DEFAULT_PROJECT_COLUMN_RULES,
    MentionRule,
    ProjectColumnRule,
    RuleTable,
)


class NotifierSettings(BaseSettings):
    """Relay configuration from environment variables.

    Variables are read without a prefix (``SECRET``, ``SLACK_WEBHOOK_URL``,
    ``PORT`` ...) to stay compatible with existing deployments.

    Required fields (must be set via environment variables):
    - slack_webhook_url: Slack incoming-webhook URL messages are posted to
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------
    # Shared secret GitHub signs webhook deliveries with. Empty disables
    # signature verification entirely.
    secret: str = ""

    # project_card deliveries are not signature-checked unless enabled
    verify_project_card_signature: bool = False

    # -------------------------------------------------------------------------
    # Slack Configuration
    # -------------------------------------------------------------------------
    slack_webhook_url: str

    # Upper bound for the outbound POST to Slack
    slack_timeout_seconds: float = 10.0

    # -------------------------------------------------------------------------
    # Subscription Rules
    # -------------------------------------------------------------------------
    mention_rules: list[MentionRule] = list(DEFAULT_MENTION_RULES)
    project_column_rules: list[ProjectColumnRule] = list(
        DEFAULT_PROJECT_COLUMN_RULES
    )

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 3000

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("slack_webhook_url")
    @classmethod
    def validate_slack_webhook_url(cls, v: str) -> str:
        """Validate that the Slack webhook URL is a valid URL format."""
        if not v or not v.strip():
            raise ValueError("slack_webhook_url cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("slack_webhook_url must start with http:// or https://")
        return v.strip()

    @field_validator("slack_timeout_seconds")
    @classmethod
    def validate_slack_timeout(cls, v: float) -> float:
        """Validate that the Slack timeout is positive."""
        if v <= 0:
            raise ValueError("slack_timeout_seconds must be greater than 0")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    def rule_table(self) -> RuleTable:
        """Build the immutable rule table handed to the matcher."""
        return RuleTable(
            mention_rules=tuple(self.mention_rules),
            project_column_rules=tuple(self.project_column_rules),
        )


def get_settings() -> NotifierSettings:
    """Create and return NotifierSettings instance.

    Returns:
        NotifierSettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return NotifierSettings()
