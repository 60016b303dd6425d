"""Pytest configuration and shared fixtures for all tests."""

import json
from typing import Any, Dict, Optional

import pytest

from src.notifier.config import NotifierSettings
from src.notifier.webhook.signature import compute_signature

TEST_SECRET = "test-secret"
TEST_SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"

_ENV_VARS = (
    "SECRET",
    "SLACK_WEBHOOK_URL",
    "SLACK_TIMEOUT_SECONDS",
    "MENTION_RULES",
    "PROJECT_COLUMN_RULES",
    "VERIFY_PROJECT_CARD_SIGNATURE",
    "HOST",
    "PORT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Keep host environment variables and .env files out of settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(clean_env) -> NotifierSettings:
    return NotifierSettings(secret=TEST_SECRET, slack_webhook_url=TEST_SLACK_URL)


def issues_payload(
    body: Optional[str] = "ping @andrkrn",
    title: str = "Crash on start",
    html_url: str = "https://github.com/acme/widgets/issues/7",
    action: str = "opened",
) -> Dict[str, Any]:
    return {
        "action": action,
        "issue": {
            "number": 7,
            "title": title,
            "body": body,
            "html_url": html_url,
            "user": {"login": "reporter"},
        },
        "repository": {"full_name": "acme/widgets"},
    }


def issue_comment_payload(
    body: Optional[str] = "cc @andrkrn",
    issue_title: str = "Crash on start",
    html_url: str = "https://github.com/acme/widgets/issues/7#issuecomment-99",
) -> Dict[str, Any]:
    return {
        "action": "created",
        "issue": {
            "number": 7,
            "title": issue_title,
            "body": "original issue text",
            "html_url": "https://github.com/acme/widgets/issues/7",
        },
        "comment": {"id": 99, "body": body, "html_url": html_url},
        "repository": {"full_name": "acme/widgets"},
    }


def project_card_payload(
    card_id: int = 555,
    column_id: Optional[int] = 13982492,
    full_name: str = "acme/widgets",
) -> Dict[str, Any]:
    return {
        "action": "moved",
        "changes": {"column_id": {"from": 13982491}},
        "project_card": {
            "id": card_id,
            "column_id": column_id,
            "note": None,
            "archived": False,
            "column_url": f"https://api.github.com/projects/columns/{column_id}",
        },
        "repository": {"full_name": full_name},
        "sender": {"login": "mover"},
    }


def signed_headers(
    event: str,
    body: bytes,
    secret: str = TEST_SECRET,
    algorithm: str = "sha256",
) -> Dict[str, str]:
    header = "X-Hub-Signature-256" if algorithm == "sha256" else "X-Hub-Signature"
    return {
        "X-GitHub-Event": event,
        "X-GitHub-Delivery": "72d3162e-cc78-11e3-81ab-4c9367dc0958",
        "Content-Type": "application/json",
        header: compute_signature(body, secret, algorithm),
    }


def encode(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")
