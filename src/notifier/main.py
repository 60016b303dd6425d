"""FastAPI application entry point for the notifier.

This module provides the FastAPI application that receives GitHub webhook
deliveries on ``POST /`` and relays matching events to Slack.

Status codes returned to GitHub:
- 200: event relayed, or event type ignored
- 400: missing event header, empty body, or undecodable payload
- 401: missing or invalid signature
- 502: at least one Slack delivery failed
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request

from .config import NotifierSettings, get_settings
from .relay import NotificationRelay
from .rules.matcher import RuleMatcher
from .slack.client import SlackWebhookClient
from .webhook.errors import WebhookError
from .webhook.handler import WebhookHandler
from .webhook.models import UnrecognizedEvent

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: NotifierSettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.info("Notifier configuration:")
    logger.info(f"  Webhook Secret: {_redact_secret(settings.secret)}")
    logger.info(
        f"  Slack Webhook URL: {_redact_secret(settings.slack_webhook_url, 24)}"
    )
    logger.info(f"  Slack Timeout Seconds: {settings.slack_timeout_seconds}")
    logger.info(f"  Mention Rules: {len(settings.mention_rules)}")
    logger.info(f"  Project Column Rules: {len(settings.project_column_rules)}")
    logger.info(
        f"  Verify Project Card Signature: {settings.verify_project_card_signature}"
    )
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")

    if not settings.secret:
        logger.warning(
            "SECRET is not set: webhook signatures will not be verified"
        )
    elif not settings.verify_project_card_signature:
        logger.warning(
            "project_card deliveries are accepted without signature "
            "verification; set VERIFY_PROJECT_CARD_SIGNATURE=true to check them"
        )


def create_app(
    settings: Optional[NotifierSettings] = None,
    slack_client: Optional[SlackWebhookClient] = None,
) -> FastAPI:
    """Build the notifier application.

    Dependencies are constructed once during startup and kept on
    ``app.state``; nothing is shared through module globals.

    Args:
        settings: Configuration to use. Read from the environment at
            startup when omitted.
        slack_client: Client used for delivery. Built from ``settings``
            when omitted.

    Returns:
        The configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Notifier starting up...")

        cfg = settings if settings is not None else get_settings()
        _log_configuration(cfg)

        client = slack_client or SlackWebhookClient(
            webhook_url=cfg.slack_webhook_url,
            timeout=cfg.slack_timeout_seconds,
        )

        app.state.settings = cfg
        app.state.webhook_handler = WebhookHandler(
            secret=cfg.secret,
            verify_project_card_signature=cfg.verify_project_card_signature,
        )
        app.state.relay = NotificationRelay(
            matcher=RuleMatcher(cfg.rule_table()),
            slack_client=client,
        )

        logger.info("Notifier started successfully")

        yield

        logger.info("Notifier shutting down...")
        await client.close()
        logger.info("Notifier shutdown complete")

    app = FastAPI(
        title="GitHub Slack Notifier",
        description="Relays GitHub issue, comment and project card events to Slack",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health():
        """Liveness probe endpoint."""
        return {"status": "healthy"}

    @app.post("/")
    async def github_webhook(request: Request):
        """GitHub webhook receiver endpoint.

        Verifies and decodes the delivery, then relays it to every
        subscribed Slack channel.

        Returns:
            dict: Summary of what was done with the delivery.

        Raises:
            HTTPException: 4xx for rejected deliveries, 502 when Slack
                delivery fails.
        """
        handler: WebhookHandler = request.app.state.webhook_handler
        relay: NotificationRelay = request.app.state.relay

        body = await request.body()
        try:
            event = handler.parse(request.headers, body)
        except WebhookError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)

        if isinstance(event, UnrecognizedEvent):
            return {"status": "ignored", "event": event.event_type}

        result = await relay.dispatch(event)
        if not result.success:
            raise HTTPException(
                status_code=502,
                detail=(
                    f"Failed to deliver {result.failed} of "
                    f"{result.matched} notification(s)"
                ),
            )

        return {
            "status": "processed",
            "event": event.kind,
            "matched": result.matched,
            "delivered": result.delivered,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    server_settings = get_settings()
    uvicorn.run(
        "src.notifier.main:app",
        host=server_settings.host,
        port=server_settings.port,
    )
