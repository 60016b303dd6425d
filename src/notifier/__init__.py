"""GitHub to Slack notification relay.

This package receives GitHub webhook deliveries and forwards the ones
somebody subscribed to as Slack messages:
- Webhook signature verification and event decoding
- Static mention and project-column subscription rules
- Slack message formatting and incoming-webhook delivery
"""
