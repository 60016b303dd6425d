"""Errors raised while accepting a webhook delivery.

Every error carries the HTTP status code the endpoint answers with, so a
bad delivery is rejected without affecting other requests.
"""


class WebhookError(Exception):
    """Base class for rejected webhook deliveries.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code returned to the sender.
    """

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingEventHeader(WebhookError):
    """The ``X-GitHub-Event`` header is absent or empty."""


class BodyMissing(WebhookError):
    """The request body is empty."""


class DecodeFailure(WebhookError):
    """The request body is not valid JSON or not the expected shape."""


class SignatureInvalid(WebhookError):
    """The signature header is missing or does not match the secret."""

    status_code = 401
