"""GitHub webhook signature verification.

GitHub signs every delivery with an HMAC of the raw request body keyed by
the webhook secret:

- ``X-Hub-Signature-256: sha256=<hex>`` (current)
- ``X-Hub-Signature: sha1=<hex>`` (legacy, still sent alongside)

The SHA-256 header is preferred whenever it is present.
"""

import hashlib
import hmac
from typing import Mapping, Optional

SIGNATURE_256_HEADER = "X-Hub-Signature-256"
SIGNATURE_HEADER = "X-Hub-Signature"

_DIGESTS = {
    "sha256": hashlib.sha256,
    "sha1": hashlib.sha1,
}


def compute_signature(body: bytes, secret: str, algorithm: str = "sha256") -> str:
    """Return the signature header value GitHub would send for ``body``.

    Args:
        body: Raw request body bytes.
        secret: Webhook secret.
        algorithm: Either "sha256" or "sha1".

    Returns:
        Header value in the form ``<algorithm>=<hexdigest>``.
    """
    digest = hmac.new(secret.encode("utf-8"), body, _DIGESTS[algorithm]).hexdigest()
    return f"{algorithm}={digest}"


def verify_signature(
    body: bytes,
    secret: str,
    signature: Optional[str],
) -> bool:
    """Verify a single signature header value against ``body``.

    Args:
        body: Raw request body bytes.
        secret: Webhook secret.
        signature: Header value (e.g. "sha256=abc..."); None if absent.

    Returns:
        True if the signature is well formed and matches.
    """
    signature = (signature or "").strip()
    if "=" not in signature:
        return False

    algorithm, _, _ = signature.partition("=")
    if algorithm not in _DIGESTS:
        return False

    # Header values may hold arbitrary latin-1 text; compare as bytes
    expected = compute_signature(body, secret, algorithm)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("ascii"))


def select_signature(headers: Mapping[str, str]) -> Optional[str]:
    """Pick the strongest signature header present in ``headers``.

    ``headers`` must do case-insensitive lookups (Starlette and httpx
    header objects both do).
    """
    return headers.get(SIGNATURE_256_HEADER) or headers.get(SIGNATURE_HEADER)
