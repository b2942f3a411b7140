"""
Module: signing.py
Description: HMAC-SHA256 signing of webhook bodies.

The signature covers the exact bytes placed in the request body, so
attaching the body and adding the signature header happen together.
The header value has the form sha256=<digest>, with the digest written
as uppercase hex bytes separated by hyphens (e.g. sha256=0A-1B-...).
"""

import hashlib
import hmac
from typing import TYPE_CHECKING, Optional

from ..exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .request import WebHookRequestMessage

SIGNATURE_HEADER_KEY = "sha256"
SIGNATURE_HEADER_NAME = "abp-webhook-signature"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def _format_digest(digest: bytes) -> str:
    return "-".join(f"{byte:02X}" for byte in digest)


class WebhookSigner:
    """Signs and verifies webhook bodies using HMAC-SHA256."""

    @classmethod
    def sign(cls, body: bytes, secret: str) -> str:
        """Return the signature header value for a body."""
        mac = hmac.new(secret.encode("utf-8"), body, hashlib.sha256)
        return f"{SIGNATURE_HEADER_KEY}={_format_digest(mac.digest())}"

    @classmethod
    def verify(cls, body: bytes, secret: str, header_value: str) -> bool:
        """Check a received signature header using constant-time comparison."""
        expected = cls.sign(body, secret)
        return hmac.compare_digest(expected.encode("utf-8"), header_value.encode("utf-8"))

    @classmethod
    def sign_request(
        cls,
        request: Optional["WebHookRequestMessage"],
        serialized_body: str,
        secret: str
    ) -> None:
        """
        Attach a JSON body to a request and sign it.

        Args:
            request: Request message to receive the body
            serialized_body: Final serialized JSON body
            secret: Shared secret keying the HMAC

        Raises:
            InvalidArgumentError: If the request is missing, the body is
                blank, or the secret is missing
        """
        if request is None:
            raise InvalidArgumentError("request")

        if not serialized_body or not serialized_body.strip():
            raise InvalidArgumentError("serialized_body")

        if secret is None:
            raise InvalidArgumentError("secret")

        body = serialized_body.encode("utf-8")
        request.set_content(body, JSON_CONTENT_TYPE)
        request.headers[SIGNATURE_HEADER_NAME] = cls.sign(body, secret)
