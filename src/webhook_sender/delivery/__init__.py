"""
Package: delivery
Description: Webhook signing, request construction and sending.

Provides the HMAC signer, the outbound request message with its
header scopes, and the sender that runs one tracked delivery attempt.
"""

from .request import WebHookRequestMessage, add_additional_headers
from .sender import DefaultWebHookSender, DeliveryOutcome
from .signing import SIGNATURE_HEADER_NAME, WebhookSigner

__all__ = [
    "DefaultWebHookSender",
    "DeliveryOutcome",
    "SIGNATURE_HEADER_NAME",
    "WebHookRequestMessage",
    "WebhookSigner",
    "add_additional_headers",
]
