"""
Package: webhook_sender
Description: Signed, tracked webhook delivery.

Delivers a single webhook attempt per call: records a work item,
signs the exact request body with HMAC-SHA256, posts it to the
subscriber endpoint and stores the response on the work item.

Public API:
- DefaultWebHookSender: blocking and async delivery entry points
- WebHookSenderInput: caller-supplied delivery arguments
- WebhookSigner: body signing and verification
"""

from .delivery.sender import DefaultWebHookSender
from .delivery.signing import WebhookSigner
from .models.sender_input import WebHookSenderInput

__all__ = [
    "DefaultWebHookSender",
    "WebHookSenderInput",
    "WebhookSigner",
]

__version__ = "0.1.0"
