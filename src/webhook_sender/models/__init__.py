"""
Package: models
Description: Pydantic data models for webhook delivery.

- WebHookSenderInput: caller-supplied delivery arguments
- WebHookWorkItem: durable record of one delivery attempt
- WebhookBody: JSON body posted to the subscriber
"""

from .body import WebhookBody
from .sender_input import NIL_UUID, WebHookSenderInput
from .work_item import WebHookWorkItem

__all__ = [
    "NIL_UUID",
    "WebHookSenderInput",
    "WebHookWorkItem",
    "WebhookBody",
]
