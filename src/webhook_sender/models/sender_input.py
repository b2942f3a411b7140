"""
Module: sender_input.py
Description: Caller-supplied arguments for a single webhook delivery.

The input is frozen for the duration of a send. Identifier fields
default to the nil UUID; the sender rejects them before any side
effect, so an unset identifier is representable but never delivered.
"""

from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

NIL_UUID = UUID(int=0)


class WebHookSenderInput(BaseModel):
    """
    Arguments for one webhook delivery attempt.

    Attributes:
        webhook_id: Identifier of the webhook event being delivered
        webhook_subscription_id: Identifier of the receiving subscription
        tenant_id: Optional tenant scope (None for the host)
        webhook_uri: Subscriber endpoint
        webhook_definition: Event name placed in the body's Event field
        data: JSON-encoded event payload
        secret: Shared secret keying the signature
        headers: Extra headers merged into the outgoing request
    """

    model_config = ConfigDict(frozen=True)

    webhook_id: UUID = Field(default=NIL_UUID, description="Webhook event identifier")
    webhook_subscription_id: UUID = Field(
        default=NIL_UUID,
        description="Webhook subscription identifier"
    )
    tenant_id: Optional[int] = Field(default=None, description="Tenant scope")
    webhook_uri: str = Field(..., description="Subscriber endpoint URL")
    webhook_definition: str = Field(..., min_length=1, description="Event name")
    data: Optional[str] = Field(default=None, description="JSON-encoded payload")
    secret: str = Field(..., description="Shared signing secret")
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Additional request headers"
    )

    @field_validator('webhook_uri')
    @classmethod
    def validate_webhook_uri(cls, v: str) -> str:
        """Validate the endpoint is an absolute HTTP/HTTPS URL."""
        if not v or not v.startswith(('http://', 'https://')):
            raise ValueError("webhook_uri must be a valid HTTP/HTTPS URL")
        return v
