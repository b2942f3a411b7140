"""
Module: work_item.py
Description: Durable record of a webhook delivery attempt.

A work item is created before the HTTP call and updated once with
the response, so an interrupted delivery still leaves an auditable
record with unset response fields.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .sender_input import NIL_UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WebHookWorkItem(BaseModel):
    """
    Work item tracking one delivery attempt.

    Attributes:
        id: Generated identifier, immutable after creation
        webhook_id: Webhook event identifier
        webhook_subscription_id: Subscription identifier
        tenant_id: Tenant scope (None for the host)
        response_status_code: HTTP status of the attempt, unset until recorded
        response_content: Response body of the attempt, unset until recorded
        creation_time: When the attempt was started
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    webhook_id: UUID = Field(default=NIL_UUID)
    webhook_subscription_id: UUID = Field(default=NIL_UUID)
    tenant_id: Optional[int] = None
    response_status_code: Optional[int] = None
    response_content: Optional[str] = None
    creation_time: datetime = Field(default_factory=_utcnow)

    @property
    def is_completed(self) -> bool:
        """Whether a response has been recorded."""
        return self.response_status_code is not None

    def record_response(self, status_code: int, content: Optional[str]) -> None:
        """Store the outcome of the HTTP call."""
        self.response_status_code = status_code
        self.response_content = content
