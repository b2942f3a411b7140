"""
Module: body.py
Description: JSON body posted to a webhook subscriber.

Serialized with wire names Event, Data and Attempt, in that order.
Data holds decoded JSON values so it re-encodes without any runtime
type discovery.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class WebhookBody(BaseModel):
    """Payload envelope sent to the subscriber."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    event: str = Field(..., alias="Event")
    data: JsonValue = Field(default=None, alias="Data")
    attempt: int = Field(..., ge=1, alias="Attempt")

    def to_wire(self) -> Dict[str, Any]:
        """Return the body as a dict keyed by wire names."""
        return self.model_dump(by_alias=True)
