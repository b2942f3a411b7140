"""
Module: exceptions.py
Description: Error types raised by the webhook sender.

All errors raised inside a delivery attempt are caught by the sender's
top-level guard, logged, and turned into a False result. They surface
directly only from helpers and store implementations.
"""

from typing import Optional
from uuid import UUID


class WebHookError(Exception):
    """Base error for the webhook sender."""


class ArgumentMissingError(WebHookError, ValueError):
    """Raised when a required identifier is unset."""

    def __init__(self, argument_name: str):
        self.argument_name = argument_name
        super().__init__(f"Value cannot be empty. Argument: {argument_name}")


class InvalidArgumentError(WebHookError, ValueError):
    """Raised when the signer receives a missing request, body or secret."""

    def __init__(self, argument_name: str, message: Optional[str] = None):
        self.argument_name = argument_name
        super().__init__(message or f"Invalid argument: {argument_name}")


class InvalidHeaderError(WebHookError):
    """Raised when a caller header fits neither the request nor its content."""

    def __init__(self, subscription_id: UUID, header_name: str, header_value: str):
        self.subscription_id = subscription_id
        self.header_name = header_name
        self.header_value = header_value
        super().__init__(
            f"Invalid Header. SubscriptionId:{subscription_id},"
            f"Header: {header_name}:{header_value}"
        )


class WorkItemNotFoundError(WebHookError, LookupError):
    """Raised when a work item does not exist for the given tenant."""

    def __init__(self, tenant_id: Optional[int], work_item_id: UUID):
        self.tenant_id = tenant_id
        self.work_item_id = work_item_id
        super().__init__(
            f"Webhook work item not found: id={work_item_id}, tenant_id={tenant_id}"
        )


class TrackingNotConfiguredError(WebHookError):
    """Raised when a durable work item store is required but missing."""
