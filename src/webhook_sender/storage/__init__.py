"""
Package: storage
Description: Work item stores for the webhook sender.

- WebHookWorkItemStore: interface consumed by the sender
- NullWebHookWorkItemStore: used when no persistence is configured
- InMemoryWebHookWorkItemStore: thread-safe dict store
- DynamoDBWebHookWorkItemStore: DynamoDB table store
"""

from typing import Optional

from ..config.settings import Settings, settings
from .base import WebHookWorkItemStore
from .dynamodb import DynamoDBWebHookWorkItemStore
from .memory import InMemoryWebHookWorkItemStore
from .null import NULL_WORK_ITEM_STORE, NullWebHookWorkItemStore

__all__ = [
    "DynamoDBWebHookWorkItemStore",
    "InMemoryWebHookWorkItemStore",
    "NULL_WORK_ITEM_STORE",
    "NullWebHookWorkItemStore",
    "WebHookWorkItemStore",
    "get_work_item_store",
]


def get_work_item_store(config: Optional[Settings] = None) -> WebHookWorkItemStore:
    """
    Build the work item store selected by configuration.

    Returns the DynamoDB store when a table name is configured,
    otherwise the null store.
    """
    config = config or settings
    if config.work_items_table_name:
        return DynamoDBWebHookWorkItemStore(
            table_name=config.work_items_table_name,
            region_name=config.aws_region
        )
    return NULL_WORK_ITEM_STORE
