"""
Module: base.py
Description: Work item store interface consumed by the sender.

Every operation has a blocking form and an async form. The async forms
default to running the blocking form on a worker thread, so a store
only has to implement the blocking operations; stores with native
async I/O can override the async forms.
"""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from uuid import UUID

from ..models.work_item import WebHookWorkItem


class WebHookWorkItemStore(ABC):
    """
    Durable store for webhook work items.

    Attributes:
        is_persistent: False for stores that discard writes
    """

    is_persistent: bool = True

    @abstractmethod
    def insert(self, work_item: WebHookWorkItem) -> UUID:
        """Persist a new work item and return its id."""

    @abstractmethod
    def get(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        """
        Fetch a work item.

        Raises:
            WorkItemNotFoundError: If no item exists for the tenant and id
        """

    @abstractmethod
    def update(self, work_item: WebHookWorkItem) -> None:
        """Persist changes to an existing work item."""

    @abstractmethod
    def get_repetition_count(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        """
        Count work items recorded for a (tenant, webhook, subscription) triple.

        Every stored attempt counts, finished or not. exclude_work_item_id
        leaves out the attempt currently in flight.
        """

    async def insert_async(self, work_item: WebHookWorkItem) -> UUID:
        return await asyncio.to_thread(self.insert, work_item)

    async def get_async(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        return await asyncio.to_thread(self.get, tenant_id, work_item_id)

    async def update_async(self, work_item: WebHookWorkItem) -> None:
        await asyncio.to_thread(self.update, work_item)

    async def get_repetition_count_async(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        return await asyncio.to_thread(
            self.get_repetition_count,
            tenant_id,
            webhook_id,
            webhook_subscription_id,
            exclude_work_item_id
        )

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[None]:
        """
        Transaction boundary around a group of writes.

        Writes made inside the block are committed when it exits cleanly.
        The base implementation has nothing to commit: each write is
        durable as soon as it returns.
        """
        yield
