"""
Module: memory.py
Description: Thread-safe in-memory work item store.

Suitable for tests and single-process deployments. Writes made inside
unit_of_work() are staged per task and only become visible to other
callers when the block exits cleanly; an exception discards them.
"""

import threading
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Dict, List, Optional
from uuid import UUID

from ..exceptions import WorkItemNotFoundError
from ..models.work_item import WebHookWorkItem
from .base import WebHookWorkItemStore


class InMemoryWebHookWorkItemStore(WebHookWorkItemStore):
    """Work item store backed by a dict."""

    def __init__(self):
        self._items: Dict[UUID, WebHookWorkItem] = {}
        self._lock = threading.RLock()
        self._staged: ContextVar[Optional[Dict[UUID, WebHookWorkItem]]] = ContextVar(
            f"staged_work_items_{id(self)}", default=None
        )

    def _lookup(self, work_item_id: UUID) -> Optional[WebHookWorkItem]:
        staged = self._staged.get()
        if staged and work_item_id in staged:
            return staged[work_item_id]
        with self._lock:
            return self._items.get(work_item_id)

    def _write(self, work_item: WebHookWorkItem) -> None:
        item = work_item.model_copy(deep=True)
        staged = self._staged.get()
        if staged is not None:
            staged[item.id] = item
            return
        with self._lock:
            self._items[item.id] = item

    def insert(self, work_item: WebHookWorkItem) -> UUID:
        if self._lookup(work_item.id) is not None:
            raise ValueError(f"Work item already exists: {work_item.id}")
        self._write(work_item)
        return work_item.id

    def get(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        item = self._lookup(work_item_id)
        if item is None or item.tenant_id != tenant_id:
            raise WorkItemNotFoundError(tenant_id, work_item_id)
        return item.model_copy(deep=True)

    def update(self, work_item: WebHookWorkItem) -> None:
        existing = self._lookup(work_item.id)
        if existing is None or existing.tenant_id != work_item.tenant_id:
            raise WorkItemNotFoundError(work_item.tenant_id, work_item.id)
        self._write(work_item)

    def get_repetition_count(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        with self._lock:
            items = dict(self._items)
        items.update(self._staged.get() or {})
        return sum(
            1 for item in items.values()
            if item.tenant_id == tenant_id
            and item.webhook_id == webhook_id
            and item.webhook_subscription_id == webhook_subscription_id
            and item.id != exclude_work_item_id
        )

    def list_work_items(self) -> List[WebHookWorkItem]:
        """Committed work items, oldest first."""
        with self._lock:
            items = [item.model_copy(deep=True) for item in self._items.values()]
        return sorted(items, key=lambda item: item.creation_time)

    async def insert_async(self, work_item: WebHookWorkItem) -> UUID:
        return self.insert(work_item)

    async def get_async(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        return self.get(tenant_id, work_item_id)

    async def update_async(self, work_item: WebHookWorkItem) -> None:
        self.update(work_item)

    async def get_repetition_count_async(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        return self.get_repetition_count(
            tenant_id, webhook_id, webhook_subscription_id, exclude_work_item_id
        )

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[None]:
        staged: Dict[UUID, WebHookWorkItem] = {}
        token = self._staged.set(staged)
        try:
            yield
        finally:
            self._staged.reset(token)

        # A nested unit of work commits into the enclosing one
        outer = self._staged.get()
        if outer is not None:
            outer.update(staged)
            return
        with self._lock:
            self._items.update(staged)
