"""
Module: null.py
Description: Work item store used when no persistence is configured.

Discards every write and reports zero prior attempts. It advertises
is_persistent = False so callers can tell tracking is not wired.
"""

from typing import Optional
from uuid import UUID

from ..models.work_item import WebHookWorkItem
from ..utils.logger import get_logger
from .base import WebHookWorkItemStore

logger = get_logger(__name__)


class NullWebHookWorkItemStore(WebHookWorkItemStore):
    """Store that keeps nothing."""

    is_persistent = False

    def insert(self, work_item: WebHookWorkItem) -> UUID:
        logger.debug("Work item discarded, no store configured", work_item_id=str(work_item.id))
        return work_item.id

    def get(self, tenant_id: Optional[int], work_item_id: UUID) -> WebHookWorkItem:
        # Nothing was kept, so hand back a blank item for the caller to fill in
        return WebHookWorkItem(id=work_item_id, tenant_id=tenant_id)

    def update(self, work_item: WebHookWorkItem) -> None:
        logger.debug(
            "Work item update discarded, no store configured",
            work_item_id=str(work_item.id),
            status_code=work_item.response_status_code
        )

    def get_repetition_count(
        self,
        tenant_id: Optional[int],
        webhook_id: UUID,
        webhook_subscription_id: UUID,
        exclude_work_item_id: Optional[UUID] = None
    ) -> int:
        return 0

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
        return 0


NULL_WORK_ITEM_STORE = NullWebHookWorkItemStore()
