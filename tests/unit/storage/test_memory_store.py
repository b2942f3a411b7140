"""
Module: test_memory_store.py
Description: Unit tests for the in-memory and null work item stores.

Covers CRUD semantics, tenant scoping, repetition counting and the
commit/discard behaviour of unit_of_work().
"""

from uuid import uuid4

import pytest

from webhook_sender.exceptions import WorkItemNotFoundError
from webhook_sender.models.work_item import WebHookWorkItem
from webhook_sender.storage.null import NULL_WORK_ITEM_STORE, NullWebHookWorkItemStore


@pytest.fixture
def work_item():
    return WebHookWorkItem(webhook_id=uuid4(), webhook_subscription_id=uuid4(), tenant_id=3)


class TestInMemoryStore:
    """Test cases for InMemoryWebHookWorkItemStore."""

    def test_insert_and_get(self, memory_store, work_item):
        work_item_id = memory_store.insert(work_item)

        fetched = memory_store.get(3, work_item_id)

        assert work_item_id == work_item.id
        assert fetched == work_item
        assert fetched is not work_item

    def test_insert_duplicate(self, memory_store, work_item):
        memory_store.insert(work_item)

        with pytest.raises(ValueError, match="already exists"):
            memory_store.insert(work_item)

    def test_get_missing(self, memory_store):
        with pytest.raises(WorkItemNotFoundError):
            memory_store.get(None, uuid4())

    def test_get_other_tenant(self, memory_store, work_item):
        """Test items are only visible to their own tenant."""
        memory_store.insert(work_item)

        with pytest.raises(WorkItemNotFoundError):
            memory_store.get(4, work_item.id)
        with pytest.raises(WorkItemNotFoundError):
            memory_store.get(None, work_item.id)

    def test_update(self, memory_store, work_item):
        memory_store.insert(work_item)
        fetched = memory_store.get(3, work_item.id)
        fetched.record_response(200, "ok")

        memory_store.update(fetched)

        stored = memory_store.get(3, work_item.id)
        assert stored.response_status_code == 200
        assert stored.response_content == "ok"

    def test_update_missing(self, memory_store, work_item):
        with pytest.raises(WorkItemNotFoundError):
            memory_store.update(work_item)

    def test_stored_copy_is_isolated(self, memory_store, work_item):
        """Test mutating a caller's instance doesn't change the store."""
        memory_store.insert(work_item)

        work_item.record_response(500, "boom")

        assert memory_store.get(3, work_item.id).response_status_code is None

    def test_repetition_count(self, memory_store, work_item):
        """Test every attempt of the triple counts, finished or not."""
        memory_store.insert(work_item)
        finished = WebHookWorkItem(
            webhook_id=work_item.webhook_id,
            webhook_subscription_id=work_item.webhook_subscription_id,
            tenant_id=3
        )
        finished.record_response(500, "boom")
        memory_store.insert(finished)

        assert memory_store.get_repetition_count(
            3, work_item.webhook_id, work_item.webhook_subscription_id
        ) == 2
        assert memory_store.get_repetition_count(
            None, work_item.webhook_id, work_item.webhook_subscription_id
        ) == 0
        assert memory_store.get_repetition_count(3, work_item.webhook_id, uuid4()) == 0

    def test_repetition_count_excludes_current_item(self, memory_store, work_item):
        memory_store.insert(work_item)

        assert memory_store.get_repetition_count(
            3,
            work_item.webhook_id,
            work_item.webhook_subscription_id,
            exclude_work_item_id=work_item.id
        ) == 0

    @pytest.mark.asyncio
    async def test_unit_of_work_commits(self, memory_store, work_item):
        async with memory_store.unit_of_work():
            await memory_store.insert_async(work_item)
            # Visible inside the unit of work, not yet committed
            assert (await memory_store.get_async(3, work_item.id)).id == work_item.id
            assert memory_store.list_work_items() == []

        assert memory_store.list_work_items() == [work_item]

    @pytest.mark.asyncio
    async def test_unit_of_work_discards_on_error(self, memory_store, work_item):
        with pytest.raises(RuntimeError):
            async with memory_store.unit_of_work():
                await memory_store.insert_async(work_item)
                raise RuntimeError("rollback")

        assert memory_store.list_work_items() == []

    @pytest.mark.asyncio
    async def test_nested_unit_of_work_commits_with_outer(self, memory_store, work_item):
        async with memory_store.unit_of_work():
            async with memory_store.unit_of_work():
                await memory_store.insert_async(work_item)
            assert memory_store.list_work_items() == []

        assert len(memory_store.list_work_items()) == 1


class TestNullStore:
    """Test cases for NullWebHookWorkItemStore."""

    def test_not_persistent(self):
        assert NullWebHookWorkItemStore.is_persistent is False
        assert isinstance(NULL_WORK_ITEM_STORE, NullWebHookWorkItemStore)

    @pytest.mark.asyncio
    async def test_discards_writes(self, work_item):
        store = NullWebHookWorkItemStore()

        assert await store.insert_async(work_item) == work_item.id
        fetched = await store.get_async(3, work_item.id)
        await store.update_async(fetched)

        assert fetched.id == work_item.id
        assert fetched.tenant_id == 3
        assert fetched.response_status_code is None
        assert await store.get_repetition_count_async(
            3, work_item.webhook_id, work_item.webhook_subscription_id
        ) == 0
