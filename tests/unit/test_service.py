from __future__ import annotations

from item_processor.domain.models import STATUS_PROCESSED, Item
from item_processor.service import ItemService
from item_processor.store.memory import InMemoryRecordStore

FUTURE_TIMEOUT = 5


def test_crud_passthrough(executor) -> None:
    service = ItemService(InMemoryRecordStore(), executor=executor)

    saved = service.save(Item(name="bracket", email="ops@example.com"))

    assert saved.id == 1
    assert service.find_by_id(1) == saved
    assert service.find_all() == [saved]
    assert service.find_by_id(2) is None


def test_delete_by_id_only_deletes_existing_items(executor) -> None:
    service = ItemService(InMemoryRecordStore([Item(name="gear")]), executor=executor)

    assert service.delete_by_id(99) is False
    assert service.delete_by_id(1) is True
    assert service.find_all() == []


def test_process_items_async_returns_processed_items(memory_store, executor) -> None:
    service = ItemService(memory_store, executor=executor)

    future = service.process_items_async()
    result = future.result(timeout=FUTURE_TIMEOUT)

    assert sorted(item.id for item in result) == [1, 2, 3]
    assert all(item.status == STATUS_PROCESSED for item in service.find_all())
    assert service.processed_count == 3


def test_service_uses_injected_processor(memory_store, make_processor) -> None:
    processor = make_processor(memory_store)
    service = ItemService(memory_store, processor=processor)

    service.process_items_async().result(timeout=FUTURE_TIMEOUT)

    assert service.processor is processor
    assert processor.processed_count == 3
