"""Unit tests for the record store load coordination"""

import asyncio

import pytest

from sales_gateway.domain.exceptions import DataSourceError, StoreNotReadyError
from sales_gateway.infrastructure.store import StoreState


async def test_load_populates_store_once(make_store, sample_records):
    """Test repeated loads reuse the first result"""
    store = make_store(records=sample_records)

    await store.load()
    await store.load()

    assert store.state is StoreState.READY
    assert store.all() == tuple(sample_records)
    assert store.source.calls == 1


async def test_concurrent_loads_share_one_fetch(make_store, sample_records):
    """Test callers arriving mid-load await the same in-flight fetch"""
    store = make_store(records=sample_records, delay=0.05)

    await asyncio.gather(*(store.load() for _ in range(10)))

    assert store.source.calls == 1
    assert len(store.all()) == len(sample_records)


async def test_read_before_load_raises(make_store):
    """Test all() and options() refuse to serve an unloaded store"""
    store = make_store(records=[])

    assert store.state is StoreState.UNLOADED
    with pytest.raises(StoreNotReadyError):
        store.all()
    with pytest.raises(StoreNotReadyError):
        store.options()


async def test_failed_load_surfaces_error_to_all_waiters(make_store):
    """Test every concurrent caller sees the failure and the store stays empty"""
    store = make_store(error=DataSourceError("source unreachable"), delay=0.01)

    results = await asyncio.gather(*(store.load() for _ in range(3)), return_exceptions=True)

    assert all(isinstance(result, DataSourceError) for result in results)
    assert store.source.calls == 1
    assert store.state is StoreState.FAILED
    assert len(store) == 0


async def test_failed_load_is_retried(make_store, sample_records):
    """Test a later load() retries after a failure"""
    store = make_store(error=DataSourceError("temporary outage"))

    with pytest.raises(DataSourceError):
        await store.load()

    store.source.error = None
    store.source.records = sample_records
    await store.load()

    assert store.state is StoreState.READY
    assert store.source.calls == 2
    assert len(store) == len(sample_records)


async def test_options_are_computed_over_full_dataset(make_store, sample_records):
    """Test cached filter options after load"""
    store = make_store(records=sample_records)
    await store.load()

    options = store.options()

    assert options["region"] == ["North", "South", "West"]
    assert options["gender"] == ["Female", "Male"]
    assert "clearance" in options["tags"]


async def test_cancelled_caller_does_not_cancel_shared_load(make_store, sample_records):
    """Test cancelling one waiter leaves the in-flight load running for the others"""
    store = make_store(records=sample_records, delay=0.05)

    cancelled = asyncio.ensure_future(store.load())
    waiters = [asyncio.ensure_future(store.load()) for _ in range(3)]
    await asyncio.sleep(0)

    cancelled.cancel()
    await asyncio.gather(*waiters)

    with pytest.raises(asyncio.CancelledError):
        await cancelled
    assert store.state is StoreState.READY
    assert store.source.calls == 1
    assert len(store) == len(sample_records)
