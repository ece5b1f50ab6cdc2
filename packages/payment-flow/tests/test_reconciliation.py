from __future__ import annotations

import asyncio

import pytest

from payment_flow.models import TransactionState, VerificationOutcome
from payment_flow.reconciliation import (
    InMemoryTransactionStore,
    ReconciliationGuard,
    RedisTransactionStore,
)


class FakeRedis:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.set_calls: list[tuple[str, str, int, bool]] = []

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str, ex: int, nx: bool) -> bool | None:
        self.set_calls.append((key, value, ex, nx))
        if nx and key in self.values:
            return None
        self.values[key] = value
        return True

    async def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.values.pop(key, None) is not None)


class RecordingFulfillment:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, outcome: VerificationOutcome, channel: str) -> None:
        await asyncio.sleep(0)
        self.calls.append((outcome.reference, channel))


def _outcome(reference: str, status: str) -> VerificationOutcome:
    return VerificationOutcome.from_provider_data(reference, {"status": status, "reference": reference})


@pytest.mark.asyncio
async def test_inmemory_store_compare_and_set_wins_once() -> None:
    store = InMemoryTransactionStore()

    first = await store.compare_and_set_finalized("ref-1", TransactionState.FINALIZED_SUCCESS)
    second = await store.compare_and_set_finalized("ref-1", TransactionState.FINALIZED_OTHER)

    assert first is True
    assert second is False
    assert await store.get("ref-1") is TransactionState.FINALIZED_SUCCESS
    assert await store.get("ref-2") is TransactionState.UNVERIFIED


@pytest.mark.asyncio
async def test_inmemory_store_rejects_unverified_target() -> None:
    store = InMemoryTransactionStore()
    with pytest.raises(ValueError):
        await store.compare_and_set_finalized("ref-1", TransactionState.UNVERIFIED)


@pytest.mark.asyncio
async def test_redis_store_uses_set_nx_with_ttl() -> None:
    client = FakeRedis()
    store = RedisTransactionStore(client, ttl_seconds=60)

    assert await store.compare_and_set_finalized("ref-1", TransactionState.FINALIZED_SUCCESS) is True
    assert await store.compare_and_set_finalized("ref-1", TransactionState.FINALIZED_SUCCESS) is False
    assert client.set_calls[0] == ("payment_state:ref-1", "finalized_success", 60, True)
    assert await store.get("ref-1") is TransactionState.FINALIZED_SUCCESS

    await store.release("ref-1")
    assert await store.get("ref-1") is TransactionState.UNVERIFIED


@pytest.mark.asyncio
async def test_guard_fulfils_once_across_concurrent_channels() -> None:
    fulfillment = RecordingFulfillment()
    guard = ReconciliationGuard(InMemoryTransactionStore(), on_success=fulfillment)

    results = await asyncio.gather(
        guard.finalize(_outcome("ref-1", "success"), channel="webhook"),
        guard.finalize(_outcome("ref-1", "success"), channel="client_verify"),
    )

    assert sorted(result.applied for result in results) == [False, True]
    assert all(result.state is TransactionState.FINALIZED_SUCCESS for result in results)
    assert len(fulfillment.calls) == 1


@pytest.mark.asyncio
async def test_guard_defers_pending_outcomes() -> None:
    fulfillment = RecordingFulfillment()
    guard = ReconciliationGuard(InMemoryTransactionStore(), on_success=fulfillment)

    pending = await guard.finalize(_outcome("ref-1", "pending"), channel="client_verify")
    success = await guard.finalize(_outcome("ref-1", "success"), channel="webhook")

    assert pending.applied is False
    assert pending.state is TransactionState.UNVERIFIED
    assert success.applied is True
    assert fulfillment.calls == [("ref-1", "webhook")]


@pytest.mark.asyncio
async def test_guard_finalizes_failed_outcome_without_fulfilment() -> None:
    fulfillment = RecordingFulfillment()
    guard = ReconciliationGuard(InMemoryTransactionStore(), on_success=fulfillment)

    result = await guard.finalize(_outcome("ref-1", "failed"), channel="webhook")

    assert result.applied is True
    assert result.state is TransactionState.FINALIZED_OTHER
    assert fulfillment.calls == []


@pytest.mark.asyncio
async def test_guard_releases_claim_when_fulfilment_fails() -> None:
    store = InMemoryTransactionStore()

    async def broken(_: VerificationOutcome, __: str) -> None:
        raise RuntimeError("order service down")

    guard = ReconciliationGuard(store, on_success=broken)
    with pytest.raises(RuntimeError):
        await guard.finalize(_outcome("ref-1", "success"), channel="webhook")

    assert await store.get("ref-1") is TransactionState.UNVERIFIED


@pytest.mark.asyncio
async def test_guard_releases_claim_when_fulfilment_is_cancelled() -> None:
    store = InMemoryTransactionStore()
    started = asyncio.Event()
    fulfillment = RecordingFulfillment()

    async def stalled(outcome: VerificationOutcome, channel: str) -> None:
        started.set()
        await asyncio.sleep(10)

    stalled_guard = ReconciliationGuard(store, on_success=stalled)
    task = asyncio.create_task(stalled_guard.finalize(_outcome("ref-1", "success"), channel="webhook"))
    await asyncio.wait_for(started.wait(), timeout=1.0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert await store.get("ref-1") is TransactionState.UNVERIFIED

    retry = await ReconciliationGuard(store, on_success=fulfillment).finalize(
        _outcome("ref-1", "success"), channel="client_verify"
    )
    assert retry.applied is True
    assert fulfillment.calls == [("ref-1", "client_verify")]


@pytest.mark.asyncio
async def test_guard_lets_success_follow_abandoned_poll() -> None:
    fulfillment = RecordingFulfillment()
    guard = ReconciliationGuard(InMemoryTransactionStore(), on_success=fulfillment)

    early = await guard.finalize(_outcome("ref-1", "abandoned"), channel="client_verify")
    paid = await guard.finalize(_outcome("ref-1", "success"), channel="webhook")

    assert early.applied is False
    assert early.state is TransactionState.UNVERIFIED
    assert paid.state is TransactionState.FINALIZED_SUCCESS
    assert fulfillment.calls == [("ref-1", "webhook")]
