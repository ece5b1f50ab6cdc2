import pytest

from devkit.redis import AsyncRedisManager, create_redis_client, create_transaction_store
from payment_flow.reconciliation import InMemoryTransactionStore, RedisTransactionStore


def test_create_redis_client_none() -> None:
    assert create_redis_client(None) is None


def test_create_transaction_store_fallback() -> None:
    store = create_transaction_store(None)
    assert isinstance(store, InMemoryTransactionStore)


def test_create_transaction_store_uses_redis_when_configured() -> None:
    manager = AsyncRedisManager("redis://example:6379/0", client_factory=lambda _url: object())
    store = create_transaction_store(manager, ttl_seconds=60)
    assert isinstance(store, RedisTransactionStore)


@pytest.mark.asyncio
async def test_async_redis_manager_reconnects_on_failure() -> None:
    class FakeClient:
        def __init__(self, fail_once: bool) -> None:
            self.fail_once = fail_once
            self.ping_count = 0

        async def ping(self) -> bool:
            self.ping_count += 1
            return True

        async def get(self, _key: str) -> str:
            if self.fail_once:
                self.fail_once = False
                raise RuntimeError("transient")
            return "finalized_success"

        async def close(self) -> None:
            return None

    created: list[FakeClient] = []

    def factory(_url: str) -> FakeClient:
        client = FakeClient(fail_once=(len(created) == 0))
        created.append(client)
        return client

    manager = AsyncRedisManager("redis://example:6379/0", client_factory=factory, base_delay_seconds=0.0)
    value = await manager.execute("get", "payment_state:ref-1")
    assert value == "finalized_success"
    assert len(created) >= 2
