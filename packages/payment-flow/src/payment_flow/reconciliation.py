from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from payment_flow.models import TransactionState, VerificationOutcome

logger = logging.getLogger(__name__)

FulfillmentHook = Callable[[VerificationOutcome, str], Awaitable[None]]

_FINALIZED_STATES = (TransactionState.FINALIZED_SUCCESS, TransactionState.FINALIZED_OTHER)


class TransactionStore(ABC):
    @abstractmethod
    async def get(self, reference: str) -> TransactionState:
        raise NotImplementedError

    @abstractmethod
    async def compare_and_set_finalized(self, reference: str, state: TransactionState) -> bool:
        """Move ``reference`` from UNVERIFIED to ``state``; True only for the winning caller."""
        raise NotImplementedError

    @abstractmethod
    async def release(self, reference: str) -> None:
        raise NotImplementedError


class RedisLikeStateClient(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ex: int, nx: bool) -> bool | None: ...

    async def delete(self, *keys: str) -> int: ...


class InMemoryTransactionStore(TransactionStore):
    def __init__(self) -> None:
        self._states: dict[str, TransactionState] = {}
        self._lock = threading.Lock()

    async def get(self, reference: str) -> TransactionState:
        with self._lock:
            return self._states.get(reference, TransactionState.UNVERIFIED)

    async def compare_and_set_finalized(self, reference: str, state: TransactionState) -> bool:
        if state not in _FINALIZED_STATES:
            raise ValueError(f"cannot finalize into {state.value}")
        with self._lock:
            if reference in self._states:
                return False
            self._states[reference] = state
            return True

    async def release(self, reference: str) -> None:
        with self._lock:
            self._states.pop(reference, None)


class RedisTransactionStore(TransactionStore):
    def __init__(self, client: RedisLikeStateClient, ttl_seconds: int = 7 * 24 * 3600) -> None:
        self._client = client
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def _key(reference: str) -> str:
        return f"payment_state:{reference}"

    async def get(self, reference: str) -> TransactionState:
        raw = await self._client.get(self._key(reference))
        if not raw:
            return TransactionState.UNVERIFIED
        return TransactionState(raw)

    async def compare_and_set_finalized(self, reference: str, state: TransactionState) -> bool:
        if state not in _FINALIZED_STATES:
            raise ValueError(f"cannot finalize into {state.value}")
        created = await self._client.set(self._key(reference), state.value, ex=self._ttl_seconds, nx=True)
        return bool(created)

    async def release(self, reference: str) -> None:
        await self._client.delete(self._key(reference))


@dataclass(frozen=True)
class FinalizeResult:
    reference: str
    state: TransactionState
    applied: bool


class ReconciliationGuard:
    """Serialises the webhook and client-verify channels on one reference.

    Whichever channel wins the store's compare-and-set runs the fulfilment
    hook; every other observer of the same terminal outcome is a no-op.
    Pending outcomes never finalize, so a later poll can still record success.
    """

    def __init__(self, store: TransactionStore, on_success: FulfillmentHook | None = None) -> None:
        self._store = store
        self._on_success = on_success

    async def finalize(self, outcome: VerificationOutcome, channel: str) -> FinalizeResult:
        reference = outcome.reference
        if not outcome.is_terminal:
            state = await self._store.get(reference)
            logger.info(
                "payment_finalize_deferred",
                extra={"reference": reference, "channel": channel, "provider_status": outcome.provider_status},
            )
            return FinalizeResult(reference=reference, state=state, applied=False)

        target = TransactionState.FINALIZED_SUCCESS if outcome.is_success else TransactionState.FINALIZED_OTHER
        won = await self._store.compare_and_set_finalized(reference, target)
        if not won:
            state = await self._store.get(reference)
            logger.info(
                "payment_finalize_skipped",
                extra={"reference": reference, "channel": channel, "state": state.value},
            )
            return FinalizeResult(reference=reference, state=state, applied=False)

        logger.info(
            "payment_finalized",
            extra={"reference": reference, "channel": channel, "state": target.value},
        )
        if target is TransactionState.FINALIZED_SUCCESS and self._on_success is not None:
            try:
                await self._on_success(outcome, channel)
            except BaseException:
                # covers cancellation too; the next channel must be able to fulfil
                await self._store.release(reference)
                logger.exception("payment_fulfillment_failed", extra={"reference": reference, "channel": channel})
                raise
        return FinalizeResult(reference=reference, state=target, applied=True)
