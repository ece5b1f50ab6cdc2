"""Payment lifecycle core: intents, verification outcomes and reconciliation."""

from payment_flow.amounts import MINOR_UNITS_PER_MAJOR, to_minor_units
from payment_flow.models import (
    CheckoutSession,
    PaymentIntent,
    TransactionState,
    TransactionStatus,
    VerificationOutcome,
    classify_provider_status,
)
from payment_flow.reconciliation import (
    FinalizeResult,
    InMemoryTransactionStore,
    ReconciliationGuard,
    RedisTransactionStore,
    TransactionStore,
)

__all__ = [
    "CheckoutSession",
    "FinalizeResult",
    "InMemoryTransactionStore",
    "MINOR_UNITS_PER_MAJOR",
    "PaymentIntent",
    "ReconciliationGuard",
    "RedisTransactionStore",
    "TransactionState",
    "TransactionStatus",
    "TransactionStore",
    "VerificationOutcome",
    "classify_provider_status",
    "to_minor_units",
]
