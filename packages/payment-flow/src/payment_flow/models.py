from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransactionStatus(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"
    OTHER = "other"


class TransactionState(str, Enum):
    UNVERIFIED = "unverified"
    FINALIZED_SUCCESS = "finalized_success"
    FINALIZED_OTHER = "finalized_other"


# provider statuses that may still move to success later
PENDING_PROVIDER_STATUSES = frozenset({"pending", "ongoing", "processing", "queued", "abandoned"})
FAILED_PROVIDER_STATUSES = frozenset({"failed", "reversed"})


def classify_provider_status(provider_status: str) -> TransactionStatus:
    normalized = provider_status.strip().lower()
    if normalized == "success":
        return TransactionStatus.SUCCESS
    if normalized in PENDING_PROVIDER_STATUSES:
        return TransactionStatus.PENDING
    if normalized in FAILED_PROVIDER_STATUSES:
        return TransactionStatus.FAILED
    return TransactionStatus.OTHER


@dataclass(frozen=True)
class PaymentIntent:
    email: str
    amount_minor_units: int
    currency: str
    callback_origin: str

    def callback_url(self, callback_path: str) -> str:
        # origin is caller controlled; deployments must allowlist it upstream
        return f"{self.callback_origin.rstrip('/')}{callback_path}"

    def to_provider_payload(self, callback_path: str) -> dict[str, Any]:
        return {
            "email": self.email,
            "amount": self.amount_minor_units,
            "currency": self.currency,
            "callback_url": self.callback_url(callback_path),
        }


@dataclass(frozen=True)
class CheckoutSession:
    checkout_url: str
    reference: str
    access_code: str | None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VerificationOutcome:
    reference: str
    status: TransactionStatus
    provider_status: str
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_provider_data(cls, reference: str, data: dict[str, Any]) -> VerificationOutcome:
        provider_status = str(data.get("status") or "")
        return cls(
            reference=reference,
            status=classify_provider_status(provider_status),
            provider_status=provider_status,
            raw=data,
        )

    @property
    def is_success(self) -> bool:
        return self.status is TransactionStatus.SUCCESS

    @property
    def is_terminal(self) -> bool:
        return self.status is not TransactionStatus.PENDING
