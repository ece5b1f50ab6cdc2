from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from payment_flow.amounts import to_minor_units
from payment_flow.models import CheckoutSession, PaymentIntent, VerificationOutcome
from payment_flow.reconciliation import FinalizeResult, ReconciliationGuard

from api.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

WEBHOOK_CHANNEL = "webhook"
CLIENT_VERIFY_CHANNEL = "client_verify"


class PaymentProvider(Protocol):
    async def initialize_transaction(self, payload: dict[str, Any]) -> dict[str, Any]: ...

    async def verify_transaction(self, reference: str) -> dict[str, Any]: ...


async def log_order_fulfillment(outcome: VerificationOutcome, channel: str) -> None:
    # stand-in for order fulfilment / receipting; runs once per reference
    logger.info(
        "order_fulfilled",
        extra={"reference": outcome.reference, "channel": channel, "amount": outcome.raw.get("amount")},
    )


class PaymentService:
    def __init__(
        self,
        provider: PaymentProvider,
        guard: ReconciliationGuard,
        callback_path: str = "/paystack-callback",
    ) -> None:
        self._provider = provider
        self._guard = guard
        self._callback_path = callback_path

    def build_intent(
        self,
        email: str | None,
        amount: int | float | None,
        currency: str | None,
        callback_origin: str | None,
    ) -> PaymentIntent:
        if not email or amount is None or not currency or not callback_origin:
            raise ValidationError(
                "Missing required fields: email, amount, currency, or frontendCallbackOrigin"
            )
        try:
            amount_minor_units = to_minor_units(amount)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return PaymentIntent(
            email=email,
            amount_minor_units=amount_minor_units,
            currency=currency,
            callback_origin=callback_origin,
        )

    async def initiate(self, intent: PaymentIntent) -> CheckoutSession:
        payload = intent.to_provider_payload(self._callback_path)
        logger.info(
            "payment_initiate",
            extra={"amount": payload["amount"], "currency": payload["currency"], "callback_url": payload["callback_url"]},
        )
        body = await self._provider.initialize_transaction(payload)
        data = body.get("data")
        if not isinstance(data, dict) or not data.get("reference") or not data.get("authorization_url"):
            raise UpstreamError("Invalid payment provider initialize response", details=body)
        return CheckoutSession(
            checkout_url=str(data["authorization_url"]),
            reference=str(data["reference"]),
            access_code=data.get("access_code"),
            raw=body,
        )

    async def verify(self, reference: str | None) -> VerificationOutcome:
        if not reference or not reference.strip():
            raise ValidationError("Transaction reference is required.")
        body = await self._provider.verify_transaction(reference)
        data = body.get("data")
        if not isinstance(data, dict):
            raise UpstreamError("Invalid payment provider verify response", details=body)
        return VerificationOutcome.from_provider_data(reference, data)

    async def confirm(self, reference: str | None, channel: str) -> tuple[VerificationOutcome, FinalizeResult]:
        outcome = await self.verify(reference)
        result = await self.reconcile(outcome, channel)
        return outcome, result

    async def reconcile(self, outcome: VerificationOutcome, channel: str) -> FinalizeResult:
        """Record a verified outcome through the guard.

        Shielded: once the provider has answered, the claim and the fulfilment
        hook run to completion even if the caller goes away.
        """
        result = await asyncio.shield(self._guard.finalize(outcome, channel=channel))
        logger.info(
            "payment_confirmed",
            extra={
                "reference": outcome.reference,
                "channel": channel,
                "provider_status": outcome.provider_status,
                "applied": result.applied,
            },
        )
        return result
