from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from devkit.config import ServiceSettings

from api.cancellation import run_until_disconnect
from api.dependencies import get_payment_service, get_settings
from api.errors import ValidationError
from api.schemas.payment import (
    InitiatePaymentRequest,
    PaystackWebhookRequest,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
    WebhookAckResponse,
)
from api.services.payment_service import CLIENT_VERIFY_CHANNEL, WEBHOOK_CHANNEL, PaymentService

router = APIRouter(tags=["payments"])
logger = logging.getLogger(__name__)


@router.post("/initiate-payment")
async def initiate_payment(
    body: InitiatePaymentRequest,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    settings: ServiceSettings = Depends(get_settings),
) -> dict[str, Any]:
    intent = service.build_intent(body.email, body.amount, body.currency, body.frontendCallbackOrigin)
    session = await run_until_disconnect(
        request,
        lambda: service.initiate(intent),
        enabled=settings.CANCEL_ON_CLIENT_DISCONNECT,
    )
    return session.raw


@router.post("/paystack-callback", response_model=WebhookAckResponse)
async def paystack_webhook(
    body: PaystackWebhookRequest,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    settings: ServiceSettings = Depends(get_settings),
) -> WebhookAckResponse:
    reference = body.data.reference if body.data else None
    if not reference:
        raise ValidationError("No transaction reference provided in callback")

    logger.info("paystack_webhook_received", extra={"reference": reference, "event": body.event})
    outcome = await run_until_disconnect(
        request,
        lambda: service.verify(reference),
        enabled=settings.CANCEL_ON_CLIENT_DISCONNECT,
    )
    await service.reconcile(outcome, channel=WEBHOOK_CHANNEL)
    if outcome.is_success:
        return WebhookAckResponse(message="Callback received and transaction verified successfully")
    return WebhookAckResponse(message="Callback received, but transaction not successful")


@router.post("/verify-payment", response_model=VerifyPaymentResponse)
async def verify_payment(
    body: VerifyPaymentRequest,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    settings: ServiceSettings = Depends(get_settings),
) -> VerifyPaymentResponse:
    outcome = await run_until_disconnect(
        request,
        lambda: service.verify(body.reference),
        enabled=settings.CANCEL_ON_CLIENT_DISCONNECT,
    )
    await service.reconcile(outcome, channel=CLIENT_VERIFY_CHANNEL)
    if outcome.is_success:
        return VerifyPaymentResponse(status="success", message="Payment verified successfully.", data=outcome.raw)
    return VerifyPaymentResponse(status=outcome.provider_status, message="Payment not successful.", data=outcome.raw)
