from typing import Any

from pydantic import BaseModel, ConfigDict


class InitiatePaymentRequest(BaseModel):
    email: str | None = None
    amount: int | float | None = None
    currency: str | None = None
    frontendCallbackOrigin: str | None = None


class WebhookData(BaseModel):
    model_config = ConfigDict(extra="allow")

    reference: str | None = None


class PaystackWebhookRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: str | None = None
    data: WebhookData | None = None


class VerifyPaymentRequest(BaseModel):
    reference: str | None = None


class VerifyPaymentResponse(BaseModel):
    status: str
    message: str
    data: dict[str, Any]


class WebhookAckResponse(BaseModel):
    message: str
