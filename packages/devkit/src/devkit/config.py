from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    REDIS_URL: str | None = None
    TRANSACTION_STATE_TTL_SECONDS: int = 7 * 24 * 3600

    PAYSTACK_SECRET_KEY: str = ""
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYMENT_CALLBACK_PATH: str = "/paystack-callback"

    GEOCODER_BASE_URL: str = "https://nominatim.openstreetmap.org"
    GEOCODER_USER_AGENT: str = "PharmacyBranchLocator/1.0 (ops@pharmacy.example)"

    OUTBOUND_TIMEOUT_MS: int = 10_000
    CANCEL_ON_CLIENT_DISCONNECT: bool = True

    @property
    def outbound_timeout_seconds(self) -> float:
        return self.OUTBOUND_TIMEOUT_MS / 1000.0


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
