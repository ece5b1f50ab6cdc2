from __future__ import annotations

from devkit.config import ServiceSettings, load_settings
from devkit.redis import create_redis_client, create_transaction_store
from payment_flow.reconciliation import ReconciliationGuard

from api.clients.geocoding_client import NominatimGeocodingClient
from api.clients.paystack_client import PaystackClient
from api.repositories.branch_repository import BranchRepository
from api.services.branch_service import BranchService
from api.services.payment_service import PaymentService, log_order_fulfillment

_settings = load_settings("pharmacy-payments-api")

_branch_repository = BranchRepository()
_geocoder = NominatimGeocodingClient(
    base_url=_settings.GEOCODER_BASE_URL,
    user_agent=_settings.GEOCODER_USER_AGENT,
    timeout_seconds=_settings.outbound_timeout_seconds,
)
_branch_service = BranchService(_branch_repository, _geocoder)

# single attempt: a retried SET NX can report a claim it already won as lost
_redis_client = create_redis_client(_settings.REDIS_URL, max_retries=1)
_transaction_store = create_transaction_store(
    _redis_client,
    ttl_seconds=_settings.TRANSACTION_STATE_TTL_SECONDS,
)
_reconciliation_guard = ReconciliationGuard(_transaction_store, on_success=log_order_fulfillment)
_payment_provider = PaystackClient(
    base_url=_settings.PAYSTACK_BASE_URL,
    secret_key=_settings.PAYSTACK_SECRET_KEY,
    timeout_seconds=_settings.outbound_timeout_seconds,
)
_payment_service = PaymentService(
    _payment_provider,
    _reconciliation_guard,
    callback_path=_settings.PAYMENT_CALLBACK_PATH,
)


def get_settings() -> ServiceSettings:
    return _settings


def get_branch_service() -> BranchService:
    return _branch_service


def get_payment_service() -> PaymentService:
    return _payment_service
