"""Common runtime devkit for service infrastructure concerns."""

from devkit.config import ServiceSettings, load_settings
from devkit.observability import configure_otel, configure_probe_access_log_filter
from devkit.redis import AsyncRedisManager, create_redis_client, create_transaction_store

__all__ = [
    "AsyncRedisManager",
    "ServiceSettings",
    "configure_otel",
    "configure_probe_access_log_filter",
    "create_redis_client",
    "create_transaction_store",
    "load_settings",
]
