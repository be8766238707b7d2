from functools import lru_cache
import logging
from typing import Callable

from upify.core.config import settings
from upify.application.ports.catalog_source import CatalogSourcePort
from upify.application.ports.order_gateway import OrderGatewayPort
from upify.application.ports.pricing import PricingPort
from upify.application.ports.session_store import SessionStorePort
from upify.application.use_cases.order_session import OrderSession
from upify.infrastructure.auth.supabase_session import SupabaseAuthSession
from upify.infrastructure.catalog.json_catalog import JsonCatalogSource
from upify.infrastructure.catalog.memory_catalog import InMemoryCatalogSource
from upify.infrastructure.catalog.supabase_catalog import SupabaseCatalogSource
from upify.infrastructure.http.order_api_client import OrderApiClient
from upify.infrastructure.notifications.notification_queue import NotificationQueue
from upify.infrastructure.pricing.unknown_pricing import UnknownPricing
from upify.infrastructure.store.memory_session_store import MemorySessionStore


_session_store: MemorySessionStore | None = None


@lru_cache
def get_catalog_source() -> CatalogSourcePort:
    logger = logging.getLogger(__name__)
    if settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY:
        logger.info("Using SupabaseCatalogSource")
        return SupabaseCatalogSource()

    if settings.ENV.lower() in {"dev", "local"}:
        if settings.CATALOG_JSON_PATH:
            logger.info("Using JsonCatalogSource (%s)", settings.CATALOG_JSON_PATH)
            return JsonCatalogSource(settings.CATALOG_JSON_PATH)
        logger.info("Using empty InMemoryCatalogSource (Supabase not configured, ENV=dev/local)")
        return InMemoryCatalogSource()

    raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required to load the catalog.")


@lru_cache
def get_order_gateway() -> OrderGatewayPort:
    return OrderApiClient()


def get_pricing() -> PricingPort:
    return UnknownPricing()


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore()
    return _session_store


def new_order_session() -> OrderSession:
    logging.getLogger(__name__).info(
        "UPIFY_API_BASE present=%s", bool(settings.UPIFY_API_BASE)
    )
    return OrderSession(
        catalog_source=get_catalog_source(),
        notifier=NotificationQueue(),
        gateway=get_order_gateway(),
        pricing=get_pricing(),
        api_base=settings.UPIFY_API_BASE,
    )


def get_session_factory() -> Callable[[], OrderSession]:
    return new_order_session


def get_auth_session_factory() -> Callable[[], SupabaseAuthSession]:
    return SupabaseAuthSession
