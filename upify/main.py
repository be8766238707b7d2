"""
Upify order composer service.

Customers open an order session, pick a category and service from the catalog,
fill in link and quantity, and submit the order to the Upify order API.
"""

import logging

from fastapi import FastAPI

from upify.api.v1.auth import router as auth_router
from upify.api.v1.sessions import router as sessions_router
from upify.core.config import settings


class ContextFormatter(logging.Formatter):
    """Appends order context (session, category, service, status, reason) to each line."""

    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "category", "service_id", "status", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.info(
    "Starting order composer",
    extra={
        "status": f"env={settings.ENV} api_base={bool(settings.UPIFY_API_BASE)} "
        f"supabase={bool(settings.SUPABASE_URL)}",
    },
)

app = FastAPI(title="Upify Order Composer", version="1.0.0")

app.include_router(sessions_router, prefix="/v1/sessions", tags=["orders"])
app.include_router(auth_router, prefix="/v1/auth", tags=["auth"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
