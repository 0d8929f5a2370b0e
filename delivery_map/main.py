"""FastAPI entrypoint for the delivery coverage map backend."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from delivery_map.api.v1.api import api_router
from delivery_map.api.v1.endpoints.storefront import proxy_router
from delivery_map.core.config import settings
from delivery_map.core.logging import configure_logging
from delivery_map.db import session as db_session
from delivery_map.db.base import Base
from delivery_map.db.migrations import ensure_sqlite_schema

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")
# App Proxy forwards storefront requests here with its prefix stripped.
app.include_router(proxy_router, tags=["app-proxy"])


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    try:
        Base.metadata.create_all(bind=db_session.engine)
        ensure_sqlite_schema(db_session.engine)
    except SQLAlchemyError:
        logger.exception("[BOOTSTRAP] Schema setup failed; continuing startup.")
        return
    logger.info("[BOOTSTRAP] Schema ready (env=%s)", settings.app_env)


@app.get("/healthcheck")
def healthcheck() -> JSONResponse:
    """Liveness probe for monitoring and load balancers."""
    return JSONResponse(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.service_name,
        },
        headers={"Cache-Control": "no-cache"},
    )
