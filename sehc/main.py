import logging
import time

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sehc.core.config import settings
from sehc.core.database import get_db
from sehc.core.errors import register_exception_handlers
from sehc.core.logging_config import setup_logging
from sehc.routers import (
    auth_router,
    clients_router,
    inventory_router,
    services_router,
    vehicles_router,
)

logger = logging.getLogger("sehc.main")
http_logger = logging.getLogger("sehc.http")


def create_app() -> FastAPI:
    setup_logging(settings.log_level, settings.log_dir or None)

    app = FastAPI(
        title="SEHC Backend",
        description="Honda specialised workshop: clients, vehicles, inventory and service records.",
        version="1.0.0",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            http_logger.info(
                "%s %s -> %s (%.1f ms)", request.method, request.url.path, status_code, elapsed_ms
            )

    register_exception_handlers(app)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.app_env}

    @app.get("/db-check")
    def db_check(db: Session = Depends(get_db)) -> dict[str, str]:
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.exception("Database connectivity check failed")
            raise HTTPException(status_code=500, detail="Database connection error") from exc
        return {"database": "ok"}

    for router in (auth_router, clients_router, vehicles_router, inventory_router, services_router):
        app.include_router(router, prefix=settings.api_prefix)

    return app


app = create_app()
