"""FastAPI application: main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from erp_console.bootstrap import Container, build_container
from erp_console.config import get_settings
from erp_console.core.exceptions import AppError, global_exception_handler
from erp_console.core.logging import configure_logging
from erp_console.core.middleware import setup_middleware
from erp_console.interfaces.api.auth import router as auth_router
from erp_console.interfaces.api.categories import router as categories_router
from erp_console.interfaces.api.clients import router as clients_router
from erp_console.interfaces.api.dashboard import router as dashboard_router
from erp_console.interfaces.api.orders import router as orders_router
from erp_console.interfaces.api.products import router as products_router
from erp_console.interfaces.api.reports import router as reports_router
from erp_console.interfaces.api.suppliers import router as suppliers_router
from erp_console.interfaces.api.transactions import router as transactions_router

logger = structlog.get_logger(__name__)

VERSION = "1.0.0"


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the API; tests hand in a prepared container instead of opening storage."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        if container is None:
            configure_logging()
            app.state.container = build_container(settings)
        else:
            app.state.container = container

        session = app.state.container.auth.restore_session()
        logger.info(
            "ERP Console started",
            env=settings.ENVIRONMENT,
            authenticated=session.is_authenticated,
        )
        yield
        logger.info("ERP Console stopped")

    app = FastAPI(
        title="ERP Console",
        description="Inventory, orders and finance API",
        version=VERSION,
        lifespan=lifespan,
    )

    setup_middleware(app)

    app.add_exception_handler(AppError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
        auth_router,
        products_router,
        categories_router,
        clients_router,
        suppliers_router,
        orders_router,
        transactions_router,
        reports_router,
        dashboard_router,
    ):
        app.include_router(router)

    @app.get("/")
    def root():
        return {"name": "ERP Console", "version": VERSION, "status": "running", "docs": "/docs"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
