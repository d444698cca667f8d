"""
TicketDesk - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .api import auth_router, tickets_router, dashboard_router
from .core import SessionManager, TicketStore
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .storage import StorageInterface, create_storage
from .utils.clock import Clock, utc_now

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage: {settings.storage_type} ({settings.local_storage_path})")
    logger.info(f"Session state: {app.state.session_manager.state.value}")
    logger.info(f"Debug mode: {settings.debug}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app(storage: Optional[StorageInterface] = None, clock: Clock = utc_now) -> FastAPI:
    """
    Build the application with one session manager and one ticket store.

    Args:
        storage: Storage backend (defaults to the configured one)
        clock: Time source shared by the session manager and ticket store

    Returns:
        FastAPI application
    """
    if storage is None:
        storage = create_storage(settings.storage_type, settings.local_storage_path)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Support ticket tracker with demo login sessions",
        lifespan=lifespan
    )

    session_manager = SessionManager(storage, clock=clock)
    session_manager.start()
    ticket_store = TicketStore(storage, clock=clock)
    ticket_store.load()

    application.state.session_manager = session_manager
    application.state.ticket_store = ticket_store

    # Configure CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.log_api_requests:
        application.add_middleware(RequestLoggingMiddleware)

    application.include_router(auth_router)
    application.include_router(tickets_router)
    application.include_router(dashboard_router)

    @application.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "authenticated": application.state.session_manager.is_authenticated(),
        }

    @application.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "storage": settings.storage_type,
            "version": settings.app_version
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ticketdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
