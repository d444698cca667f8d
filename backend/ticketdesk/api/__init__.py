"""API module."""

from .auth import router as auth_router
from .tickets import router as tickets_router
from .dashboard import router as dashboard_router

__all__ = ['auth_router', 'tickets_router', 'dashboard_router']
