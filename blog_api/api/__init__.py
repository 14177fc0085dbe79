"""API package exports."""

from blog_api.api.auth import router as auth_router
from blog_api.api.middleware import CorrelationIdMiddleware
from blog_api.api.routes import router

__all__ = ["auth_router", "router", "CorrelationIdMiddleware"]
