"""Middleware package for the FastAPI application."""

from newsdesk.middleware.auth import AuthMiddleware
from newsdesk.middleware.request_id import RequestIdMiddleware

__all__ = ["AuthMiddleware", "RequestIdMiddleware"]
