"""
Exception handlers for the mongo-db-service server.

This package contains the exception handlers for the different error types
and a setup function to register them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
