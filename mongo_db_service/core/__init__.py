"""
Core utilities and configuration for mongo-db-service.

This package provides core functionality including logging configuration,
the error hierarchy, the MongoDB data layer and the API schema models.
"""

from mongo_db_service.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
