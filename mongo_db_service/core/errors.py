"""Error types for the user service.

Defines a small hierarchy of exceptions raised by the repository and service
layers to signal missing documents and uniqueness conflicts. The HTTP layer
maps each of them to an ``ApiError`` body.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base error for all service-level exceptions."""


class ResourceNotFoundError(ServiceError):
    """Raised when a requested document does not exist."""


class DuplicateResourceError(ServiceError):
    """Raised when a write would break a uniqueness rule (e.g. e-mail)."""
