"""
API input/output schema models.
"""

from .responses import ApiError, ApiResponse
from .users import UserCreate, UserPatch, UserRead, UserUpdate

__all__ = [
    "ApiError",
    "ApiResponse",
    "UserCreate",
    "UserPatch",
    "UserRead",
    "UserUpdate",
]
