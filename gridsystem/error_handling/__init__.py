"""
Error handling for the grid system core.

All validation is eager; a failed operation never leaves partial state behind.
"""

from .exceptions import (
    GridSystemError,
    InvalidConfigurationError,
    DuplicateEntityError,
    OverlappingRangeError,
    NotFoundError,
)

__all__ = [
    "GridSystemError",
    "InvalidConfigurationError",
    "DuplicateEntityError",
    "OverlappingRangeError",
    "NotFoundError",
]
