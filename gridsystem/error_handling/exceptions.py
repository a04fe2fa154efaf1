"""
Custom exception hierarchy for grid system error handling.

Every failure in the core is a deterministic function of its input, so the
hierarchy only categorizes errors; nothing here is retried.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


class GridSystemError(Exception):
    """Base exception for all grid system errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None
        }


class InvalidConfigurationError(GridSystemError):
    """Malformed or contradictory input to a constructor or setter."""

    def __init__(
        self,
        message: str,
        expected: Any = None,
        received: Any = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.expected = expected
        self.received = received
        self.details.update({
            "expected": expected,
            "received": received
        })


class DuplicateEntityError(InvalidConfigurationError):
    """An entity was provided more than once where it must be unique."""

    def __init__(
        self,
        message: str,
        entity_type: str,
        key: Any,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.entity_type = entity_type
        self.key = key
        self.details.update({
            "entity_type": entity_type,
            "key": key
        })


class OverlappingRangeError(GridSystemError):
    """A new grid map's activation range intersects an existing one."""

    def __init__(
        self,
        message: str,
        new_range: Tuple[Any, Any],
        existing_range: Tuple[Any, Any],
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.new_range = new_range
        self.existing_range = existing_range
        self.details.update({
            "new_range": list(new_range),
            "existing_range": list(existing_range)
        })


class NotFoundError(GridSystemError):
    """A lookup targeted something that was never registered."""

    def __init__(
        self,
        message: str,
        entity_type: str,
        key: Any,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.entity_type = entity_type
        self.key = key
        self.details.update({
            "entity_type": entity_type,
            "key": key
        })
