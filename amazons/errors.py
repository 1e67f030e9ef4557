"""Exceptions raised by the Amazons engine.

``IllegalMoveError`` and ``InvalidConfigurationError`` are caller-visible
failures; both leave any committed game state untouched. ``SearchCanceled``
is the cooperative abort signal of the AI search and is caught where the
search was launched.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "AmazonsError",
    "IllegalMoveError",
    "InvalidConfigurationError",
    "SearchCanceled",
]


class AmazonsError(Exception):
    """Base class for engine failures.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        context: Extra details for logs and API responses
    """

    code: str = "AMAZONS_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class IllegalMoveError(AmazonsError, ValueError):
    """A move was applied that the rules do not allow."""

    code: str = "ILLEGAL_MOVE"


class InvalidConfigurationError(AmazonsError, ValueError):
    """Unsupported board size, difficulty, seat type or position diagram."""

    code: str = "INVALID_CONFIGURATION"


class SearchCanceled(Exception):
    """Raised out of the search when its cancellation flag is set.

    Not an ``AmazonsError``: it is not a failure and must not be caught by
    handlers meant for real errors.
    """

    def __init__(self, message: str = "search canceled") -> None:
        super().__init__(message)
