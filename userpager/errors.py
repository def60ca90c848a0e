"""
Error taxonomy shared by the gateway and the client.

A missing user is not an error: lookups return ``None``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class UserPagerError(Exception):
    """Base class for errors raised by this package."""


class ValidationError(UserPagerError):
    """Malformed gateway request: unknown operation, missing or mistyped arguments."""

    code = "BAD_USER_INPUT"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_graphql(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"message": self.message, "extensions": {"code": self.code}}
        if self.details:
            error["extensions"]["details"] = self.details
        return error


class TransportError(UserPagerError):
    """The request never produced a usable response (connection, timeout, HTTP status)."""


__all__ = ["TransportError", "UserPagerError", "ValidationError"]
