"""
Upstream Errors
===============

Typed errors raised when an upstream API answers with a structured
``{"status": ..., "message": ...}`` error body.

Version: 0.1.0
"""


class UpstreamError(Exception):
    """An upstream API rejected a request with a status and message."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"UpstreamError(status={self.status!r}, message={self.message!r})"
