"""
Notebox Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the note service and its startup.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       JSON error responses with the matching HTTP status code.
Who:   Raised by the service layer and the bootstrapper.

Exception Hierarchy:
    NoteboxError (base)
    ├── ValidationError  → 400 Bad Request
    ├── NotFoundError    → 404 Not Found
    ├── DatabaseError    → 500 Internal Server Error
    └── StartupError     → process exit (never reaches a client)
"""

from typing import Any, Dict, Optional


class NoteboxError(Exception):
    """
    Base exception for all Notebox application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteboxError):
    """
    Raised when a request body fails validation.

    Carries a list of `{"field": ..., "message": ...}` entries in `details`.
    HTTP: 400 Bad Request
    """

    def __init__(
        self,
        message: str = "Invalid note payload",
        details: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details or []


class NotFoundError(NoteboxError):
    """
    Raised when a requested note does not exist.

    The repository signals absence with None; the service layer converts that
    into this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        message: str = "Note not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NoteboxError):
    """
    Raised when a persistence call fails.

    The message is a generic per-operation string ("Error fetching notes").
    The original cause is recorded in `context` and in the server log only.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StartupError(NoteboxError):
    """
    Raised when the database stays unreachable for the whole retry budget.

    Fatal: the server entry point exits with a non-zero status instead of
    serving requests against an unconnected store.
    """

    def __init__(
        self,
        attempts: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["attempts"] = attempts
        super().__init__(
            message=f"Could not connect to the database after {attempts} attempts",
            context=ctx,
        )
        self.attempts = attempts
