"""
auth/errors.py -- Domain exceptions raised by the auth service.

The service layer stays free of HTTP types; api/main.py registers one
exception handler that maps each subclass to its status code and error code.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class. status_code and code are read by the API exception handler."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AuthError):
    status_code = 400
    code = "bad_request"


class UnauthorizedError(AuthError):
    status_code = 401
    code = "unauthorized"


class NotFoundError(AuthError):
    status_code = 404
    code = "not_found"


class ConflictError(AuthError):
    status_code = 409
    code = "conflict"
