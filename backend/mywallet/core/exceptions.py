"""Custom exceptions for the MyWallet application."""

from __future__ import annotations


class MyWalletError(Exception):
    """Base exception for all MyWallet errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(MyWalletError):
    """Raised when input validation fails.

    Carries every failed rule so the caller can report them together.
    """

    status_code = 422

    def __init__(self, errors: list[str] | str, details: dict | None = None) -> None:
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("; ".join(errors), details)
        self.errors = list(errors)


class ConflictError(MyWalletError):
    """Raised when a user with the same name or email already exists."""

    status_code = 409


class AuthError(MyWalletError):
    """Raised on wrong credentials or a missing/invalid session token."""

    status_code = 401


class NotFoundError(MyWalletError):
    """Raised when an identity is not found."""

    status_code = 404


class StoreError(MyWalletError):
    """Raised when the underlying persistence layer fails."""

    pass


class ConfigurationError(MyWalletError):
    """Raised when settings cannot be turned into a working backend."""

    pass
