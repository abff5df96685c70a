"""
Custom exceptions for the storefront core.

These exceptions represent domain-level errors. None of them escapes the
public operations of the cart, catalog, search and sort components: they are
raised internally, caught at the component boundary and logged.
"""

from typing import Any, Optional


class StorefrontException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageDecodeException(StorefrontException):
    """Raised when a persisted value is missing or cannot be decoded."""

    def __init__(self, key: str, reason: Optional[str] = None):
        message = f"Cannot decode stored value for '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"key": key, "reason": reason})


class StorageWriteException(StorefrontException):
    """Raised when the persisted store refuses a write."""

    def __init__(self, key: str, reason: Optional[str] = None):
        message = f"Cannot write stored value for '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"key": key, "reason": reason})


class ValidationException(StorefrontException):
    """Raised when a raw record or an argument fails validation."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )


class LookupMissException(StorefrontException):
    """Raised when a cart operation targets a line item that does not exist."""

    def __init__(self, target: Any):
        target_type = "index" if isinstance(target, int) else "id"
        super().__init__(
            message=f"No cart line item for {target_type}: {target}",
            details={"target": str(target), "target_type": target_type},
        )
