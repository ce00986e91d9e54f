"""Exception types for tee_secure."""

from typing import Optional


class TeeSecureError(Exception):
    """Base exception for tee_secure errors"""
    pass


class AllocationError(TeeSecureError):
    """Raised when the output buffer cannot be allocated"""

    def __init__(self, length: int, limit: Optional[int] = None):
        self.length = length
        self.limit = limit
        if limit is None:
            message = f"cannot allocate {length} bytes for reversed output"
        else:
            message = f"cannot allocate {length} bytes for reversed output (limit {limit})"
        super().__init__(message)


class ConfigError(TeeSecureError):
    """Raised when configuration values or files are invalid"""
    pass
