"""Byte reversal building block for host programs."""

from .exceptions import AllocationError, ConfigError, TeeSecureError
from .reverser import TERMINATOR, reverse, reverse_terminated, reverse_text

__all__ = [
    "AllocationError",
    "ConfigError",
    "TERMINATOR",
    "TeeSecureError",
    "reverse",
    "reverse_terminated",
    "reverse_text",
]
