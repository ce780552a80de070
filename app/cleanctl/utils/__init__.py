"""Utility modules for cleanctl.

This module exports commonly used utility functions.
"""

from cleanctl.utils.formatting import (
    busy,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from cleanctl.utils.units import format_bytes

__all__ = [
    "busy",
    "console",
    "err_console",
    "format_bytes",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
