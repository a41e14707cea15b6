"""Utility modules for junkctl.

This module exports commonly used utility functions.
"""

from junkctl.utils.formatting import (
    console,
    create_file_table,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_file_table",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
