"""
Utilities package for Cargo Ledger.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from cargo_ledger.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "JsonFormatter",
]
