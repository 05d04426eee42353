"""
Utilities package for the item batch processor.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from item_processor.utils.logging import configure_logging, get_logger
from item_processor.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
