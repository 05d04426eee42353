"""
Domain package for the item batch processor.

Exports the item model and the per-item outcome types used by the processor.
Keep this package focused on data definitions.
"""

from item_processor.domain.models import STATUS_PROCESSED, STATUS_UNPROCESSED, Item
from item_processor.domain.outcomes import Absent, BatchReport, Failure, Outcome, Success

__all__ = [
    "Item",
    "STATUS_PROCESSED",
    "STATUS_UNPROCESSED",
    "Absent",
    "BatchReport",
    "Failure",
    "Outcome",
    "Success",
]
