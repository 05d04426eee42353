"""
Per-item outcomes and the batch report built from them.

Each unit of work resolves to exactly one outcome. Outcomes exist only inside a
single batch invocation and are never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Union

from item_processor.domain.models import Item


@dataclass(frozen=True)
class Success:
    """Status transitioned and persisted."""

    item: Item


@dataclass(frozen=True)
class Absent:
    """The id no longer resolves to an item; nothing was written."""

    item_id: int


@dataclass(frozen=True)
class Failure:
    """A store read or write raised for this id."""

    item_id: int
    cause: BaseException


Outcome = Union[Success, Absent, Failure]


@dataclass(frozen=True)
class BatchReport:
    """
    Aggregate of every outcome in one batch.

    `items` is the best-effort batch result; `absent_ids` and `failures` carry
    what that result silently drops.
    """

    items: List[Item] = field(default_factory=list)
    absent_ids: List[int] = field(default_factory=list)
    failures: List[Failure] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> "BatchReport":
        items: List[Item] = []
        absent_ids: List[int] = []
        failures: List[Failure] = []
        for outcome in outcomes:
            if isinstance(outcome, Success):
                items.append(outcome.item)
            elif isinstance(outcome, Absent):
                absent_ids.append(outcome.item_id)
            elif isinstance(outcome, Failure):
                failures.append(outcome)
            else:
                raise TypeError(f"Unexpected outcome type: {type(outcome).__name__}")
        return cls(items=items, absent_ids=absent_ids, failures=failures)

    @property
    def total(self) -> int:
        return len(self.items) + len(self.absent_ids) + len(self.failures)

    def as_dict(self) -> Dict[str, Any]:
        """JSON-friendly view used by the CLI."""
        return {
            "processed": [item.model_dump() for item in self.items],
            "absent_ids": list(self.absent_ids),
            "failures": [
                {
                    "item_id": failure.item_id,
                    "error_type": type(failure.cause).__name__,
                    "error": str(failure.cause),
                }
                for failure in self.failures
            ],
            "total": self.total,
        }


__all__ = ["Absent", "BatchReport", "Failure", "Outcome", "Success"]
