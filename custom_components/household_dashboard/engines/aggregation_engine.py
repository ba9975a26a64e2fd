"""Aggregation Engine - per-group counts, totals and completion tallies.

One pass over a record list produces a summary per key. Used for:
- per-category shopping list sections
- per-assignee chore completion and points totals
- per-category bill totals and the summary card counts

Design Principles:
    - Stateless: accessors are passed in, records are never mutated
    - Single pass: each record is visited once
    - Ordering is not the aggregator's concern; `order_by_priority` applies a
      display order afterwards

⚠️ ENGINE PURITY: NO `homeassistant.*` imports allowed.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from ..utils.math_utils import round_amount

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
RecordT = TypeVar("RecordT")


@dataclass(slots=True)
class GroupSummary:
    """Aggregate for one group key.

    Attributes:
        key: Group key
        count: Number of records in the group
        total_amount: Sum of the amount accessor, None when no accessor given
        completed_count: Records matching the completion predicate, None when
            no predicate given
    """

    key: Any
    count: int = 0
    total_amount: float | None = None
    completed_count: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "count": self.count,
            "total_amount": self.total_amount,
            "completed_count": self.completed_count,
        }


def aggregate(
    records: Iterable[RecordT],
    key_fn: Callable[[RecordT], K],
    amount_fn: Callable[[RecordT], float] | None = None,
    completed_fn: Callable[[RecordT], bool] | None = None,
) -> dict[K, GroupSummary]:
    """Summarize records per group key.

    Args:
        records: Records to aggregate
        key_fn: Returns the group key for a record
        amount_fn: Optional numeric accessor summed per group. To total only
            some records (e.g. points of completed chores) return 0 for the
            others.
        completed_fn: Optional predicate counted per group

    Returns:
        Mapping key → GroupSummary. Only keys present in the input appear.

    Example:
        >>> summary = aggregate(
        ...     chores,
        ...     key_fn=lambda c: c["assigned_to"],
        ...     amount_fn=lambda c: c["points"] if c["status"] == "completed" else 0,
        ...     completed_fn=lambda c: c["status"] == "completed",
        ... )
        >>> summary["Zoe"].count, summary["Zoe"].total_amount
        (2, 5.0)
    """
    groups: dict[K, GroupSummary] = {}

    for record in records:
        key = key_fn(record)
        group = groups.get(key)
        if group is None:
            group = GroupSummary(
                key=key,
                total_amount=0.0 if amount_fn is not None else None,
                completed_count=0 if completed_fn is not None else None,
            )
            groups[key] = group

        group.count += 1
        if amount_fn is not None:
            group.total_amount = round_amount(
                (group.total_amount or 0.0) + float(amount_fn(record))
            )
        if completed_fn is not None and completed_fn(record):
            group.completed_count = (group.completed_count or 0) + 1

    return groups


def group_records(
    records: Iterable[RecordT], key_fn: Callable[[RecordT], K]
) -> dict[K, list[RecordT]]:
    """Partition records by key, keeping input order within each group."""
    groups: dict[K, list[RecordT]] = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return groups


def order_by_priority(mapping: Mapping[K, V], priority: Sequence[K]) -> dict[K, V]:
    """Reorder a mapping for display.

    Keys listed in `priority` come first, in that order. Keys present in the
    mapping but not in `priority` follow in their existing order. Priority
    keys missing from the mapping are skipped, so empty groups never appear.

    Example:
        >>> order_by_priority({"other": 1, "dairy": 2, "produce": 3},
        ...                   ["produce", "dairy", "meat"])
        {"produce": 3, "dairy": 2, "other": 1}
    """
    ordered: dict[K, V] = {key: mapping[key] for key in priority if key in mapping}
    for key, value in mapping.items():
        if key not in ordered:
            ordered[key] = value
    return ordered
