"""Engine modules for Household Dashboard integration.

Contains the pure computation engines:
- period_engine: Week/day/month boundaries and navigation
- bucket_engine: Grouping time-stamped records into calendar days
- status_engine: Display status derivation from due date and raw status
- aggregation_engine: Per-group counts, totals and completion tallies
- dashboard_engine: Per-view models composed from the above
"""

from .aggregation_engine import GroupSummary, aggregate, group_records, order_by_priority
from .bucket_engine import DayBucket, as_day_buckets, bucket_by_day, upcoming_records
from .dashboard_engine import DashboardEngine
from .period_engine import Period, compute_period, navigate
from .status_engine import StatusResult, classify

__all__ = [
    "DashboardEngine",
    "DayBucket",
    "GroupSummary",
    "Period",
    "StatusResult",
    "aggregate",
    "as_day_buckets",
    "bucket_by_day",
    "classify",
    "compute_period",
    "group_records",
    "navigate",
    "order_by_priority",
    "upcoming_records",
]
