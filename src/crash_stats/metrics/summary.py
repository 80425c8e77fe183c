"""
Scalar summary metrics (Total, Date Range, Involvement Flags)
"""

from collections import Counter
from typing import Any, Dict

from .base import MetricStrategy
from src.crash_stats.core import INVOLVEMENT_FLAGS, CrashRecord


class CrashCount(MetricStrategy):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.total = 0

    def update(self, record: CrashRecord) -> None:
        self.total += 1

    def result(self) -> Dict[str, Any]:
        return {"total_crashes": self.total}


class CrashDateRange(MetricStrategy):
    """Earliest / latest crash timestamp (None until a record is seen)"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.earliest = None
        self.latest = None

    def update(self, record: CrashRecord) -> None:
        crash_date = record.crash_date
        if self.earliest is None or crash_date < self.earliest:
            self.earliest = crash_date
        if self.latest is None or crash_date > self.latest:
            self.latest = crash_date

    def result(self) -> Dict[str, Any]:
        return {
            "earliest_crash_date": self.earliest,
            "latest_crash_date": self.latest,
        }


class InvolvementFlags(MetricStrategy):
    """
    One counter per yes/no involvement column.
    Only fields normalized to True count; counters that never fire are left out.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.counts: Counter = Counter()

    def update(self, record: CrashRecord) -> None:
        for header, counter_name in INVOLVEMENT_FLAGS.items():
            if record.flag(header):
                self.counts[counter_name] += 1

    def result(self) -> Dict[str, Any]:
        return {"flag_counts": dict(self.counts)}
