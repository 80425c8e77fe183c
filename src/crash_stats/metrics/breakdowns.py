"""
Categorical / temporal breakdowns (Type, Severity, Month, Day of Week, Hour, Intersection)
"""

from collections import Counter
from typing import Any, Dict

from .base import MetricStrategy
from src.crash_stats.core import (
    DAY_OF_WEEK_NAMES,
    MONTH_NAMES,
    TOP_INTERSECTIONS,
    CrashRecord,
)

# Reporting day starts at 4am: hour 4 -> bucket 0, hour 3 wraps to bucket 23
DAY_START_HOUR = 4


def shift_hour(hour_of_day: int) -> int:
    return (hour_of_day - DAY_START_HOUR) % 24


class CategoryBreakdown(MetricStrategy):
    """Counts records per label; subclasses decide the label"""

    name = ""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.counts: Counter = Counter()

    def key(self, record: CrashRecord) -> Any:
        raise NotImplementedError

    def update(self, record: CrashRecord) -> None:
        self.counts[self.key(record)] += 1

    def result(self) -> Dict[str, Any]:
        return {self.name: dict(self.counts)}


class TypeBreakdown(CategoryBreakdown):
    name = "type"

    def key(self, record: CrashRecord) -> Any:
        return record.crash_type


class SeverityBreakdown(CategoryBreakdown):
    name = "severity"

    def key(self, record: CrashRecord) -> Any:
        return record.crash_severity


class MonthBreakdown(CategoryBreakdown):
    name = "month"

    def key(self, record: CrashRecord) -> Any:
        return MONTH_NAMES[record.crash_date.month - 1]


class DayOfWeekBreakdown(CategoryBreakdown):
    name = "day_of_week"

    def key(self, record: CrashRecord) -> Any:
        return DAY_OF_WEEK_NAMES[record.day_of_week - 1]


class HourBreakdown(CategoryBreakdown):
    """
    Shifted hour bucket: the reporting day starts at 4am (hour 4 -> 0, hour 3 -> 23).
    This is (hour - 4) % 24, not the (hour + 4) % 24 of the upstream script,
    which would put 4am in bucket 8.
    """

    name = "hour"

    def key(self, record: CrashRecord) -> Any:
        return shift_hour(record.hour_of_day)


class IntersectionBreakdown(CategoryBreakdown):
    """
    Crashes per canonical intersection, plus the top-N ranking.
    Ties in the ranking keep first-seen order (stable sort on count only).
    """

    name = "intersection"

    def key(self, record: CrashRecord) -> Any:
        return record.crash_location

    def top(self) -> Dict[Any, int]:
        top_n = self.params.get("top_n", 10)
        ranked = sorted(self.counts.items(), key=lambda item: item[1], reverse=True)
        return dict(ranked[:top_n])

    def result(self) -> Dict[str, Any]:
        return {self.name: dict(self.counts), TOP_INTERSECTIONS: self.top()}
