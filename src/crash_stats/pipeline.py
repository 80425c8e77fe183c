"""
Crash Statistics Pipeline Manager.
Folds every registered metric over the records in a single forward pass.
"""

from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from config import settings
from src.crash_stats.core import CrashRecord, CrashStatistics
from src.crash_stats.metrics.base import MetricStrategy
from src.crash_stats.metrics.breakdowns import (
    CategoryBreakdown,
    DayOfWeekBreakdown,
    HourBreakdown,
    IntersectionBreakdown,
    MonthBreakdown,
    SeverityBreakdown,
    TypeBreakdown,
)
from src.crash_stats.metrics.summary import CrashCount, CrashDateRange, InvolvementFlags


class CrashStatisticsPipeline:
    def __init__(self, top_n: Optional[int] = None):
        self.metrics: List[MetricStrategy] = []
        self.top_n = top_n or settings.TOP_N_INTERSECTIONS

    def add_metric(self, metric: MetricStrategy):
        self.metrics.append(metric)

    def run(self, records: Iterable[CrashRecord]) -> CrashStatistics:
        """
        records -> CrashStatistics

        Breakdown metrics land under `breakdowns`, the rest at the top level.
        A ValidationError from any record aborts the run.
        """
        for record in records:
            for metric in self.metrics:
                metric.update(record)

        results: Dict[str, Any] = {"breakdowns": {}, "top_n": self.top_n}
        for metric in self.metrics:
            if isinstance(metric, CategoryBreakdown):
                results["breakdowns"].update(metric.result())
            else:
                results.update(metric.result())

        stats = CrashStatistics(**results)
        logger.debug(
            f"Aggregated {stats.total_crashes} crashes into {len(stats.breakdowns)} breakdowns"
        )
        return stats


def build_default_pipeline(top_n: Optional[int] = None) -> CrashStatisticsPipeline:
    pipeline = CrashStatisticsPipeline(top_n=top_n)
    pipeline.add_metric(CrashCount())
    pipeline.add_metric(CrashDateRange())
    pipeline.add_metric(TypeBreakdown())
    pipeline.add_metric(SeverityBreakdown())
    pipeline.add_metric(MonthBreakdown())
    pipeline.add_metric(DayOfWeekBreakdown())
    pipeline.add_metric(HourBreakdown())
    pipeline.add_metric(IntersectionBreakdown(top_n=pipeline.top_n))
    pipeline.add_metric(InvolvementFlags())
    return pipeline


def compute_statistics(records: Iterable[CrashRecord], top_n: Optional[int] = None) -> CrashStatistics:
    return build_default_pipeline(top_n=top_n).run(records)
