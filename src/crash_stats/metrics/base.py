"""
Base interface for all crash statistics.
Strategy Pattern implementation.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from src.crash_stats.core import CrashRecord


class MetricStrategy(ABC):
    """Parent of every statistic folded by the pipeline"""

    # Some metrics take options (e.g. ranking size)
    def __init__(self, **kwargs):
        self.params = kwargs

    @abstractmethod
    def update(self, record: CrashRecord) -> None:
        """Fold one record into the running state"""
        pass

    @abstractmethod
    def result(self) -> Dict[str, Any]:
        """Return the finished statistic as a dict fragment of CrashStatistics"""
        pass
