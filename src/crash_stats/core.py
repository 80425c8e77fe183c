"""
Core data structures for crash statistics.

Holds the fixed CSV schema, the normalized record container, the aggregate
statistics model and the error types shared by the loader and the pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Schema (header names with all whitespace removed) ---
CRASH_DATE_HEADER = "CrashDateandTime"
DAY_OF_WEEK_HEADER = "Dayoftheweek"
HOUR_OF_DAY_HEADER = "HourofDay"
CRASH_TYPE_HEADER = "CrashType"
CRASH_SEVERITY_HEADER = "CrashSeverity"
CRASH_LOCATION_HEADER = "CrashLocation"

# Involvement flag header -> counter name
INVOLVEMENT_FLAGS: Dict[str, str] = {
    "PropertyDamageIndicator": "includes_property_damage",
    "AlcoholInvolved": "includes_alcohol",
    "AggressiveDriverInvolved": "includes_aggressive_driver",
    "BicycleInvolved": "includes_bicycle",
    "CellPhoneInvolved": "includes_cell_phone",
    "AnimalInvolved": "includes_animal",
    "DrugInvolved": "includes_drugs",
}

DAY_OF_WEEK_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Breakdowns whose counts must add up to the total
FULL_BREAKDOWNS = ("type", "severity", "month", "day_of_week", "hour", "intersection")
TOP_INTERSECTIONS = "intersection_top10"


class CrashStatsError(Exception):
    """Base class for all crash statistics errors."""


class DecodeError(CrashStatsError):
    """The CSV source could not be read. `phase` tells where the load stopped."""

    STREAM_READ = "stream read"
    ROW_DECODE = "row decode"
    END_OF_STREAM = "end of stream"

    def __init__(self, message: str, phase: str, path: Optional[str] = None):
        super().__init__(f"[{phase}] {message}")
        self.phase = phase
        self.path = path


class ValidationError(CrashStatsError):
    """A normalized value lies outside the domain the aggregator understands."""

    def __init__(self, field_name: str, value: Any, message: str):
        super().__init__(f"{field_name}={value!r}: {message}")
        self.field_name = field_name
        self.value = value


def _is_ordinal(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


@dataclass(frozen=True)
class CrashRecord:
    """
    One normalized crash row.
    Values are already typed by the FieldNormalizer (bool / int / float / str).
    """

    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only view so the record cannot change after load
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, header: str) -> Any:
        return self.fields[header]

    def get(self, header: str, default: Any = None) -> Any:
        return self.fields.get(header, default)

    @property
    def crash_date(self) -> datetime:
        """Parsed crash timestamp."""
        raw = self.fields.get(CRASH_DATE_HEADER)
        try:
            ts = pd.Timestamp(str(raw)) if raw is not None else pd.NaT
        except ValueError as e:
            raise ValidationError(CRASH_DATE_HEADER, raw, f"unparseable timestamp ({e})") from e
        if pd.isna(ts):
            raise ValidationError(CRASH_DATE_HEADER, raw, "missing timestamp")
        return ts.to_pydatetime()

    @property
    def day_of_week(self) -> int:
        """Day-of-week ordinal, 1 = Sunday ... 7 = Saturday."""
        raw = self.fields.get(DAY_OF_WEEK_HEADER)
        if not _is_ordinal(raw) or not 1 <= raw <= 7:
            raise ValidationError(DAY_OF_WEEK_HEADER, raw, "expected an ordinal in 1..7")
        return int(raw)

    @property
    def hour_of_day(self) -> int:
        raw = self.fields.get(HOUR_OF_DAY_HEADER)
        if not _is_ordinal(raw) or not 0 <= raw <= 23:
            raise ValidationError(HOUR_OF_DAY_HEADER, raw, "expected an hour in 0..23")
        return int(raw)

    @property
    def crash_type(self) -> Any:
        return self.fields.get(CRASH_TYPE_HEADER, "")

    @property
    def crash_severity(self) -> Any:
        return self.fields.get(CRASH_SEVERITY_HEADER, "")

    @property
    def crash_location(self) -> Any:
        return self.fields.get(CRASH_LOCATION_HEADER, "")

    def flag(self, header: str) -> bool:
        """True only when the field was normalized to boolean True."""
        return self.fields.get(header) is True


class CrashStatistics(BaseModel):
    """
    Aggregate result of one pass over the crash records.
    Built once by the pipeline and treated as read-only afterwards.
    """

    model_config = ConfigDict(frozen=True)

    total_crashes: int = Field(0, ge=0, description="Number of records aggregated")
    earliest_crash_date: Optional[datetime] = None
    latest_crash_date: Optional[datetime] = None
    breakdowns: Dict[str, Dict[Any, int]] = Field(default_factory=dict)
    flag_counts: Dict[str, int] = Field(
        default_factory=dict, description="Involvement counters, zero counters omitted"
    )
    top_n: int = Field(10, gt=0, description="Size limit of the intersection ranking")

    @model_validator(mode="after")
    def check_consistency(self) -> "CrashStatistics":
        if (self.earliest_crash_date is None) != (self.latest_crash_date is None):
            raise ValueError("earliest and latest crash dates must be set together")
        if self.earliest_crash_date is not None and self.earliest_crash_date > self.latest_crash_date:
            raise ValueError("earliest crash date is after latest crash date")

        for name in FULL_BREAKDOWNS:
            counts = self.breakdowns.get(name)
            if counts is not None and sum(counts.values()) != self.total_crashes:
                raise ValueError(f"breakdown '{name}' does not sum to {self.total_crashes}")

        intersections = self.breakdowns.get("intersection", {})
        top = self.breakdowns.get(TOP_INTERSECTIONS, {})
        if len(top) > self.top_n:
            raise ValueError(f"{TOP_INTERSECTIONS} holds more than {self.top_n} entries")
        for location, count in top.items():
            if intersections.get(location) != count:
                raise ValueError(f"{TOP_INTERSECTIONS} entry {location!r} disagrees with intersection")
        return self

    @property
    def is_empty(self) -> bool:
        return self.total_crashes == 0

    def breakdown(self, name: str) -> Mapping[Any, int]:
        """Read-only view of one breakdown (empty when absent)."""
        return MappingProxyType(self.breakdowns.get(name, {}))

    def flag_count(self, name: str) -> int:
        """Counter value, 0 when the counter never fired."""
        return self.flag_counts.get(name, 0)
