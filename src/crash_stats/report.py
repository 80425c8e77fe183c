"""
Console report for CrashStatistics.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, List, Mapping, Optional

from src.crash_stats.core import DAY_OF_WEEK_NAMES, MONTH_NAMES, TOP_INTERSECTIONS, CrashStatistics

DIVIDER = "=" * 64
CENT = Decimal("0.01")
PROVENANCE_NOTE = (
    "Data is sourced from the City of Grand Rapids, provided at "
    "https://www.grandrapidsmi.gov/GRData/Police-Data. Data is not updated live, "
    "but stored in a local file which is manually downloaded."
)

# (label, counter name) in display order
MISC_LINES = [
    ("Aggressive Driving", "includes_aggressive_driver"),
    ("Involved Alcohol", "includes_alcohol"),
    ("Involved Cell Phone", "includes_cell_phone"),
    ("Involved Drugs", "includes_drugs"),
    ("Property Damage", "includes_property_damage"),
    ("With Animal", "includes_animal"),
    ("With Cyclist", "includes_bicycle"),
]


def format_percent(value: int, total: int) -> str:
    """12 / 36 -> '33.33%', 1 / 2 -> '50%', 1 / 800 -> '0.13%' (halves round up)"""
    percent = Decimal(repr(100.0 * value / total)).quantize(CENT, rounding=ROUND_HALF_UP)
    text = f"{percent:,.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def format_date(value: datetime) -> str:
    """-> 'Jan 5, 2020'"""
    return f"{value:%b} {value.day}, {value.year}"


def alphabetical(label: Any) -> Any:
    return str(label)


def calendar_order(label: Any) -> Any:
    return MONTH_NAMES.index(label)


def week_order(label: Any) -> Any:
    return DAY_OF_WEEK_NAMES.index(label)


def stat_line(title: str, value: int, total: int) -> str:
    return f"{title} - {value} ({format_percent(value, total)})"


def breakdown_lines(
    title: str,
    breakdown: Mapping[Any, int],
    total: int,
    sort_key: Optional[Callable[[Any], Any]] = None,
) -> List[str]:
    labels = list(breakdown)
    if sort_key is not None:
        labels = sorted(labels, key=sort_key)
    return [title] + [stat_line(f"\t{label}", breakdown[label], total) for label in labels]


def render_report(stats: CrashStatistics) -> List[str]:
    """CrashStatistics -> report lines (no trailing newlines)"""
    lines = [DIVIDER]
    if stats.is_empty:
        # No dates and no denominator for percentages
        return lines + ["No crash records found.", DIVIDER]

    total = stats.total_crashes
    lines += [
        "Disclaimer:",
        "This analysis provides crash information for Grand Rapids between "
        f"{format_date(stats.earliest_crash_date)} and {format_date(stats.latest_crash_date)}.",
        PROVENANCE_NOTE,
        DIVIDER,
        f"Total Crashes: {total}",
        DIVIDER,
    ]

    sections = [
        ("Most Dangerous Intersections:", TOP_INTERSECTIONS, alphabetical),
        ("By Type:", "type", alphabetical),
        ("By Severity:", "severity", alphabetical),
        ("By Month:", "month", calendar_order),
        ("By Day of Week:", "day_of_week", week_order),
        ("By Hour:", "hour", int),
    ]
    for title, name, sort_key in sections:
        lines += breakdown_lines(title, stats.breakdown(name), total, sort_key)
        lines.append(DIVIDER)

    lines.append("By Misc:")
    for label, counter_name in MISC_LINES:
        lines.append(stat_line(f"\t{label}", stats.flag_count(counter_name), total))
    return lines


def print_report(stats: CrashStatistics) -> None:
    for line in render_report(stats):
        print(line)
