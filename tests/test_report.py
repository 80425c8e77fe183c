from datetime import datetime

import pytest

from src.crash_stats.core import CrashStatistics
from src.crash_stats.pipeline import compute_statistics
from src.crash_stats.report import DIVIDER, format_date, format_percent, print_report, render_report


@pytest.mark.parametrize(
    "value, total, expected",
    [
        (1, 3, "33.33%"),
        (2, 3, "66.67%"),
        (1, 2, "50%"),
        (1, 8, "12.5%"),
        (3, 3, "100%"),
        (0, 5, "0%"),
        (25, 2, "1,250%"),
        (1, 800, "0.13%"),
        (1, 160, "0.63%"),
    ],
)
def test_format_percent(value, total, expected):
    assert format_percent(value, total) == expected


def test_format_date():
    assert format_date(datetime(2020, 1, 5, 10, 0)) == "Jan 5, 2020"
    assert format_date(datetime(2023, 12, 31)) == "Dec 31, 2023"


def section(lines, title):
    """Lines between a section title and the next divider."""
    start = lines.index(title) + 1
    end = lines.index(DIVIDER, start)
    return lines[start:end]


@pytest.fixture
def stats(make_record):
    return compute_statistics(
        [
            make_record(date="2020/03/02 08:00:00", day="2", hour="3", crash_type="Sideswipe",
                        location="Oak St & Elm St", AlcoholInvolved="Yes"),
            make_record(date="2020/01/05 10:00:00", day="7", hour="4", crash_type="Angle",
                        location="Elm St & Oak St"),
            make_record(date="2020/12/24 23:00:00", day="1", hour="22", crash_type="Angle",
                        location="Main St & 1st Ave", BicycleInvolved="yes"),
        ]
    )


def test_header_sections(stats):
    lines = render_report(stats)

    assert lines[0] == DIVIDER
    assert lines[1] == "Disclaimer:"
    assert "between Jan 5, 2020 and Dec 24, 2020." in lines[2]
    assert "City of Grand Rapids" in lines[3]
    assert "Total Crashes: 3" in lines
    assert lines.count(DIVIDER) == 9
    assert len(DIVIDER) == 64 and set(DIVIDER) == {"="}


def test_alphabetical_sections(stats):
    lines = render_report(stats)

    assert section(lines, "By Type:") == ["\tAngle - 2 (66.67%)", "\tSideswipe - 1 (33.33%)"]
    assert section(lines, "Most Dangerous Intersections:") == [
        "\t1st Ave & Main St - 1 (33.33%)",
        "\tElm St & Oak St - 2 (66.67%)",
    ]


def test_calendar_sections(stats):
    lines = render_report(stats)

    assert section(lines, "By Month:") == [
        "\tJanuary - 1 (33.33%)",
        "\tMarch - 1 (33.33%)",
        "\tDecember - 1 (33.33%)",
    ]
    assert section(lines, "By Day of Week:") == [
        "\tSunday - 1 (33.33%)",
        "\tMonday - 1 (33.33%)",
        "\tSaturday - 1 (33.33%)",
    ]
    assert section(lines, "By Hour:") == [
        "\t0 - 1 (33.33%)",
        "\t18 - 1 (33.33%)",
        "\t23 - 1 (33.33%)",
    ]


def test_misc_section_reports_absent_counters_as_zero(stats):
    lines = render_report(stats)
    misc = lines[lines.index("By Misc:") + 1:]

    assert misc == [
        "\tAggressive Driving - 0 (0%)",
        "\tInvolved Alcohol - 1 (33.33%)",
        "\tInvolved Cell Phone - 0 (0%)",
        "\tInvolved Drugs - 0 (0%)",
        "\tProperty Damage - 0 (0%)",
        "\tWith Animal - 0 (0%)",
        "\tWith Cyclist - 1 (33.33%)",
    ]


def test_numeric_and_text_labels_sort_together():
    stats = CrashStatistics(
        total_crashes=2,
        earliest_crash_date=datetime(2021, 6, 1),
        latest_crash_date=datetime(2021, 6, 2),
        breakdowns={"type": {"Angle": 1, 7: 1}},
    )

    lines = render_report(stats)

    assert section(lines, "By Type:") == ["\t7 - 1 (50%)", "\tAngle - 1 (50%)"]


def test_empty_statistics_report():
    assert render_report(compute_statistics([])) == [DIVIDER, "No crash records found.", DIVIDER]


def test_print_report_writes_to_stdout(stats, capsys):
    print_report(stats)

    out = capsys.readouterr().out
    assert out.startswith(DIVIDER + "\n")
    assert "Total Crashes: 3\n" in out
