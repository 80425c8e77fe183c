import sys

import pytest
from loguru import logger

from config import settings
from src.crash_stats.core import CrashRecord
from src.crash_stats.processing import FieldNormalizer

HEADER = [
    "Crash Date and Time",
    "Day of the week",
    "Hour of Day",
    "Crash Type",
    "Crash Severity",
    "Crash Location",
    "Property Damage Indicator",
    "Alcohol Involved",
    "Aggressive Driver Involved",
    "Bicycle Involved",
    "Cell Phone Involved",
    "Animal Involved",
    "Drug Involved",
]


@pytest.fixture
def make_record():
    """Build a CrashRecord from raw CSV strings, the way the loader does."""

    def _make(
        date="2020/01/05 10:00:00",
        day="1",
        hour="12",
        crash_type="Rear End",
        severity="Property Damage Only",
        location="Oak St & Elm St",
        **flags,
    ):
        raw = {
            "CrashDateandTime": date,
            "Dayoftheweek": day,
            "HourofDay": hour,
            "CrashType": crash_type,
            "CrashSeverity": severity,
            "CrashLocation": location,
        }
        raw.update(flags)
        return CrashRecord(FieldNormalizer.normalize_row(raw))

    return _make


@pytest.fixture
def write_csv(tmp_path):
    """Write rows (lists of strings) under the standard header, return the path."""

    def _write(rows, header=None, name="crashes.csv"):
        lines = [",".join(header or HEADER)] + [",".join(row) for row in rows]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def quiet_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "SHOW_PROGRESS", False)
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))
    yield
    # configure_logging() swaps sinks; put the default one back
    logger.remove()
    logger.add(sys.stderr)
