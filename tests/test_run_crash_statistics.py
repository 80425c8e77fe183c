import os

from config import settings
from scripts.run_crash_statistics import main

ROW = ["2020/01/05 10:00:00", "1", "4", "Rear End", "Injury", "Oak St & Elm St",
       "Yes", "No", "No", "No", "No", "No", "No"]


def test_prints_report_and_exits_zero(write_csv, capsys):
    path = write_csv([ROW, ROW])

    assert main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "Total Crashes: 2" in out
    assert "\tElm St & Oak St - 2 (100%)" in out
    assert "\tProperty Damage - 2 (100%)" in out


def test_writes_log_file(write_csv):
    main([str(write_csv([ROW]))])

    assert os.path.exists(os.path.join(settings.LOG_DIR, "crash_stats.log"))


def test_load_failure_exits_non_zero_without_report(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1

    assert "Total Crashes" not in capsys.readouterr().out


def test_invalid_record_exits_non_zero_without_report(write_csv, capsys):
    bad = list(ROW)
    bad[1] = "9"

    assert main([str(write_csv([ROW, bad]))]) == 1

    assert "Total Crashes" not in capsys.readouterr().out
