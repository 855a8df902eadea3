import pytest

from taskledger.analytics.hours import add_durations, compute_hours, entries_frame
from taskledger.core.models import DailyLog, WorkLogEntry
from taskledger.core.status import is_completed, is_known_status, is_open_status, normalize_task_status


def _sample_log():
    return {
        "2024-08-01": DailyLog(entries=(WorkLogEntry("09:00", "12:00"), WorkLogEntry("13:00", "17:30"))),
        "2024-08-02": DailyLog(entries=(WorkLogEntry("09:15", "10:00"), WorkLogEntry("bad", "11:00"))),
        "2024-08-03": DailyLog(),
    }


def test_status_helpers():
    assert normalize_task_status("In Progress") == "in progress"
    assert normalize_task_status(None) == ""
    assert is_completed("COMPLETED")
    assert not is_completed(" completed")
    assert is_open_status("Not Started")
    assert not is_open_status("completed")
    assert not is_known_status("paused")


def test_compute_hours_totals_and_per_day():
    summary = compute_hours(_sample_log(), ["2024-08-01", "2024-08-02", "2024-08-03"])
    assert summary.total_hours == pytest.approx(8.25)
    per_day = dict(zip(summary.per_day["date"], summary.per_day["hours"]))
    assert per_day == pytest.approx({"2024-08-01": 7.5, "2024-08-02": 0.75, "2024-08-03": 0.0})
    assert summary.headline() == "Total hours worked from 2024-08-01 to 2024-08-03: 8.25"


def test_unparseable_entries_are_skipped_with_warning(caplog):
    df = entries_frame(_sample_log(), ["2024-08-02"])
    with caplog.at_level("WARNING"):
        out = add_durations(df)
    assert len(out) == 1
    assert "could not parse time entry" in caplog.text


def test_end_before_start_is_negative():
    log = {"2024-08-01": DailyLog(entries=(WorkLogEntry("22:00", "01:00"),))}
    summary = compute_hours(log, ["2024-08-01"])
    assert summary.total_hours == pytest.approx(-21.0)


def test_day_without_entries_reports_zero():
    summary = compute_hours({"2024-08-03": DailyLog()}, ["2024-08-03"])
    assert summary.total_hours == 0.0
    assert list(summary.per_day["hours"]) == [0.0]


def test_compute_hours_requires_dates():
    with pytest.raises(ValueError):
        compute_hours(_sample_log(), [])
