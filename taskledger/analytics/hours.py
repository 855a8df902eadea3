"""Worked-hours computation from work log time entries (pure functions)."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import pandas as pd

from taskledger.core.config import TIME_FORMAT
from taskledger.core.models import DailyLog

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = ["date", "start_time", "end_time"]


@dataclass(slots=True)
class HoursSummary:
    first_date: str
    last_date: str
    total_hours: float
    per_day: pd.DataFrame

    def headline(self) -> str:
        return f"Total hours worked from {self.first_date} to {self.last_date}: {self.total_hours:.2f}"


def entries_frame(work_log: Mapping[str, DailyLog], dates: Sequence[str]) -> pd.DataFrame:
    rows = []
    for day in dates:
        daily = work_log.get(day)
        if daily is None:
            continue
        for entry in daily.entries:
            rows.append({"date": day, "start_time": entry.start_time, "end_time": entry.end_time})
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def add_durations(df: pd.DataFrame) -> pd.DataFrame:
    """Add an ``hours`` column; rows whose times cannot be parsed are dropped.

    Times are ``HH:MM`` on the same day, so an end before its start yields a
    negative duration rather than wrapping past midnight.
    """
    if df.empty:
        out = df.copy()
        out["hours"] = pd.Series(dtype="float64")
        return out
    out = df.copy()
    start = pd.to_datetime(out["start_time"], format=TIME_FORMAT, errors="coerce")
    end = pd.to_datetime(out["end_time"], format=TIME_FORMAT, errors="coerce")
    invalid = start.isna() | end.isna()
    for _, row in out[invalid].iterrows():
        logger.warning(
            "could not parse time entry, skipping: date=%s start=%r end=%r",
            row["date"],
            row["start_time"],
            row["end_time"],
        )
    out["hours"] = (end - start).dt.total_seconds() / 3600.0
    return out[~invalid].reset_index(drop=True)


def compute_hours(work_log: Mapping[str, DailyLog], dates: Sequence[str]) -> HoursSummary:
    if not dates:
        raise ValueError("compute_hours requires at least one date")
    timed = add_durations(entries_frame(work_log, dates))
    per_day = (
        timed.groupby("date")["hours"]
        .sum()
        .reindex([d for d in dates if d in work_log], fill_value=0.0)
        .rename_axis("date")
        .reset_index()
    )
    total = float(timed["hours"].sum()) if not timed.empty else 0.0
    return HoursSummary(first_date=dates[0], last_date=dates[-1], total_hours=total, per_day=per_day)
