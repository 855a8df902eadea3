"""Work log file loading, date range selection, and starter log generation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from pathlib import Path

import pytz
import yaml

from .config import DATE_FORMAT, SETTINGS, STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_NOT_STARTED, TIMEZONE
from .mappers import map_work_log, work_log_to_dict
from .models import DailyLog, TaskRecord, WorkLog, WorkLogEntry
from .status import is_known_status

logger = logging.getLogger(__name__)


class WorkLogError(ValueError):
    """The work log file could not be read or does not have the expected shape."""


class DateRangeError(ValueError):
    """The requested date range is malformed or selects no logged days."""


def load_work_log(path: str | Path) -> WorkLog:
    path = Path(path)
    try:
        text = path.read_text(encoding=SETTINGS.worklog_encoding)
    except OSError as exc:
        raise WorkLogError(f"could not read file '{path}': {exc}") from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkLogError(f"could not parse YAML from '{path}': {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise WorkLogError(f"'{path}' must map dates to daily logs, got {type(document).__name__}")
    for day, body in document.items():
        if body is not None and not isinstance(body, Mapping):
            raise WorkLogError(f"entry for {day} in '{path}' must be a mapping")
    work_log = map_work_log(document)
    for day, daily in work_log.items():
        for task in daily.tasks:
            if task.status and not is_known_status(task.status):
                logger.warning("Unknown status %r for %s on %s", task.status, task.work_item_key, day)
    logger.debug("Loaded %d days from %s", len(work_log), path)
    return work_log


def _parse_day(value: str, label: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise DateRangeError(f"invalid {label} date format '{value}', use YYYY-MM-DD") from exc


def select_dates(work_log: Mapping[str, object], start: str | None = None, end: str | None = None) -> list[str]:
    """Return the ascending logged dates covered by ``start``..``end`` (inclusive).

    A lone start or end selects that single day; neither selects every
    logged day.
    """
    if start and not end:
        end = start
    if end and not start:
        start = end

    if not start and not end:
        every = sorted(work_log)
        if not every:
            raise DateRangeError("no data found in the work log file")
        return every

    first = _parse_day(start, "start")
    last = _parse_day(end, "end")
    if last < first:
        raise DateRangeError("end date cannot be before start date")

    selected: list[str] = []
    day = first
    while day <= last:
        key = day.strftime(DATE_FORMAT)
        if key in work_log:
            selected.append(key)
        day += timedelta(days=1)
    if not selected:
        raise DateRangeError(f"no data found for the specified date range ({start} to {end})")
    return selected


def date_range_label(dates: list[str]) -> str:
    return f"{dates[0]} to {dates[-1]}"


def today_in_timezone(tz_name: str = TIMEZONE, now: datetime | None = None) -> date:
    tz = pytz.timezone(tz_name)
    if now is None:
        return datetime.now(tz=tz).date()
    if now.tzinfo is None:
        now = pytz.UTC.localize(now)
    return now.astimezone(tz).date()


def initial_work_log(today: date) -> WorkLog:
    """Build a two-day starter log (yesterday and today) showing every field."""
    yesterday = today - timedelta(days=1)
    return {
        yesterday.strftime(DATE_FORMAT): DailyLog(
            entries=(WorkLogEntry("09:00", "12:00"), WorkLogEntry("13:00", "17:30")),
            tasks=(
                TaskRecord(
                    status=STATUS_COMPLETED,
                    description="Set up the project skeleton and CI pipeline.",
                    work_item_key="PROJ-101",
                    qc_goal="Pipeline green on main",
                    pr_link="https://github.com/example/repo/pull/1",
                ),
                TaskRecord(
                    status=STATUS_IN_PROGRESS,
                    descriptions=(
                        "Drafted the storage interface.",
                        "Prototyped the file-backed implementation.",
                    ),
                    work_item_key="PROJ-102",
                    upcoming_note="Finish the storage layer and add tests",
                    blocker_note="Waiting on schema review from the data team.",
                ),
            ),
        ),
        today.strftime(DATE_FORMAT): DailyLog(
            entries=(WorkLogEntry("08:30", "12:00"), WorkLogEntry("12:45", "16:45")),
            tasks=(
                TaskRecord(
                    status=STATUS_IN_PROGRESS,
                    description="Reviewed schema feedback and updated the interface.",
                    work_item_key="PROJ-102",
                    upcoming_note="Wire the storage layer into the API",
                    blocker_note="Waiting on schema review from the data team.",
                ),
                TaskRecord(
                    status=STATUS_NOT_STARTED,
                    work_item_key="NO-JIRA: dependency updates",
                    upcoming_note="Bump pinned dependencies",
                ),
            ),
        ),
    }


def initial_work_log_yaml(today: date) -> str:
    return yaml.safe_dump(
        work_log_to_dict(initial_work_log(today)),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def write_initial_work_log(path: str | Path, today: date, *, force: bool = False) -> Path:
    path = Path(path)
    if path.exists() and not force:
        raise WorkLogError(f"'{path}' already exists; use --force to overwrite")
    path.write_text(initial_work_log_yaml(today), encoding=SETTINGS.worklog_encoding)
    logger.info("Wrote starter work log to %s", path)
    return path
