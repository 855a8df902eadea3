"""Mapping raw YAML work log documents into DailyLog / TaskRecord instances."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .models import DailyLog, TaskRecord, WorkLog, WorkLogEntry

logger = logging.getLogger(__name__)

# YAML field name -> TaskRecord attribute
TASK_FIELD_ALIASES: dict[str, str] = {
    "status": "status",
    "description": "description",
    "jira_ticket": "work_item_key",
    "upnext_description": "upcoming_note",
    "github_pr": "pr_link",
    "blocker": "blocker_note",
    "qc_goal": "qc_goal",
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def normalize_date_key(value: Any) -> str:
    """Render a YAML date key as ``YYYY-MM-DD``.

    Unquoted keys such as ``2024-08-01:`` are parsed by YAML into ``date``
    objects; quoted keys stay strings.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return _text(value).strip()


def normalize_clock(value: Any) -> str:
    """Render a work log time as ``HH:MM``.

    YAML 1.1 reads unquoted ``09:30`` as the base-60 integer 570, so integers
    are converted back to hours and minutes.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        hours, minutes = divmod(value, 60)
        return f"{hours:02d}:{minutes:02d}"
    return _text(value).strip()


def _descriptions(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(_text(v) for v in value if v is not None)
    return (_text(value),)


def map_task(raw: Mapping[str, Any] | None) -> TaskRecord:
    raw = raw or {}
    values = {attr: _text(raw.get(name)) for name, attr in TASK_FIELD_ALIASES.items()}
    return TaskRecord(descriptions=_descriptions(raw.get("descriptions")), **values)


def map_entry(raw: Mapping[str, Any] | None) -> WorkLogEntry:
    raw = raw or {}
    return WorkLogEntry(
        start_time=normalize_clock(raw.get("start_time")),
        end_time=normalize_clock(raw.get("end_time")),
    )


def map_daily_log(raw: Mapping[str, Any] | None) -> DailyLog:
    if not raw:
        return DailyLog()
    entries = raw.get("work_log") or []
    tasks = raw.get("tasks") or []
    return DailyLog(
        entries=tuple(map_entry(e) for e in entries if isinstance(e, Mapping)),
        tasks=tuple(map_task(t) for t in tasks if isinstance(t, Mapping)),
    )


def map_work_log(document: Mapping[Any, Any]) -> WorkLog:
    work_log: WorkLog = {}
    for day, body in document.items():
        key = normalize_date_key(day)
        if key in work_log:
            logger.warning("Duplicate entry for %s in work log; keeping the later one", key)
        work_log[key] = map_daily_log(body)
    return work_log


def task_to_dict(task: TaskRecord) -> dict[str, Any]:
    """Inverse of map_task, using the YAML field names and order."""
    return {
        "jira_ticket": task.work_item_key,
        "status": task.status,
        "description": task.description,
        "descriptions": list(task.descriptions),
        "qc_goal": task.qc_goal,
        "upnext_description": task.upcoming_note,
        "github_pr": task.pr_link,
        "blocker": task.blocker_note,
    }


def work_log_to_dict(work_log: WorkLog) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for day in sorted(work_log):
        daily = work_log[day]
        out[day] = {
            "work_log": [{"start_time": e.start_time, "end_time": e.end_time} for e in daily.entries],
            "tasks": [task_to_dict(t) for t in daily.tasks],
        }
    return out
