"""Group dated task records by work item and bucket them for status reports.

The classifier walks the selected dates in ascending order, then each day's
tasks in list order, and builds three views:

- ``completed``: every record that is completed, or in progress with at
  least one description (in-progress work that still produced output).
- ``next_up``: records carrying an upcoming note, kept only for work items
  whose most recent record is still open.
- ``blocked``: the most recent record of each work item, when it carries a
  blocker note.

The most recent record of a work item is the one with the greatest date; a
later record only replaces it when its date is strictly greater, so among
same-day records the first one logged wins. Records without a work item key
all share one anonymous tracking slot (see ``AnonymousPool``), so unrelated
anonymous tasks can shadow each other's next-up/blocked state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from taskledger.core.config import NON_FEATURE_MARKER
from taskledger.core.models import (
    ClassificationResult,
    DailyLog,
    DatedTaskRecord,
    TaskRecord,
    TrackingKey,
    tracking_key,
)
from taskledger.core.status import is_completed, is_in_progress, is_open_status

from .ticket_ids import extract_ticket_id

DayTasks = DailyLog | Sequence[TaskRecord]


def _tasks_for(day: DayTasks) -> Iterable[TaskRecord]:
    if isinstance(day, DailyLog):
        return day.tasks
    return day or ()


def counts_as_completed(task: TaskRecord) -> bool:
    if is_completed(task.status):
        return True
    return is_in_progress(task.status) and bool(task.all_descriptions())


def classify(work_log: Mapping[str, DayTasks], ordered_dates: Sequence[str]) -> ClassificationResult:
    """Classify tasks logged on ``ordered_dates`` into completed/next-up/blocked.

    Parameters
    ----------
    work_log : Mapping[str, DailyLog | Sequence[TaskRecord]]
        Tasks per ISO date. Dates missing from the mapping are skipped.
    ordered_dates : Sequence[str]
        Ascending, de-duplicated ISO dates to consider. Not re-validated.

    Returns
    -------
    ClassificationResult
        Read-only snapshot; shares no mutable state with the inputs.
    """
    completed: dict[str, list[DatedTaskRecord]] = {}
    next_up_candidates: dict[str, list[DatedTaskRecord]] = {}
    most_recent: dict[TrackingKey, DatedTaskRecord] = {}

    for day in ordered_dates:
        if day not in work_log:
            continue
        for task in _tasks_for(work_log[day]):
            dated = DatedTaskRecord(task=task, date=day)
            key = task.work_item_key

            if counts_as_completed(task):
                completed.setdefault(key, []).append(dated)

            # Filtered against the most recent state once every date is seen
            if task.upcoming_note:
                next_up_candidates.setdefault(key, []).append(dated)

            slot = tracking_key(key)
            existing = most_recent.get(slot)
            if existing is None or day > existing.date:
                most_recent[slot] = dated

    next_up = {
        key: records
        for key, records in next_up_candidates.items()
        if is_open_status(most_recent[tracking_key(key)].task.status)
    }
    blocked = [dated.task for dated in most_recent.values() if dated.task.blocker_note]

    return ClassificationResult.build(completed, next_up, blocked)


def is_non_feature_work(work_item_key: str, has_pr: bool) -> bool:
    """Decide whether a work item belongs in the trailing "Non-feature work" group.

    Items without a resolvable ticket are still reported, just after tracked
    feature work. A ``NO-JIRA`` item backed by a PR counts as feature work.
    """
    if not work_item_key:
        return True
    if NON_FEATURE_MARKER in work_item_key.upper():
        return not has_pr
    return not extract_ticket_id(work_item_key)


def group_has_pr(records: Iterable[DatedTaskRecord]) -> bool:
    return any(r.task.pr_link for r in records)


def partition_keys(
    groups: Mapping[str, Sequence[DatedTaskRecord]],
) -> tuple[list[str], list[str]]:
    """Split grouped keys into sorted (feature, non_feature) lists."""
    feature: list[str] = []
    non_feature: list[str] = []
    for key, records in groups.items():
        if is_non_feature_work(key, group_has_pr(records)):
            non_feature.append(key)
        else:
            feature.append(key)
    return sorted(feature), sorted(non_feature)


def partition_blocked(blocked: Sequence[TaskRecord]) -> tuple[list[TaskRecord], list[TaskRecord]]:
    """Split blocked entries into (feature, non_feature), each sorted by key."""
    feature: list[TaskRecord] = []
    non_feature: list[TaskRecord] = []
    for task in blocked:
        if is_non_feature_work(task.work_item_key, bool(task.pr_link)):
            non_feature.append(task)
        else:
            feature.append(task)

    def by_key(task: TaskRecord) -> str:
        return task.work_item_key

    return sorted(feature, key=by_key), sorted(non_feature, key=by_key)


def collect_pr_links(records: Iterable[DatedTaskRecord]) -> list[str]:
    return sorted({r.task.pr_link for r in records if r.task.pr_link})


def latest_note(records: Sequence[DatedTaskRecord]) -> str:
    """Return the newest forward-looking note for a next-up work item.

    Records are walked newest first (last logged first within a day); the
    first one yielding a note wins. A record's note is its upcoming note, else
    its last description.
    """
    for dated in reversed(sorted(records, key=lambda r: r.date)):
        if dated.task.upcoming_note:
            return dated.task.upcoming_note
        descs = dated.task.all_descriptions()
        if descs:
            return descs[-1]
    return ""


def ordered_descriptions(records: Sequence[DatedTaskRecord]) -> list[str]:
    out: list[str] = []
    for dated in sorted(records, key=lambda r: r.date):
        out.extend(dated.task.all_descriptions())
    return out
