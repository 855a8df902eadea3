"""Plain-text status report (Slack-paste friendly bullets and emoji codes)."""

from __future__ import annotations

from collections.abc import Sequence

from taskledger.core.config import (
    BLOCKER_LABEL,
    MISC_LABEL,
    NON_FEATURE_LABEL,
    PR_LABEL,
    REPORT_BANNER,
    TEXT_HEADER_BLOCKED,
    TEXT_HEADER_COMPLETED,
    TEXT_HEADER_NEXT_UP,
)
from taskledger.core.models import ClassificationResult, DatedTaskRecord, TaskRecord

from .classify import (
    collect_pr_links,
    latest_note,
    ordered_descriptions,
    partition_blocked,
    partition_keys,
)

BULLET = "    • "
SUB_BULLET = "        ◦ "
ITEM_BULLET = "            ▪ "

Block = tuple[str, list[str]]


def pr_line(links: Sequence[str]) -> list[str]:
    if not links:
        return []
    return [f"{PR_LABEL}: {'; '.join(links)}"]


def completed_content(records: Sequence[DatedTaskRecord]) -> list[str]:
    return ordered_descriptions(records) + pr_line(collect_pr_links(records))


def next_up_content(records: Sequence[DatedTaskRecord]) -> list[str]:
    note = latest_note(records)
    lines = [note] if note else []
    return lines + pr_line(collect_pr_links(records))


def blocked_content(task: TaskRecord) -> list[str]:
    return [f"{BLOCKER_LABEL}: {task.blocker_note}"]


def _render_section(
    header: str,
    feature: list[Block],
    non_feature: list[Block],
    *,
    heading_suffix: str = "",
) -> str:
    lines = [header]
    for label, content in feature:
        lines.append(f"{BULLET}{label}{heading_suffix}")
        lines.extend(f"{SUB_BULLET}{line}" for line in content)
    if non_feature:
        lines.append(f"{BULLET}{NON_FEATURE_LABEL}{heading_suffix}")
        for label, content in non_feature:
            lines.append(f"{SUB_BULLET}{label or MISC_LABEL}")
            lines.extend(f"{ITEM_BULLET}{line}" for line in content)
    return "\n".join(lines) + "\n"


def render_completed(groups) -> str:
    if not groups:
        return ""
    feature, non_feature = partition_keys(groups)
    return _render_section(
        TEXT_HEADER_COMPLETED,
        [(key, completed_content(groups[key])) for key in feature],
        [(key, completed_content(groups[key])) for key in non_feature],
        heading_suffix=":",
    )


def render_next_up(groups) -> str:
    if not groups:
        return ""
    feature, non_feature = partition_keys(groups)
    return _render_section(
        TEXT_HEADER_NEXT_UP,
        [(key, next_up_content(groups[key])) for key in feature],
        [(key, next_up_content(groups[key])) for key in non_feature],
    )


def render_blocked(blocked: Sequence[TaskRecord]) -> str:
    if not blocked:
        return ""
    feature, non_feature = partition_blocked(blocked)
    return _render_section(
        TEXT_HEADER_BLOCKED,
        [(task.work_item_key, blocked_content(task)) for task in feature],
        [(task.work_item_key, blocked_content(task)) for task in non_feature],
    )


def render_text(result: ClassificationResult) -> str:
    """Render the Completed, NextUp and Blocked sections; empty sections are omitted."""
    return (
        render_completed(result.completed)
        + render_next_up(result.next_up)
        + render_blocked(result.blocked)
    )


def render_text_report(result: ClassificationResult, date_range_label: str) -> str:
    header = f"Work Report ({date_range_label})\n{REPORT_BANNER}\n"
    return header + render_text(result)
