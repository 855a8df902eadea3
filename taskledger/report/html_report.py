"""HTML status report.

The document is minimal: no CSS, a single head/body, headings
and nested ``<ul>`` lists. Copying it from a browser tab into Slack keeps the
list nesting and nothing else. Grouping, ordering and per-key content match
the text report exactly.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Mapping, Sequence

from taskledger.core.config import (
    AUTOGENERATED_NOTE,
    BLOCKER_LABEL,
    HTML_HEADER_BLOCKED,
    HTML_HEADER_COMPLETED,
    HTML_HEADER_NEXT_UP,
    JIRA_DEFAULT_SERVER,
    MISC_LABEL,
    NON_FEATURE_LABEL,
    PR_LABEL,
)
from taskledger.core.models import ClassificationResult, DatedTaskRecord, TaskRecord

from .classify import (
    collect_pr_links,
    latest_note,
    ordered_descriptions,
    partition_blocked,
    partition_keys,
)
from .ticket_ids import browse_url, extract_ticket_id

logger = logging.getLogger(__name__)

SummaryLookup = Mapping[str, str] | Callable[[str], str | None]

HTML_PREAMBLE = '<!DOCTYPE html>\n<html>\n<head>\n    <meta charset="UTF-8">\n</head>\n<body>\n'
HTML_CLOSING = "</body>\n</html>\n"


def _lookup_fn(summary_lookup: SummaryLookup | None) -> Callable[[str], str | None]:
    if summary_lookup is None:
        return lambda _ticket_id: None
    if isinstance(summary_lookup, Mapping):
        return summary_lookup.get
    return summary_lookup


def _summary_for(lookup: Callable[[str], str | None], ticket_id: str) -> str:
    try:
        return lookup(ticket_id) or ""
    except Exception as exc:
        logger.warning("Summary lookup failed for %s: %s", ticket_id, exc)
        return ""


def format_ticket_html(
    work_item_key: str,
    summary_lookup: SummaryLookup | None = None,
    base_url: str = JIRA_DEFAULT_SERVER,
) -> str:
    """Render a work item key as a tracker link, or as escaped text when no ID is found."""
    ticket_id = extract_ticket_id(work_item_key)
    if not ticket_id:
        return html.escape(work_item_key or MISC_LABEL)
    summary = _summary_for(_lookup_fn(summary_lookup), ticket_id)
    text = f"{ticket_id}: {summary}" if summary else ticket_id
    href = html.escape(browse_url(ticket_id, base_url))
    return f'<a href="{href}" target="_blank">{html.escape(text)}</a>'


def _pr_item(links: Sequence[str]) -> list[str]:
    if not links:
        return []
    anchors = "; ".join(f'<a href="{html.escape(link)}">{html.escape(link)}</a>' for link in links)
    return [f"{PR_LABEL}: {anchors}"]


def _completed_items(records: Sequence[DatedTaskRecord]) -> list[str]:
    items = [html.escape(desc) for desc in ordered_descriptions(records)]
    return items + _pr_item(collect_pr_links(records))


def _next_up_items(records: Sequence[DatedTaskRecord]) -> list[str]:
    note = latest_note(records)
    items = [html.escape(note)] if note else []
    return items + _pr_item(collect_pr_links(records))


def _blocked_items(task: TaskRecord) -> list[str]:
    return [f"{BLOCKER_LABEL}: {html.escape(task.blocker_note)}"]


def _sub_list(items: list[str]) -> str:
    return "<ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul>"


class _SectionWriter:
    def __init__(self, summary_lookup: SummaryLookup | None, base_url: str):
        self._lookup = summary_lookup
        self._base_url = base_url

    def ticket(self, work_item_key: str) -> str:
        return format_ticket_html(work_item_key, self._lookup, self._base_url)

    def section(
        self,
        header: str,
        feature: list[tuple[str, list[str]]],
        non_feature: list[tuple[str, list[str]]],
    ) -> str:
        parts = [f"<h2>{html.escape(header)}</h2>\n<ul>\n"]
        for key, items in feature:
            parts.append(f"<li><strong>{self.ticket(key)}</strong>{_sub_list(items)}</li>\n")
        if non_feature:
            nested = "".join(f"<li>{self.ticket(key)}{_sub_list(items)}</li>" for key, items in non_feature)
            parts.append(f"<li><strong>{html.escape(NON_FEATURE_LABEL)}</strong><ul>{nested}</ul></li>\n")
        parts.append("</ul>\n")
        return "".join(parts)


def render_html(
    result: ClassificationResult,
    date_range_label: str,
    summary_lookup: SummaryLookup | None = None,
    base_url: str = JIRA_DEFAULT_SERVER,
) -> str:
    """Render the classified report as a standalone HTML document.

    Parameters
    ----------
    result : ClassificationResult
        Output of ``classify``.
    date_range_label : str
        Shown in the title, e.g. ``"2024-08-01 to 2024-08-03"``.
    summary_lookup : Mapping or callable, optional
        Ticket ID -> summary. Missing entries render a bare ID link.
    base_url : str
        Tracker base used for ``/browse/<ID>`` links.
    """
    writer = _SectionWriter(summary_lookup, base_url)
    body = [
        f"<h1>Work Report ({html.escape(date_range_label)})</h1>\n",
        f"<p><em>{html.escape(AUTOGENERATED_NOTE)}</em></p>\n",
    ]

    if result.completed:
        feature, non_feature = partition_keys(result.completed)
        body.append(
            writer.section(
                HTML_HEADER_COMPLETED,
                [(k, _completed_items(result.completed[k])) for k in feature],
                [(k, _completed_items(result.completed[k])) for k in non_feature],
            )
        )

    if result.next_up:
        feature, non_feature = partition_keys(result.next_up)
        body.append(
            writer.section(
                HTML_HEADER_NEXT_UP,
                [(k, _next_up_items(result.next_up[k])) for k in feature],
                [(k, _next_up_items(result.next_up[k])) for k in non_feature],
            )
        )

    if result.blocked:
        feature_tasks, non_feature_tasks = partition_blocked(result.blocked)
        body.append(
            writer.section(
                HTML_HEADER_BLOCKED,
                [(t.work_item_key, _blocked_items(t)) for t in feature_tasks],
                [(t.work_item_key, _blocked_items(t)) for t in non_feature_tasks],
            )
        )

    return HTML_PREAMBLE + "".join(body) + HTML_CLOSING
