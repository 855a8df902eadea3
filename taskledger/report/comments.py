"""Per-ticket status comments in JIRA wiki markup."""

from __future__ import annotations

from dataclasses import dataclass, field

from taskledger.core.config import COMMENT_MARKER
from taskledger.core.models import ClassificationResult, DatedTaskRecord

from .classify import (
    collect_pr_links,
    latest_note,
    ordered_descriptions,
    partition_blocked,
    partition_keys,
)
from .ticket_ids import extract_ticket_id


@dataclass(slots=True)
class TicketDigest:
    ticket_id: str
    completed: list[str] = field(default_factory=list)
    next_up: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)
    pr_links: set[str] = field(default_factory=set)
    qc_goal: str = ""
    qc_goal_date: str = ""

    def note_qc_goal(self, records: tuple[DatedTaskRecord, ...]) -> None:
        for dated in records:
            if dated.task.qc_goal and dated.date >= self.qc_goal_date:
                self.qc_goal = dated.task.qc_goal
                self.qc_goal_date = dated.date

    def is_empty(self) -> bool:
        return not (self.completed or self.next_up or self.blockers)


def _wiki_link(url: str) -> str:
    return f"[{url}|{url}]"


def build_digests(result: ClassificationResult) -> dict[str, TicketDigest]:
    """Merge every feature work item into one digest per ticket ID.

    Several keys can resolve to the same ticket (for example ``PROJ-1`` and
    its browse URL); their content is combined. Non-feature work and keys
    without a ticket ID (such as PR-backed ``NO-JIRA`` items) are skipped.
    """
    digests: dict[str, TicketDigest] = {}

    def digest_for(work_item_key: str) -> TicketDigest | None:
        ticket_id = extract_ticket_id(work_item_key)
        if not ticket_id:
            return None
        return digests.setdefault(ticket_id, TicketDigest(ticket_id))

    feature, _ = partition_keys(result.completed)
    for key in feature:
        records = result.completed[key]
        digest = digest_for(key)
        if digest is None:
            continue
        digest.completed.extend(ordered_descriptions(records))
        digest.pr_links.update(collect_pr_links(records))
        digest.note_qc_goal(records)

    feature, _ = partition_keys(result.next_up)
    for key in feature:
        records = result.next_up[key]
        digest = digest_for(key)
        if digest is None:
            continue
        note = latest_note(records)
        if note:
            digest.next_up.append(note)
        digest.pr_links.update(collect_pr_links(records))
        digest.note_qc_goal(records)

    feature_blocked, _ = partition_blocked(result.blocked)
    for task in feature_blocked:
        digest = digest_for(task.work_item_key)
        if digest is None:
            continue
        digest.blockers.append(task.blocker_note)
        if task.pr_link:
            digest.pr_links.add(task.pr_link)

    return {tid: d for tid, d in sorted(digests.items()) if not d.is_empty()}


def render_comment(digest: TicketDigest, date_range_label: str) -> str:
    lines = [f"h4. Status update ({date_range_label})"]
    for title, entries in (
        ("Completed", digest.completed),
        ("Next up", digest.next_up),
        ("Blocker", digest.blockers),
    ):
        if entries:
            lines.append(f"*{title}:*")
            lines.extend(f"* {entry}" for entry in entries)
    if digest.qc_goal:
        lines.append(f"*QC goal:* {digest.qc_goal}")
    if digest.pr_links:
        lines.append("*PR(s):* " + "; ".join(_wiki_link(u) for u in sorted(digest.pr_links)))
    lines.append(COMMENT_MARKER)
    return "\n".join(lines)


def render_ticket_comments(result: ClassificationResult, date_range_label: str) -> dict[str, str]:
    """Return ticket ID -> comment body for every feature ticket in the report."""
    return {
        ticket_id: render_comment(digest, date_range_label)
        for ticket_id, digest in build_digests(result).items()
    }
