"""TrackerService: summary resolution and status comment posting."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from taskledger.report.comments import render_ticket_comments
from taskledger.report.ticket_ids import extract_ticket_id

from .config import SUMMARY_FETCH_MAX_WORKERS, SUMMARY_FETCH_MIN_PARALLEL
from .jira_client import TrackerAPI
from .models import ClassificationResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]

OUTCOME_POSTED = "posted"
OUTCOME_SKIPPED = "skipped"
OUTCOME_FAILED = "failed"
OUTCOME_DRY_RUN = "dry-run"


@dataclass(slots=True, frozen=True)
class CommentOutcome:
    ticket_id: str
    status: str
    body: str = ""
    detail: str = ""


class TrackerService:
    def __init__(self, api: TrackerAPI | None):
        self.api = api

    @staticmethod
    def collect_ticket_ids(result: ClassificationResult) -> list[str]:
        """Return the sorted distinct ticket IDs referenced by any report view."""
        keys: list[str] = [*result.completed, *result.next_up]
        keys.extend(task.work_item_key for task in result.blocked)
        return sorted({tid for tid in map(extract_ticket_id, keys) if tid})

    def _summary_or_none(self, ticket_id: str) -> str | None:
        try:
            return self.api.fetch_summary(ticket_id)
        except Exception as exc:
            logger.warning("Summary lookup failed for %s: %s", ticket_id, exc)
            return None

    def resolve_summaries(
        self,
        ticket_ids: Iterable[str],
        *,
        progress: ProgressCallback | None = None,
    ) -> dict[str, str]:
        """Fetch summaries for ``ticket_ids``; failed or empty lookups are omitted.

        Small batches run sequentially; larger ones use a thread pool since
        each lookup is one blocking HTTP call.
        """
        work = list(dict.fromkeys(ticket_ids))
        summaries: dict[str, str] = {}
        if not work:
            return summaries

        if progress:
            progress("Fetching ticket summaries", 0, len(work))

        if len(work) < SUMMARY_FETCH_MIN_PARALLEL:
            for idx, ticket_id in enumerate(work, start=1):
                summary = self._summary_or_none(ticket_id)
                if summary:
                    summaries[ticket_id] = summary
                if progress:
                    progress("Fetching ticket summaries", idx, len(work))
            return summaries

        completed = 0
        with ThreadPoolExecutor(max_workers=SUMMARY_FETCH_MAX_WORKERS) as pool:
            futures = {pool.submit(self._summary_or_none, tid): tid for tid in work}
            for fut in as_completed(futures):
                summary = fut.result()
                if summary:
                    summaries[futures[fut]] = summary
                completed += 1
                if progress:
                    progress("Fetching ticket summaries", completed, len(work))
        logger.debug("Resolved %d of %d ticket summaries", len(summaries), len(work))
        return summaries

    def post_status_comments(
        self,
        result: ClassificationResult,
        date_range_label: str,
        *,
        dry_run: bool = False,
    ) -> list[CommentOutcome]:
        """Post one status comment per referenced ticket.

        A ticket that already carries an identical comment is skipped, so
        re-running the same range does not duplicate updates.
        """
        outcomes: list[CommentOutcome] = []
        for ticket_id, body in render_ticket_comments(result, date_range_label).items():
            if dry_run:
                outcomes.append(CommentOutcome(ticket_id, OUTCOME_DRY_RUN, body))
                continue
            try:
                existing = self.api.list_comments(ticket_id)
                if any(c.strip() == body.strip() for c in existing):
                    logger.info("Skipping %s: identical status comment already present", ticket_id)
                    outcomes.append(CommentOutcome(ticket_id, OUTCOME_SKIPPED, body))
                    continue
                self.api.add_comment(ticket_id, body)
            except Exception as exc:
                logger.warning("Commenting on %s failed: %s", ticket_id, exc)
                outcomes.append(CommentOutcome(ticket_id, OUTCOME_FAILED, body, str(exc)))
                continue
            logger.info("Posted status comment on %s", ticket_id)
            outcomes.append(CommentOutcome(ticket_id, OUTCOME_POSTED, body))
        return outcomes


def load_summaries_file(path: str | Path) -> dict[str, str]:
    """Read a JSON file mapping ticket IDs to summaries.

    Values may be plain strings or objects with ``Key``/``Summary`` fields
    (lowercase names are accepted too). Entries without a summary are dropped.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"failed to read ticket summaries file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"failed to parse ticket summaries JSON '{path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"ticket summaries file '{path}' must contain a JSON object")

    summaries: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, str):
            ticket_id, summary = key, value
        elif isinstance(value, dict):
            ticket_id = value.get("Key") or value.get("key") or key
            summary = value.get("Summary") or value.get("summary") or ""
        else:
            continue
        if summary:
            summaries[str(ticket_id)] = str(summary)
    return summaries
