"""Tests for summary resolution and comment posting against a fake tracker."""

import json
import threading

from taskledger.core.jira_client import TrackerAPI
from taskledger.core.models import TaskRecord
from taskledger.core.service import TrackerService, load_summaries_file
from taskledger.report import classify, render_ticket_comments


class DummyAPI(TrackerAPI):
    def __init__(self, summaries=None, comments=None, fail=()):
        self.server = "https://jira.example.com"
        self.summaries = summaries or {}
        self.comments = comments or {}
        self.fail = set(fail)
        self.posted = []
        self._lock = threading.Lock()

    def fetch_summary(self, ticket_id):
        if ticket_id in self.fail:
            raise RuntimeError(f"Failed to fetch issue {ticket_id}")
        return self.summaries.get(ticket_id)

    def list_comments(self, ticket_id):
        if ticket_id in self.fail:
            raise RuntimeError(f"Failed to list comments on {ticket_id}")
        return list(self.comments.get(ticket_id, []))

    def add_comment(self, ticket_id, body):
        with self._lock:
            self.posted.append((ticket_id, body))


def _sample_result():
    log = {
        "2024-08-01": [
            TaskRecord(status="completed", work_item_key="PROJ-1", description="Done one"),
            TaskRecord(status="completed", work_item_key="https://issues.redhat.com/browse/PROJ-2", description="Done two"),
            TaskRecord(status="in progress", work_item_key="PROJ-3", upcoming_note="Start three"),
            TaskRecord(status="in progress", work_item_key="PROJ-4 follow-up", blocker_note="Blocked four"),
            TaskRecord(status="completed", description="Anonymous"),
        ]
    }
    return classify(log, ["2024-08-01"])


def test_collect_ticket_ids():
    assert TrackerService.collect_ticket_ids(_sample_result()) == ["PROJ-1", "PROJ-2", "PROJ-3", "PROJ-4"]


def test_resolve_summaries_sequential_skips_failures(caplog):
    api = DummyAPI(summaries={"PROJ-1": "One", "PROJ-2": "Two"}, fail={"PROJ-2"})
    with caplog.at_level("WARNING"):
        out = TrackerService(api).resolve_summaries(["PROJ-1", "PROJ-2", "PROJ-9"])
    assert out == {"PROJ-1": "One"}
    assert "Summary lookup failed for PROJ-2" in caplog.text


def test_resolve_summaries_parallel_with_progress():
    ids = [f"PROJ-{n}" for n in range(1, 11)]
    api = DummyAPI(summaries={tid: f"Summary {tid}" for tid in ids})
    calls = []
    out = TrackerService(api).resolve_summaries(ids, progress=lambda msg, done, total: calls.append((done, total)))
    assert out == {tid: f"Summary {tid}" for tid in ids}
    assert calls[0] == (0, 10)
    assert calls[-1] == (10, 10)


def test_post_status_comments_posts_and_skips_duplicates():
    result = _sample_result()
    bodies = render_ticket_comments(result, "2024-08-01 to 2024-08-01")
    api = DummyAPI(comments={"PROJ-1": [bodies["PROJ-1"]]}, fail={"PROJ-3"})
    outcomes = TrackerService(api).post_status_comments(result, "2024-08-01 to 2024-08-01")
    statuses = {o.ticket_id: o.status for o in outcomes}
    assert statuses == {"PROJ-1": "skipped", "PROJ-2": "posted", "PROJ-3": "failed", "PROJ-4": "posted"}
    assert [tid for tid, _ in api.posted] == ["PROJ-2", "PROJ-4"]


def test_post_status_comments_dry_run_never_calls_tracker():
    outcomes = TrackerService(api=None).post_status_comments(_sample_result(), "label", dry_run=True)
    assert {o.status for o in outcomes} == {"dry-run"}
    assert all(o.body.startswith("h4. Status update (label)") for o in outcomes)


def test_load_summaries_file_formats(tmp_path):
    path = tmp_path / "summaries.json"
    path.write_text(
        json.dumps(
            {
                "PROJ-1": "Plain summary",
                "PROJ-2": {"Key": "PROJ-2", "Summary": "Object summary", "URL": ""},
                "PROJ-3": {"Key": "PROJ-3", "Summary": ""},
            }
        )
    )
    assert load_summaries_file(path) == {"PROJ-1": "Plain summary", "PROJ-2": "Object summary"}
