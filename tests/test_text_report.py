"""Tests for the plain-text report layout."""

from taskledger.core.config import TEXT_HEADER_BLOCKED, TEXT_HEADER_COMPLETED, TEXT_HEADER_NEXT_UP
from taskledger.core.models import TaskRecord
from taskledger.report import classify, render_text, render_text_report

PR = "https://github.com/org/repo/pull/7"


def _sample_log():
    return {
        "2024-08-01": [
            TaskRecord(status="completed", work_item_key="PROJ-1", description="Built parser"),
            TaskRecord(
                status="in progress",
                work_item_key="PROJ-2",
                description="Started API",
                upcoming_note="Finish API",
            ),
        ],
        "2024-08-02": [
            TaskRecord(
                status="in progress",
                work_item_key="PROJ-2",
                description="API endpoints done",
                upcoming_note="Write API docs",
                pr_link=PR,
            ),
        ],
    }


def test_feature_sections_layout():
    result = classify(_sample_log(), ["2024-08-01", "2024-08-02"])
    expected = (
        f"{TEXT_HEADER_COMPLETED}\n"
        "    • PROJ-1:\n"
        "        ◦ Built parser\n"
        "    • PROJ-2:\n"
        "        ◦ Started API\n"
        "        ◦ API endpoints done\n"
        f"        ◦ PR(s): {PR}\n"
        f"{TEXT_HEADER_NEXT_UP}\n"
        "    • PROJ-2\n"
        "        ◦ Write API docs\n"
        f"        ◦ PR(s): {PR}\n"
    )
    assert render_text(result) == expected


def test_report_header_and_banner():
    result = classify(_sample_log(), ["2024-08-01", "2024-08-02"])
    text = render_text_report(result, "2024-08-01 to 2024-08-02")
    lines = text.splitlines()
    assert lines[0] == "Work Report (2024-08-01 to 2024-08-02)"
    assert lines[1] == "=======Autogenerated by TaskLedger======="


def test_non_feature_group_follows_feature_work():
    log = {
        "2024-08-01": [
            TaskRecord(status="completed", description="Answered support questions"),
            TaskRecord(status="completed", work_item_key="NO-JIRA: cleanup", description="Removed dead code"),
            TaskRecord(status="completed", work_item_key="PROJ-7", description="Shipped feature"),
        ]
    }
    result = classify(log, ["2024-08-01"])
    expected = (
        f"{TEXT_HEADER_COMPLETED}\n"
        "    • PROJ-7:\n"
        "        ◦ Shipped feature\n"
        "    • Non-feature work:\n"
        "        ◦ Misc\n"
        "            ▪ Answered support questions\n"
        "        ◦ NO-JIRA: cleanup\n"
        "            ▪ Removed dead code\n"
    )
    assert render_text(result) == expected


def test_blocked_section_lists_blocker_notes():
    log = {
        "2024-08-01": [
            TaskRecord(status="in progress", work_item_key="PROJ-9", blocker_note="Waiting on access"),
            TaskRecord(status="not started", work_item_key="PROJ-3", blocker_note="Needs design"),
        ]
    }
    result = classify(log, ["2024-08-01"])
    expected = (
        f"{TEXT_HEADER_BLOCKED}\n"
        "    • PROJ-3\n"
        "        ◦ Blocker: Needs design\n"
        "    • PROJ-9\n"
        "        ◦ Blocker: Waiting on access\n"
    )
    assert render_text(result) == expected


def test_next_up_uses_newest_upcoming_note():
    log = {
        "2024-08-01": [
            TaskRecord(status="in progress", work_item_key="PROJ-4", upcoming_note="Draft plan"),
        ],
        "2024-08-02": [
            TaskRecord(status="in progress", work_item_key="PROJ-4", descriptions=("Wrote tests", "Fixed lint")),
        ],
    }
    result = classify(log, ["2024-08-01", "2024-08-02"])
    assert "    • PROJ-4\n        ◦ Draft plan\n" in render_text(result)


def test_empty_sections_are_omitted():
    assert render_text(classify({}, [])) == ""
    log = {"2024-08-01": [TaskRecord(status="completed", work_item_key="PROJ-1", description="Done")]}
    text = render_text(classify(log, ["2024-08-01"]))
    assert TEXT_HEADER_NEXT_UP not in text
    assert TEXT_HEADER_BLOCKED not in text


def test_no_jira_item_with_pr_renders_as_feature_work():
    log = {
        "2024-08-01": [
            TaskRecord(
                status="completed",
                work_item_key="NO-JIRA: cleanup",
                description="Removed dead code",
                pr_link="https://github.com/org/repo/pull/9",
            )
        ]
    }
    out = render_text(classify(log, ["2024-08-01"]))
    assert "Non-feature work" not in out
    assert "    • NO-JIRA: cleanup:\n        ◦ Removed dead code\n" in out
