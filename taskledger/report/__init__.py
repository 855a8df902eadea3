"""Report engine: classification plus text, HTML and tracker-comment rendering."""

from taskledger.report.classify import classify, is_non_feature_work, partition_blocked, partition_keys
from taskledger.report.comments import render_ticket_comments
from taskledger.report.html_report import format_ticket_html, render_html
from taskledger.report.text_report import render_text, render_text_report
from taskledger.report.ticket_ids import browse_url, extract_ticket_id

__all__ = [
    "browse_url",
    "classify",
    "extract_ticket_id",
    "format_ticket_html",
    "is_non_feature_work",
    "partition_blocked",
    "partition_keys",
    "render_html",
    "render_text",
    "render_text_report",
    "render_ticket_comments",
]
