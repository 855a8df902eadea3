"""Jira API client wrapper (summary lookup and issue comments)."""

from __future__ import annotations

from jira import JIRA, JIRAError

from .config import TRACKER_TIMEOUT_SECONDS


class TrackerAPI:
    def __init__(self, server: str, token: str, timeout: int = TRACKER_TIMEOUT_SECONDS):
        self.server = server.rstrip("/")
        self.client = JIRA(server=self.server, token_auth=token, timeout=timeout)

    def fetch_summary(self, ticket_id: str) -> str | None:
        try:
            issue = self.client.issue(ticket_id, fields="summary")
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to fetch issue {ticket_id}: {exc}") from exc
        summary = getattr(issue.fields, "summary", None)
        return summary or None

    def list_comments(self, ticket_id: str) -> list[str]:
        try:
            comments = self.client.comments(ticket_id)
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to list comments on {ticket_id}: {exc}") from exc
        return [getattr(c, "body", "") or "" for c in comments]

    def add_comment(self, ticket_id: str, body: str) -> None:
        try:
            self.client.add_comment(ticket_id, body)
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to comment on {ticket_id}: {exc}") from exc
