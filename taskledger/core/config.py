"""Central configuration, constants, and report labels."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Tracker Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://issues.redhat.com"
TIMEZONE = "America/New_York"

# Environment variables consulted by settings.load_settings()
ENV_JIRA_TOKEN = "JIRA_PAT"
ENV_JIRA_SERVER = "JIRA_SERVER"
ENV_CONFIG_PATH = "TASKLEDGER_CONFIG"

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "taskledger" / "config.yaml"

# =============================================================================
# Work Log Settings
# =============================================================================
DEFAULT_WORKLOG_PATH = "worklog.yml"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# =============================================================================
# Task Status Configuration
# =============================================================================
# Statuses are compared case-insensitively; keep these lowercase.
STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in progress"
STATUS_NOT_STARTED = "not started"

KNOWN_STATUSES: Sequence[str] = (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
)

# Statuses that keep a work item eligible for forward-looking output
OPEN_STATUSES: frozenset[str] = frozenset({STATUS_IN_PROGRESS, STATUS_NOT_STARTED})

# =============================================================================
# Report Labels
# =============================================================================
REPORT_BANNER = "=======Autogenerated by TaskLedger======="
AUTOGENERATED_NOTE = "Autogenerated by TaskLedger"

# Text headers use Slack emoji codes and are pasted verbatim into chat.
TEXT_HEADER_COMPLETED = "\n🦀 Thing I've been working on"
TEXT_HEADER_NEXT_UP = "\n:starfleet: Thing I plan on working on next"
TEXT_HEADER_BLOCKED = "\n:facepalm: Thing that is blocking me or that I could use some help / discussion about"

HTML_HEADER_COMPLETED = "🦀 Things I've been working on"
HTML_HEADER_NEXT_UP = "⭐ Things I plan on working on next"
HTML_HEADER_BLOCKED = "🚫 Things that are blocking me"

NON_FEATURE_LABEL = "Non-feature work"
MISC_LABEL = "Misc"
PR_LABEL = "PR(s)"
BLOCKER_LABEL = "Blocker"

# Keys containing this marker are non-feature work unless a PR backs them
NON_FEATURE_MARKER = "NO-JIRA"

# =============================================================================
# Tracker Fetch Tuning
# =============================================================================
# Summary lookups are I/O bound HTTP calls through a synchronous client, so a
# small thread pool is used. Keep the worker count moderate for rate limits.
SUMMARY_FETCH_MAX_WORKERS = 8
SUMMARY_FETCH_MIN_PARALLEL = 4  # below this, stay sequential to reduce overhead
TRACKER_TIMEOUT_SECONDS = 10


@dataclass(slots=True)
class AppSettings:
    html_encoding: str = "utf-8"
    worklog_encoding: str = "utf-8"


SETTINGS = AppSettings()

# Trailer appended to every posted tracker comment
COMMENT_MARKER = f"_{AUTOGENERATED_NOTE}_"
