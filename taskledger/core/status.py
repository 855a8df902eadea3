"""Task status normalization and categorization utilities.

Statuses in the work log are free text. This module centralizes the
case-insensitive comparisons against the three known statuses defined in
config.py (STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_NOT_STARTED).
Unknown values never raise; they simply match none of the checks.
"""

from __future__ import annotations

from .config import KNOWN_STATUSES, OPEN_STATUSES, STATUS_COMPLETED, STATUS_IN_PROGRESS


def normalize_task_status(value: str | None) -> str:
    """Casefold a raw status string for comparison.

    Parameters
    ----------
    value : str | None
        Raw status from the work log.

    Returns
    -------
    str
        Normalized status, or an empty string for missing values.

    Examples
    --------
    >>> normalize_task_status("In Progress")
    'in progress'
    >>> normalize_task_status(None)
    ''
    """
    if not value:
        return ""
    return str(value).casefold()


def is_completed(value: str | None) -> bool:
    return normalize_task_status(value) == STATUS_COMPLETED


def is_in_progress(value: str | None) -> bool:
    return normalize_task_status(value) == STATUS_IN_PROGRESS


def is_open_status(value: str | None) -> bool:
    """Check if a status keeps a work item open ("in progress" or "not started")."""
    return normalize_task_status(value) in OPEN_STATUSES


def is_known_status(value: str | None) -> bool:
    return normalize_task_status(value) in KNOWN_STATUSES
