"""Recognize canonical tracker ticket IDs (``PROJ-123``) in keys, text, and URLs."""

from __future__ import annotations

import re

from taskledger.core.config import JIRA_DEFAULT_SERVER

# ASCII identifier characters bound a standalone ticket ID on both sides.
TICKET_ID_PATTERN = re.compile(r"(?<![A-Za-z0-9_])([A-Z]+-[0-9]+)(?![A-Za-z0-9_])")
BROWSE_URL_PATTERN = re.compile(r"https?://[^\s/]+(?:/[^\s]*?)?/browse/([A-Z]+-[0-9]+)(?![A-Za-z0-9_])")


def extract_ticket_id(text: str | None) -> str:
    """Pull a ticket ID out of free-form text or a tracker browse URL.

    A ``/browse/<ID>`` URL wins over any other ID-shaped text; otherwise the
    first standalone ``[A-Z]+-[0-9]+`` is returned. An empty string means no
    ID was found. Never raises.

    Examples
    --------
    >>> extract_ticket_id("https://issues.redhat.com/browse/HOSTEDCP-1234")
    'HOSTEDCP-1234'
    >>> extract_ticket_id("follow-up for OCPBUGS-77 review")
    'OCPBUGS-77'
    >>> extract_ticket_id("NO-JIRA: cleanup")
    ''
    """
    if not text or not isinstance(text, str):
        return ""
    match = BROWSE_URL_PATTERN.search(text)
    if match:
        return match.group(1)
    match = TICKET_ID_PATTERN.search(text)
    if match:
        return match.group(1)
    return ""


def browse_url(ticket_id: str, base_url: str = JIRA_DEFAULT_SERVER) -> str:
    return f"{base_url.rstrip('/')}/browse/{ticket_id}"
