"""Save HTML reports and open them in the default browser."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path

from taskledger.core.config import SETTINGS

logger = logging.getLogger(__name__)


def save_html(content: str, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(content, encoding=SETTINGS.html_encoding)
    logger.debug("Saved HTML report to %s", path)
    return path


def open_in_browser(path: str | Path) -> bool:
    """Open a saved report; returns False when no browser could be launched."""
    uri = Path(path).resolve().as_uri()
    try:
        opened = webbrowser.open(uri)
    except webbrowser.Error as exc:
        logger.warning("Could not open %s: %s", uri, exc)
        return False
    return bool(opened)
