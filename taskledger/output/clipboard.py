"""Copy rendered HTML to the system clipboard using platform tools."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Tried in order; HTML-typed targets first, then plain-text fallbacks.
LINUX_HTML_TOOLS: Sequence[Sequence[str]] = (
    ("wl-copy", "--type", "text/html"),
    ("xclip", "-selection", "clipboard", "-t", "text/html"),
    ("xsel", "--clipboard", "--input", "--type", "text/html"),
)
LINUX_TEXT_TOOLS: Sequence[Sequence[str]] = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class ClipboardError(RuntimeError):
    """No clipboard mechanism accepted the content."""


def _pipe(cmd: Sequence[str], content: str) -> bool:
    try:
        subprocess.run(list(cmd), input=content, text=True, check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("Clipboard command %s failed: %s", cmd[0], exc)
        return False
    return True


def _copy_linux(html_content: str) -> None:
    for tools in (LINUX_HTML_TOOLS, LINUX_TEXT_TOOLS):
        for cmd in tools:
            if shutil.which(cmd[0]) and _pipe(cmd, html_content):
                return
    raise ClipboardError("no suitable clipboard tool found (tried: wl-copy, xclip, xsel)")


def _copy_macos(html_content: str) -> None:
    escaped = html_content.replace("\\", "\\\\").replace('"', '\\"')
    script = f'set the clipboard to "{escaped}" as «class HTML»'
    if not _pipe(("osascript", "-e", script), ""):
        raise ClipboardError("osascript could not set the clipboard")


def _copy_windows(html_content: str) -> None:
    script = (
        "Add-Type -AssemblyName System.Windows.Forms; "
        "[System.Windows.Forms.Clipboard]::SetText([Console]::In.ReadToEnd(), "
        "[System.Windows.Forms.TextDataFormat]::Html)"
    )
    if not _pipe(("powershell", "-NoProfile", "-Command", script), html_content):
        raise ClipboardError("powershell could not set the clipboard")


def copy_html_to_clipboard(html_content: str, platform: str | None = None) -> None:
    """Place ``html_content`` on the clipboard as HTML where supported.

    Raises
    ------
    ClipboardError
        If the platform is unsupported or every available tool failed.
    """
    platform = platform or sys.platform
    if platform.startswith("linux"):
        _copy_linux(html_content)
    elif platform == "darwin":
        _copy_macos(html_content)
    elif platform in ("win32", "cygwin"):
        _copy_windows(html_content)
    else:
        raise ClipboardError(f"unsupported platform: {platform}")
