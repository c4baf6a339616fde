"""System clipboard access through the platform's copy command."""

from __future__ import annotations

import shutil
import subprocess

from afflink.exceptions import ClipboardError

# First one found on PATH wins
COPY_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("clip",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def find_copy_command() -> list[str] | None:
    for cmd in COPY_COMMANDS:
        if shutil.which(cmd[0]):
            return list(cmd)
    return None


def copy_to_clipboard(text: str, command: list[str] | None = None) -> None:
    """Copy *text* to the system clipboard. Raises ClipboardError on any failure."""
    cmd = command or find_copy_command()
    if not cmd:
        raise ClipboardError("No clipboard command available (tried pbcopy, clip, wl-copy, xclip, xsel).")
    try:
        subprocess.run(cmd, input=text, text=True, check=True, capture_output=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        raise ClipboardError(f"Clipboard copy failed: {exc}") from exc
