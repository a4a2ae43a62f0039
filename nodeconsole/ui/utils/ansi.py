#!/usr/bin/env python3
# nodeconsole/ui/utils/ansi.py
from __future__ import annotations

import os
import re
from typing import Optional

# SGR sequences used by the console (status lines, errors, log levels).
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",

    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_cyan": "\x1b[96m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_vt_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Report whether ANSI escapes should be emitted.

    Honors NO_COLOR. On Windows, only terminals known to speak VT sequences
    (Windows Terminal, ConEmu, ANSICON, xterm-like TERM) are trusted.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.environ.get("NO_COLOR"):
        _vt_enabled_cache = False
    elif os.name != "nt":
        _vt_enabled_cache = True
    else:
        _vt_enabled_cache = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    return _vt_enabled_cache


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles from ANSI (e.g. 'red', 'bold').
    Returns the text untouched when colors are disabled.
    """
    if not enable_windows_vt():
        return text
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
