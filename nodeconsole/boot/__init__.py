#!/usr/bin/env python3
# nodeconsole/boot/__init__.py
from __future__ import annotations
"""
Startup sequence package.

Exports:
- boot_console: Orchestrated startup with Linux-style [  OK  ] / [FAILED] lines.
- run_console: boot_console plus banner and interactive loop.
- StartupError: raised when the backend cannot be reached at discovery.
"""


from .boot import StartupError, boot_console, run_console

__all__ = ["boot_console", "run_console", "StartupError"]
