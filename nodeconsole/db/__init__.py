#!/usr/bin/env python3
# nodeconsole/db/__init__.py
from __future__ import annotations

"""
Package for persistence and configuration.

Provides:
- Configuration loader with environment variable overrides (`config`).
- Statement history with secret redaction (`history`).
"""


from .history import DEFAULT_SECRET_PATTERN, HistoryManager
from .config import ConsoleConfig, DEFAULTS, ENV_PREFIX, load_config

__all__ = [
    "DEFAULT_SECRET_PATTERN",
    "HistoryManager",
    "ConsoleConfig",
    "DEFAULTS",
    "ENV_PREFIX",
    "load_config",
]
