#!/usr/bin/env python3
# nodeconsole/frontend/__init__.py
from __future__ import annotations
"""
Operator-facing hooks (transaction confirmation, account unlock).
"""


from .hooks import CONFIRM_QUESTION, PASSPHRASE_PROMPT, ConsoleFrontend

__all__ = ["ConsoleFrontend", "CONFIRM_QUESTION", "PASSPHRASE_PROMPT"]
