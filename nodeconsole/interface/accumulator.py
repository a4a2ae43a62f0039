#!/usr/bin/env python3
# nodeconsole/interface/accumulator.py
from __future__ import annotations

"""
Statement accumulator.

Buffers operator lines until the brackets across the whole buffer balance:

    IDLE          prompt is the base prompt, depth 0
    CONTINUATION  more '{' / '(' than '}' / ')' seen; prompt grows with depth

Depth is recomputed over the entire buffer on every line, so closing
brackets on later lines are what brings the machine back to IDLE.
"""

from enum import Enum

BASE_PROMPT = "> "

_OPENERS = "{("
_CLOSERS = "})"


class State(Enum):
    IDLE = "idle"
    CONTINUATION = "continuation"


def bracket_depth(text: str) -> int:
    """Net count of opening minus closing braces/parentheses."""
    opened = sum(text.count(ch) for ch in _OPENERS)
    closed = sum(text.count(ch) for ch in _CLOSERS)
    return opened - closed


def continuation_prompt(depth: int) -> str:
    """'.. ' for depth 1, '...... ' for depth 2, and so on."""
    return ".." * (2 * depth - 1) + " "


class StatementAccumulator:
    """Two-state machine turning typed lines into complete statements."""

    def __init__(self, base_prompt: str = BASE_PROMPT) -> None:
        self.base_prompt = base_prompt
        self.buffer = ""
        self.depth = 0
        self.prompt = base_prompt

    @property
    def state(self) -> State:
        return State.CONTINUATION if self.buffer else State.IDLE

    def is_exit(self, line: str) -> bool:
        """'exit' ends the session only as a whole line typed at an idle prompt."""
        return line == "exit" and self.state is State.IDLE

    def feed(self, line: str) -> str | None:
        """
        Add one line. Returns the complete statement (with its trailing
        newlines) when the buffer balances, otherwise None.
        """
        if line == "" and self.state is State.IDLE:
            return None

        self.buffer += line + "\n"
        self.depth = bracket_depth(self.buffer)
        if self.depth > 0:
            self.prompt = continuation_prompt(self.depth)
            return None

        statement = self.buffer
        self.reset()
        return statement

    def reset(self) -> None:
        """Drop any partial statement and return to IDLE."""
        self.buffer = ""
        self.depth = 0
        self.prompt = self.base_prompt
