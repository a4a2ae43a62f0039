#!/usr/bin/env python3
# nodeconsole/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console.

Provides:
- The multi-line statement accumulator.
- Catalog-backed completion.
- The embedded script runtime.
- Prompters with history and completion (prompt_toolkit / readline / plain).
- The console loop, its input reader thread and batch execution.
"""


# Accumulator and completion FIRST (cli and console depend on them)
from .accumulator import (
    BASE_PROMPT,
    State,
    StatementAccumulator,
    bracket_depth,
    continuation_prompt,
)
from .completion import CompletionEngine

# Runtime
from .runtime import ScriptRuntime, render_value

# Prompters (after completion is available)
from .cli import (
    BasePrompter,
    PromptToolkitPrompter,
    ReadlinePrompter,
    DumbPrompter,
    make_prompter,
    DUMB_TERMINAL_WARNING,
)

# Console loop
from .console import ABORTED, EOF, INTERRUPT, InputReader, Session, Console

__all__ = [
    # accumulator
    "BASE_PROMPT",
    "State",
    "StatementAccumulator",
    "bracket_depth",
    "continuation_prompt",
    # completion
    "CompletionEngine",
    # runtime
    "ScriptRuntime",
    "render_value",
    # cli
    "BasePrompter",
    "PromptToolkitPrompter",
    "ReadlinePrompter",
    "DumbPrompter",
    "make_prompter",
    "DUMB_TERMINAL_WARNING",
    # console
    "ABORTED",
    "EOF",
    "INTERRUPT",
    "InputReader",
    "Session",
    "Console",
]
