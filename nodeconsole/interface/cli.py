#!/usr/bin/env python3
# nodeconsole/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends (prompters).

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain stream input (last resort, passphrases echo)

Every prompter raises EOFError at end of input and KeyboardInterrupt when
the operator aborts the line inside the editor.
"""

import getpass
import sys
from typing import Iterable, Optional, TextIO

from nodeconsole.ui.utils import colorize, print_line

from .completion import CompletionEngine, _is_token_char

DUMB_TERMINAL_WARNING = "!! Unsupported terminal, password will echo."


class BasePrompter:
    """
    Base interface for prompters.

    Subclasses should implement:
        - prompt()
        - password_prompt()

    and may override setup(), teardown() and append_history(). Context
    manager support guarantees teardown.
    """

    def setup(self) -> None:
        ...

    def prompt(self, text: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def password_prompt(self, text: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def append_history(self, entry: str) -> None:
        """Make `entry` recallable in the editor (no-op without editor history)."""

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BasePrompter":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitPrompter(BasePrompter):
    """Rich line editor with history and live completion."""

    def __init__(
        self,
        completion: Optional[CompletionEngine] = None,
        history: Iterable[str] = (),
    ) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit import prompt as pt_prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        class _RecordedHistory(InMemoryHistory):
            # Accepted lines are not stored automatically; the console decides
            # what is recallable once the statement has been redacted.
            def append_string(self, string: str) -> None:
                pass

            def record(self, string: str) -> None:
                super().append_string(string)

        self._history = _RecordedHistory()
        for entry in history:
            if entry:
                self._history.record(entry)

        self._completer = None
        if completion is not None:
            engine = completion

            class _Completer(Completer):
                def get_completions(self, document, complete_event):
                    text_before_cursor = document.text_before_cursor
                    # replace exactly the current token
                    replace_len = len(engine.current_token(text_before_cursor))
                    for word in engine.suggest(text_before_cursor):
                        yield Completion(word, start_position=-replace_len)

            self._completer = _Completer()

        # Key bindings to refresh completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            if b.completer is not None:
                b.start_completion(select_first=False)

        self._session = PromptSession(
            history=self._history,
            completer=self._completer,
            complete_while_typing=self._completer is not None,
            key_bindings=kb,
        )
        self._password_prompt = pt_prompt

    def prompt(self, text: str) -> str:
        return self._session.prompt(text)

    def password_prompt(self, text: str) -> str:
        # separate one-shot session so the passphrase never reaches history
        return self._password_prompt(text, is_password=True)

    def append_history(self, entry: str) -> None:
        if entry:
            self._history.record(entry)


# ===== Fallback: readline / pyreadline3 =====
class ReadlinePrompter(BasePrompter):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        completion: Optional[CompletionEngine] = None,
        history: Iterable[str] = (),
    ) -> None:
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self.completion = completion
        self._seed = [entry for entry in history if entry]
        self._previous_completer = None

    def setup(self) -> None:
        try:
            self.readline.set_auto_history(False)  # type: ignore
        except AttributeError:
            pass
        for entry in self._seed:
            self.readline.add_history(entry)  # type: ignore

        if self.completion is None:
            return

        # Everything that cannot be part of a 'module.method' token is a delimiter
        delims = "".join(chr(c) for c in range(32, 127) if not _is_token_char(chr(c)))
        try:
            self.readline.set_completer_delims(delims + "\t\n")  # type: ignore
        except Exception:
            pass

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()  # type: ignore
            end = self.readline.get_endidx()  # type: ignore
            candidates = self.completion.suggest(buffer_text[:end])
            matches = [word for word in candidates if word.startswith(text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self._previous_completer = self.readline.get_completer()  # type: ignore
        self.readline.set_completer(_complete)  # type: ignore
        try:
            self.readline.parse_and_bind("tab: complete")  # type: ignore
        except Exception:
            pass

    def prompt(self, text: str) -> str:
        return input(text)

    def password_prompt(self, text: str) -> str:
        return getpass.getpass(text)

    def append_history(self, entry: str) -> None:
        if entry:
            self.readline.add_history(entry)  # type: ignore

    def teardown(self) -> None:
        if self.completion is not None:
            self.readline.set_completer(self._previous_completer)  # type: ignore


# ===== Last resort: plain streams =====
class DumbPrompter(BasePrompter):
    """Reads lines from a stream; no completion, no editor history, echoing passphrases."""

    def __init__(self, stream: Optional[TextIO] = None, output: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.output = output
        self._warned = False

    def _read(self, text: str) -> str:
        out = self.output if self.output is not None else sys.stdout
        out.write(text)
        out.flush()
        stream = self.stream if self.stream is not None else sys.stdin
        line = stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def prompt(self, text: str) -> str:
        return self._read(text)

    def password_prompt(self, text: str) -> str:
        if not self._warned:
            print_line(colorize(DUMB_TERMINAL_WARNING, "yellow"), file=self.output)
            self._warned = True
        return self._read(text)


def make_prompter(
    *,
    interactive: bool = True,
    completion: Optional[CompletionEngine] = None,
    history: Iterable[str] = (),
    stream: Optional[TextIO] = None,
) -> BasePrompter:
    """
    Factory to select the best available prompter at runtime.
    Non-interactive sessions and non-tty input always get the plain prompter.
    """
    if not interactive or stream is not None or not sys.stdin.isatty():
        return DumbPrompter(stream)

    history = list(history)
    # Try prompt_toolkit first
    try:
        return PromptToolkitPrompter(completion, history)
    except Exception:
        # Try readline/pyreadline3
        try:
            return ReadlinePrompter(completion, history)
        except Exception:
            # Last resort: plain input with no completion or history
            return DumbPrompter()
