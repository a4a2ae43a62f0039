#!/usr/bin/env python3
# nodeconsole/interface/console.py
from __future__ import annotations

"""
Interactive console loop and batch execution.

Threads:
    control thread   owns the Session; evaluates statements, records history
    InputReader      daemon; prompts for one line per request

The two talk through single-slot queues: the control thread hands the
reader a prompt string, the reader answers with a line, ABORTED (Ctrl-C
inside the editor) or EOF. Interrupts (SIGINT on the main thread, or
Console.interrupt()) set an event the control thread polls between lines,
so an interrupt never runs a half-typed statement.
"""

import logging
import queue
import signal
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from nodeconsole.bindings import ModuleCatalog
from nodeconsole.db.history import HistoryManager
from nodeconsole.ui import format_table
from nodeconsole.ui.utils import colorize, print_line

from .accumulator import StatementAccumulator
from .cli import BasePrompter
from .completion import CompletionEngine
from .runtime import ScriptRuntime

logger = logging.getLogger(__name__)


class _Marker:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


ABORTED = _Marker("ABORTED")
EOF = _Marker("EOF")
INTERRUPT = _Marker("INTERRUPT")


class InputReader(threading.Thread):
    """Prompts for one line each time the control thread asks for it."""

    def __init__(self, prompter: BasePrompter) -> None:
        super().__init__(name="console-input", daemon=True)
        self.prompter = prompter
        self._prompts: queue.Queue[Optional[str]] = queue.Queue(maxsize=1)
        self.lines: queue.Queue[Any] = queue.Queue(maxsize=1)

    def request(self, prompt: str) -> None:
        self._prompts.put(prompt)

    def stop(self) -> None:
        try:
            self._prompts.put_nowait(None)
        except queue.Full:
            pass

    def run(self) -> None:
        while True:
            prompt = self._prompts.get()
            if prompt is None:
                return
            try:
                line = self.prompter.prompt(prompt)
            except KeyboardInterrupt:
                self.lines.put(ABORTED)
                continue
            except EOFError:
                self.lines.put(EOF)
                return
            except Exception:
                logger.exception("line editor failed")
                self.lines.put(EOF)
                return
            self.lines.put(line)


@dataclass
class Session:
    """Per-console state; only the control thread mutates it."""
    accumulator: StatementAccumulator
    history: HistoryManager
    catalog: ModuleCatalog
    completion: CompletionEngine

    @property
    def prompt(self) -> str:
        return self.accumulator.prompt


class Console:
    """Reads statements, evaluates them, and records history."""

    def __init__(
        self,
        session: Session,
        runtime: ScriptRuntime,
        prompter: BasePrompter,
        *,
        bridge: Any = None,
        poll_interval: float = 0.1,
        log_batch_history: bool = False,
    ) -> None:
        self.session = session
        self.runtime = runtime
        self.prompter = prompter
        self.bridge = bridge
        self.poll_interval = poll_interval
        self.log_batch_history = log_batch_history
        self._interrupted = threading.Event()
        self._carried: Any = None
        self._awaiting = False
        self._discard_next = False
        self._closed = False

    # ---------------- Evaluation ----------------

    def execute(self, statement: str, *, filename: str = "<console>") -> bool:
        """Evaluate one complete statement, then record it (redacted) in history."""
        ok = self.runtime.run(statement, filename)
        entry = self.session.history.record(statement.rstrip("\n"))
        if entry:
            self.prompter.append_history(entry)
        return ok

    def _execute_batch(self, source: str, filename: str) -> bool:
        ok = self.runtime.run(source, filename)
        if self.log_batch_history:
            self.session.history.record(source.rstrip("\n"))
        return ok

    def execute_file(self, path: str | Path) -> bool:
        """Evaluate a whole script file as one statement."""
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            print_line(colorize(f"cannot read {path}: {exc.strerror or exc}", "red"))
            return False
        logger.debug("executing %s", path)
        return self._execute_batch(source, str(path))

    def execute_statement(self, text: str) -> bool:
        """Evaluate a single statement, then close the console."""
        try:
            return self._execute_batch(text, "<exec>")
        finally:
            self.close()

    # ---------------- Interactive loop ----------------

    def interrupt(self) -> None:
        """Request an interrupt; safe to call from any thread or a signal handler."""
        self._interrupted.set()

    def _install_sigint(self) -> Any:
        if threading.current_thread() is not threading.main_thread():
            return None
        return signal.signal(signal.SIGINT, lambda signum, frame: self.interrupt())

    def _request(self, reader: InputReader) -> None:
        self._awaiting = True
        reader.request(self.session.prompt)

    def _next_input(self, reader: InputReader) -> Any:
        if self._carried is not None:
            item, self._carried = self._carried, None
            return item
        while True:
            if self._interrupted.is_set():
                self._interrupted.clear()
                return INTERRUPT
            try:
                item = reader.lines.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            self._awaiting = False
            # an interrupt raised while this line was being typed is handled first
            if self._interrupted.is_set():
                self._interrupted.clear()
                self._carried = item
                return INTERRUPT
            return item

    def _discard_pending(self, reader: InputReader) -> None:
        """
        Drop the partial statement, including the continuation line that was
        being typed when the interrupt arrived.
        """
        self.session.accumulator.reset()
        print_line(colorize("(statement discarded)", "dim"))
        if isinstance(self._carried, str):
            self._carried = None
            self._request(reader)
        elif self._carried is None and self._awaiting:
            self._discard_next = True

    def interactive(self) -> None:
        """Run the read-eval loop until 'exit', end of input, or an idle interrupt."""
        accumulator = self.session.accumulator
        self._interrupted.clear()
        self._carried = None
        self._awaiting = False
        self._discard_next = False
        reader = InputReader(self.prompter)
        previous = self._install_sigint()
        try:
            with self.prompter:
                reader.start()
                self._request(reader)
                while True:
                    item = self._next_input(reader)

                    if item is INTERRUPT:
                        if not accumulator.buffer:
                            print_line("caught interrupt, exiting")
                            return
                        self._discard_pending(reader)
                        continue

                    if self._discard_next:
                        self._discard_next = False
                        if isinstance(item, str):
                            self._request(reader)
                            continue

                    if item is EOF:
                        return

                    if item is ABORTED:
                        accumulator.reset()
                        self._request(reader)
                        continue

                    if accumulator.is_exit(item):
                        return

                    statement = accumulator.feed(item)
                    if statement is not None:
                        self.execute(statement)
                    self._request(reader)
        finally:
            reader.stop()
            if previous is not None:
                signal.signal(signal.SIGINT, previous)
            self.close()

    # ---------------- Lifecycle ----------------

    def welcome(self) -> None:
        """Print the module banner."""
        catalog = self.session.catalog
        print_line(colorize("Welcome to the node console!", "bold"))
        if self.bridge is not None and "clientVersion" in catalog.methods("web3"):
            try:
                print_line(f"instance: {self.bridge.call('web3_clientVersion')}")
            except Exception as exc:
                logger.debug("client version unavailable: %s", exc)
        rows = [
            [name, entry.version or "-", str(len(entry.methods))]
            for name, entry in catalog.items()
        ]
        print_line(format_table(rows, headers=["module", "version", "members"]))
        print_line(f"modules: {' '.join(catalog.summary())}")
        print_line()

    def close(self) -> None:
        """Persist history once; later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            self.session.history.save()
        except OSError as exc:
            logger.error("could not save history to %s: %s", self.session.history.path, exc)
