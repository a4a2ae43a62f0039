#!/usr/bin/env python3
# nodeconsole/db/history.py
from __future__ import annotations

"""
Statement history with secret redaction.

Statements matching the secret pattern (by default anything calling
personal.unlockAccount / personal.newAccount, or the raw personal_unlockAccount /
personal_newAccount methods through web3.send) are recorded as an empty
entry, so passphrases typed into the console never reach the history file.

File format: one entry per line. Backslashes and newlines inside an entry
are escaped ('\\\\' and '\\n') so multi-line statements survive a round trip.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_SECRET_PATTERN = r"personal[._][nu]"


def _encode(entry: str) -> str:
    return entry.replace("\\", "\\\\").replace("\n", "\\n")


def _decode(line: str) -> str:
    out: list[str] = []
    chars = iter(line)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        if nxt == "n":
            out.append("\n")
        elif nxt == "\\":
            out.append("\\")
        else:
            # unknown escape: keep it as written
            out.append(ch + nxt)
    return "".join(out)


class HistoryManager:
    """In-memory history log, persisted wholesale to `path`."""

    def __init__(self, path: str | os.PathLike[str], pattern: str = DEFAULT_SECRET_PATTERN) -> None:
        self.path = Path(path)
        self.pattern = re.compile(pattern)
        self._entries: list[str] = []

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def redact(self, statement: str) -> str:
        """Return '' for statements that may carry secrets, else the statement unchanged."""
        return "" if self.pattern.search(statement) else statement

    def record(self, statement: str) -> str:
        entry = self.redact(statement)
        self._entries.append(entry)
        return entry

    def load(self) -> list[str]:
        """Replace the in-memory log with the file contents. A missing file is an empty history."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._entries = []
            return []
        if text and not text.endswith("\n"):
            text += "\n"
        self._entries = [_decode(line) for line in text.split("\n")[:-1]]
        logger.debug("loaded %d history entries from %s", len(self._entries), self.path)
        return self.entries

    def save(self) -> None:
        """Rewrite the whole file atomically (temp file + rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = "".join(_encode(entry) + "\n" for entry in self._entries)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
        logger.debug("saved %d history entries to %s", len(self._entries), self.path)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
