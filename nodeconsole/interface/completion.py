#!/usr/bin/env python3
# nodeconsole/interface/completion.py
from __future__ import annotations

"""
Command line completion over the session's module catalog.

This module offers token-aware suggestions for:
- 'module.partial': methods of that module starting with 'partial'.
- an exact module name: all of that module's methods.
- a module prefix: matching module names.
"""

from nodeconsole.bindings import ModuleCatalog


def _is_token_char(ch: str) -> bool:
    # Letters, digits, '_' and '.'; digits keep the bridge alias (web3) intact.
    return ch.isascii() and (ch.isalnum() or ch in "_.")


def _split_current_token(line: str, cursor: int) -> tuple[str, str, str]:
    """
    Return (head, token, tail) around `cursor`.

    The token is the run of identifier characters and dots ending at the
    cursor; head and tail are left untouched by completion.
    """
    start = cursor
    while start > 0 and _is_token_char(line[start - 1]):
        start -= 1
    return line[:start], line[start:cursor], line[cursor:]


class CompletionEngine:
    """Prefix search over one session's catalog."""

    def __init__(self, catalog: ModuleCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> ModuleCatalog:
        return self._catalog

    def _method_matches(self, token: str) -> list[str]:
        elements = token.split(".")
        if len(elements) != 2:
            return []
        module, partial = elements
        return [
            f"{module}.{method}"
            for method in self._catalog.methods(module)
            if method.startswith(partial)
        ]

    def _module_matches(self, token: str) -> tuple[list[str], list[str]]:
        """(methods of the module named exactly `token`, modules strictly prefixed by it)"""
        exact = list(self._catalog.methods(token)) if token in self._catalog else []
        prefixed = [
            name for name in self._catalog.names()
            if name != token and name.startswith(token)
        ]
        return exact, prefixed

    def keyword_suggestions(self, token: str) -> list[str]:
        """
        Strategy:
          1) 'mod.part' -> 'mod.method' for methods of 'mod' starting with 'part'
          2) exact module name -> that module's methods (unqualified)
          3) module prefix -> matching module names
        """
        if "." in token:
            return self._method_matches(token)
        exact, prefixed = self._module_matches(token)
        return exact + prefixed

    def complete(self, line: str, cursor: int) -> tuple[str, list[str], str]:
        """Return (head, suggestions, tail) for the token ending at `cursor`."""
        cursor = max(0, min(cursor, len(line)))
        if not line or cursor == 0:
            return line[:cursor], [], line[cursor:]
        head, token, tail = _split_current_token(line, cursor)
        return head, self.keyword_suggestions(token), tail

    def suggest(self, text_before_cursor: str) -> list[str]:
        """
        Replacement words for the current token. Always fully qualified,
        since line editors substitute the whole token with the chosen word.
        """
        token = self.current_token(text_before_cursor)
        if not token:
            return []
        if "." in token:
            return self._method_matches(token)
        exact, prefixed = self._module_matches(token)
        return [f"{token}.{method}" for method in exact] + prefixed

    @staticmethod
    def current_token(text_before_cursor: str) -> str:
        return _split_current_token(text_before_cursor, len(text_before_cursor))[1]
