#!/usr/bin/env python3
# nodeconsole/interface/runtime.py
from __future__ import annotations

"""
Embedded script runtime.

Statements are compiled and evaluated in one persistent namespace that
holds the bound modules. A lone expression is compiled in 'eval' mode so
its value can be printed; anything else runs in 'exec' mode.
"""

import json
import logging
import traceback
from pprint import pformat
from typing import Any, MutableMapping

from nodeconsole.ui.utils import colorize, print_line

logger = logging.getLogger(__name__)

RESULT_NAME = "_"


def _default_namespace() -> dict[str, Any]:
    import builtins

    return {"__name__": "__console__", "__builtins__": builtins}


def render_value(value: Any) -> str:
    """JSON-like structures are pretty printed; everything else uses repr()."""
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            return pformat(value)
    return repr(value)


class ScriptRuntime:
    """Compiles and evaluates console statements in a shared namespace."""

    def __init__(self, namespace: MutableMapping[str, Any] | None = None) -> None:
        self.namespace = namespace if namespace is not None else _default_namespace()

    def evaluate(self, source: str, filename: str = "<console>") -> Any:
        """
        Evaluate `source` and return the value of a lone expression, or None.
        Exceptions raised by the statement propagate to the caller.
        """
        source = source.strip("\n")
        if not source.strip():
            return None
        try:
            code = compile(source, filename, "eval")
        except SyntaxError:
            code = compile(source + "\n", filename, "exec")
            exec(code, self.namespace)
            return None
        return eval(code, self.namespace)

    def run(self, source: str, filename: str = "<console>") -> bool:
        """
        Evaluate and print the outcome. Returns False if the statement raised.
        """
        try:
            value = self.evaluate(source, filename)
        except SystemExit:
            raise
        except BaseException as exc:  # KeyboardInterrupt included: the session survives it
            self._report(exc)
            return False

        if value is not None:
            self.namespace[RESULT_NAME] = value
            print_line(render_value(value))
        return True

    def _report(self, exc: BaseException) -> None:
        try:
            message = "".join(traceback.format_exception_only(type(exc), exc)).rstrip()
        except Exception:
            logger.debug("failed to format %s", type(exc).__name__, exc_info=True)
            message = f"[native] error: {type(exc).__name__}"
        print_line(colorize(message, "red"))
