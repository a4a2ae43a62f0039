#!/usr/bin/env python3
# nodeconsole/bridge/client.py
from __future__ import annotations

"""
RPC client contract and an in-process implementation.

The console never talks to a transport directly. Anything that offers
`discover_modules()` and `send()` can back a session: a network client
living elsewhere, or `InProcClient`, which dispatches straight into Python
handlers registered per method.
"""

import logging
from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable

from .types import INTERNAL_ERROR, METHOD_NOT_FOUND, CallRecord, RPCError

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


@runtime_checkable
class RPCClient(Protocol):
    """Protocol every backend client implements."""

    def discover_modules(self) -> Mapping[str, str]:  # pragma: no cover - signature only
        """Return {module name: version}; raise ConnectionError if unreachable."""
        ...

    def send(self, request: CallRecord | Sequence[CallRecord]) -> Any:  # pragma: no cover - signature only
        """Return a result, or a list of results/RPCErrors for a batch."""
        ...


class InProcClient:
    """
    Backend client that runs handlers in the calling thread.

    Handlers are plain callables keyed by RPC method name and receive the
    call params positionally. The frontend attached by the bridge is
    available to handlers as `client.frontend`, which is how a backend asks
    the operator for confirmations or passphrases.
    """

    def __init__(
        self,
        modules: Mapping[str, str] | None = None,
        handlers: Mapping[str, Handler] | None = None,
    ) -> None:
        self._modules: dict[str, str] = dict(modules or {})
        self._handlers: dict[str, Handler] = dict(handlers or {})
        self.frontend: Any = None
        self._closed = False

    # ---------------- Registration ----------------

    def register(self, method: str, handler: Handler | None = None):
        """Register a handler; usable directly or as a decorator."""
        if handler is not None:
            self._handlers[method] = handler
            return handler

        def wrapper(func: Handler) -> Handler:
            self._handlers[method] = func
            return func

        return wrapper

    def set_frontend(self, frontend: Any) -> None:
        self.frontend = frontend

    def close(self) -> None:
        """Mark the backend unreachable; later calls raise ConnectionError."""
        self._closed = True

    # ---------------- Contract ----------------

    def discover_modules(self) -> dict[str, str]:
        self._ensure_open()
        return dict(self._modules)

    def send(self, request: CallRecord | Sequence[CallRecord]) -> Any:
        if isinstance(request, CallRecord):
            return self._invoke(request)

        results: list[Any] = []
        for record in request:
            try:
                results.append(self._invoke(record))
            except RPCError as exc:
                results.append(exc)
            except ConnectionError:
                raise
            except Exception as exc:
                results.append(RPCError(INTERNAL_ERROR, f"{type(exc).__name__}: {exc}"))
        return results

    # ---------------- Internals ----------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConnectionError("backend is not reachable")

    def _invoke(self, record: CallRecord) -> Any:
        self._ensure_open()
        handler = self._handlers.get(record.method)
        if handler is None:
            raise RPCError(METHOD_NOT_FOUND, f"the method {record.method} does not exist/is not available")
        logger.debug("inproc call %s id=%s", record.method, record.id)
        return handler(*record.params)
