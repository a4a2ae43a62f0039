#!/usr/bin/env python3
# nodeconsole/bridge/bridge.py
from __future__ import annotations

"""
The bridge between the script namespace and the RPC client.

Every backend operation a statement performs lands here:
- Generated module bindings use `call()`, which returns the result or raises.
- Scripts may use `send()` / `send_async()` with raw JSON-RPC objects.
- The backend reaches the operator through `confirm_transaction()` and
  `unlock_account()`, which delegate to the attached frontend.

Batches are always dispatched one record at a time, so a failing record
produces an error in its own position and never disturbs its neighbours.
"""

import dataclasses
import itertools
import logging
from typing import Any, Callable, Mapping, Sequence

from .client import RPCClient
from .types import INTERNAL_ERROR, CallRecord, RPCError, RPCResponse

logger = logging.getLogger(__name__)


class RPCBridge:
    """Forwards calls into an RPC client and marshals results back."""

    def __init__(self, client: RPCClient, frontend: Any = None) -> None:
        self._client = client
        self._ids = itertools.count(1)
        self.frontend: Any = None
        if frontend is not None:
            self.attach_frontend(frontend)

    @property
    def client(self) -> RPCClient:
        return self._client

    def attach_frontend(self, frontend: Any) -> None:
        """Install the operator hooks and hand them to the client when it accepts them."""
        self.frontend = frontend
        setter = getattr(self._client, "set_frontend", None)
        if callable(setter):
            setter(frontend)

    # ---------------- Dispatch ----------------

    def dispatch(
        self, request: CallRecord | Sequence[CallRecord]
    ) -> RPCResponse | list[RPCResponse]:
        """Send one record or a batch; batch responses keep request order."""
        if isinstance(request, CallRecord):
            return self._dispatch_one(request)
        return [self._dispatch_one(record) for record in request]

    def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Perform one call and return its result; raises RPCError on failure."""
        response = self._dispatch_one(CallRecord(method=method, params=list(params)))
        return response.unwrap()

    def _dispatch_one(self, record: CallRecord) -> RPCResponse:
        if record.id is None:
            record = dataclasses.replace(record, id=next(self._ids))
        try:
            result = self._client.send(record)
        except RPCError as exc:
            logger.debug("call %s id=%s failed: %s", record.method, record.id, exc)
            return RPCResponse(id=record.id, error=exc)
        except ConnectionError as exc:
            logger.warning("backend unreachable during %s: %s", record.method, exc)
            return RPCResponse(id=record.id, error=RPCError(INTERNAL_ERROR, f"connection error: {exc}"))
        except Exception as exc:
            logger.debug("call %s id=%s raised", record.method, record.id, exc_info=True)
            return RPCResponse(
                id=record.id,
                error=RPCError(INTERNAL_ERROR, f"{type(exc).__name__}: {exc}"),
            )
        return RPCResponse(id=record.id, result=result)

    # ---------------- Script-facing entry points ----------------

    def send(self, payload: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """
        Take a JSON-RPC request object (or a list of them) and return the
        matching response object(s). Malformed requests get an error
        response in their own position.
        """
        if isinstance(payload, Mapping):
            return self._send_payload(payload)
        return [self._send_payload(item) for item in payload]

    def send_async(
        self,
        payload: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        callback: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Same as send(); runs on the calling thread and invokes `callback` before returning."""
        response = self.send(payload)
        if callback is not None:
            callback(response)
        return response

    def _send_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        try:
            record = CallRecord.from_payload(payload)
        except RPCError as exc:
            request_id = payload.get("id") if isinstance(payload, Mapping) else None
            return RPCResponse(id=request_id, error=exc).to_payload()
        return self._dispatch_one(record).to_payload()

    # ---------------- Frontend hooks ----------------

    def confirm_transaction(self, description: Any) -> bool:
        if self.frontend is None:
            logger.warning("transaction confirmation requested with no frontend attached")
            return False
        return self.frontend.confirm_transaction(description)

    def unlock_account(self, address: Any) -> bool:
        if self.frontend is None:
            logger.warning("account unlock requested with no frontend attached")
            return False
        return self.frontend.unlock_account(address)
