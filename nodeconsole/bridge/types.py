#!/usr/bin/env python3
# nodeconsole/bridge/types.py
from __future__ import annotations

"""
Call and response containers shared by the bridge and RPC clients.

This module defines:
- CallRecord: one request (method, params, correlation id).
- RPCError: a JSON-RPC error raised by clients and carried in responses.
- RPCResponse: the outcome of one CallRecord, renderable as a JSON-RPC object.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC 2.0 error codes
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RPCError(Exception):
    """A JSON-RPC error object raised as an exception."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out

    def __str__(self) -> str:
        return f"{self.message} (code {self.code})"

    def __repr__(self) -> str:
        return f"RPCError(code={self.code}, message={self.message!r})"


@dataclass(slots=True)
class CallRecord:
    """
    A single request produced by script evaluation.

    Attributes:
        method: Backend method name, e.g. 'admin_peers'.
        params: Ordered parameter values.
        id: Correlation id; copied unchanged into the matching response.
    """
    method: str
    params: list[Any] = field(default_factory=list)
    id: Any = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CallRecord":
        """Build a record from a JSON-RPC request object."""
        if not isinstance(payload, Mapping):
            raise RPCError(INVALID_REQUEST, "request must be an object")
        method = payload.get("method")
        if not isinstance(method, str) or not method:
            raise RPCError(INVALID_REQUEST, "request has no method")
        params = payload.get("params", [])
        if params is None:
            params = []
        if not isinstance(params, (list, tuple)):
            raise RPCError(INVALID_PARAMS, "params must be an array")
        return cls(method=method, params=list(params), id=payload.get("id"))

    def to_payload(self) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": self.id,
            "method": self.method,
            "params": list(self.params),
        }


@dataclass(slots=True)
class RPCResponse:
    """Outcome of one CallRecord: either a result or an RPCError."""
    id: Any
    result: Any = None
    error: RPCError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the result, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.result

    def to_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error is not None:
            out["error"] = self.error.to_dict()
        else:
            out["result"] = self.result
        return out
