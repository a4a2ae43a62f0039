#!/usr/bin/env python3
# nodeconsole/bridge/__init__.py
from __future__ import annotations

"""
Package for the script-to-backend call path.

Provides:
- Request/response containers and JSON-RPC errors (`types`).
- The RPC client contract and an in-process client (`client`).
- The bridge object the script namespace calls through (`bridge`).
"""


from .types import (
    CallRecord,
    RPCError,
    RPCResponse,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
)
from .client import RPCClient, InProcClient
from .bridge import RPCBridge

__all__ = [
    "CallRecord",
    "RPCError",
    "RPCResponse",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "RPCClient",
    "InProcClient",
    "RPCBridge",
]
