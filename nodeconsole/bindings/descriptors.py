#!/usr/bin/env python3
# nodeconsole/bindings/descriptors.py
from __future__ import annotations

"""
Typed method descriptors and the module objects mounted in the script namespace.

This module defines:
- MethodDescriptor: one backend operation (name, RPC method, arity, kind).
- BoundMethod: a callable that checks arity and forwards through the bridge.
- ModuleBinding: a capability module exposing its descriptors as attributes.
- BridgeNamespace: the privileged bridge module ('web3') with send/sendAsync.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from nodeconsole.bridge import RPCBridge

# The bridge's own module; mounted by hand, never through a manifest binding.
BRIDGE_MODULE = "web3"

METHOD = "method"
PROPERTY = "property"


@dataclass(frozen=True, slots=True)
class MethodDescriptor:
    """
    One operation advertised by a capability module.

    Attributes:
        name: Attribute name in the script namespace (e.g. 'addPeer').
        call: RPC method invoked (e.g. 'admin_addPeer').
        params: Maximum number of positional arguments.
        required: Minimum number of positional arguments.
        kind: 'method' (callable) or 'property' (fetched on attribute access).
    """
    name: str
    call: str
    params: int = 0
    required: int = 0
    kind: str = METHOD

    def check_arity(self, qualified_name: str, args: Sequence[Any]) -> None:
        given = len(args)
        if self.required <= given <= self.params:
            return
        if self.required == self.params:
            expected = f"{self.params} argument{'s' if self.params != 1 else ''}"
        else:
            expected = f"{self.required} to {self.params} arguments"
        raise TypeError(f"{qualified_name}() takes {expected} ({given} given)")


class BoundMethod:
    """A module method as seen from a script: validates arity, then calls the bridge."""

    __slots__ = ("_module", "_descriptor", "_bridge")

    def __init__(self, module: str, descriptor: MethodDescriptor, bridge: RPCBridge) -> None:
        self._module = module
        self._descriptor = descriptor
        self._bridge = bridge

    @property
    def descriptor(self) -> MethodDescriptor:
        return self._descriptor

    def __call__(self, *args: Any) -> Any:
        self._descriptor.check_arity(f"{self._module}.{self._descriptor.name}", args)
        return self._bridge.call(self._descriptor.call, list(args))

    def __repr__(self) -> str:
        return f"<method {self._module}.{self._descriptor.name} -> {self._descriptor.call}>"


class ModuleBinding:
    """A capability module mounted in the script namespace."""

    def __init__(
        self,
        name: str,
        descriptors: Iterable[MethodDescriptor],
        bridge: RPCBridge,
        version: str = "",
    ) -> None:
        self._name = name
        self._version = version
        self._bridge = bridge
        self._descriptors: dict[str, MethodDescriptor] = {d.name: d for d in descriptors}

    @property
    def methods(self) -> list[str]:
        """Bound member names, in manifest order."""
        return list(self._descriptors)

    def __getattr__(self, attr: str) -> Any:
        # Only reached for names that are not regular attributes.
        if attr.startswith("_"):
            raise AttributeError(attr)
        descriptor = self._descriptors.get(attr)
        if descriptor is None:
            raise AttributeError(f"module '{self._name}' has no member '{attr}'")
        if descriptor.kind == PROPERTY:
            return self._bridge.call(descriptor.call, [])
        return BoundMethod(self._name, descriptor, self._bridge)

    def __dir__(self) -> list[str]:
        return sorted(self.methods)

    def __repr__(self) -> str:
        version = f" {self._version}" if self._version else ""
        return f"<module {self._name}{version}: {len(self._descriptors)} members>"


class BridgeNamespace(ModuleBinding):
    """
    The bridge's own namespace. Exposes the raw call entry points and
    carries every generated module as an attribute (web3.admin, ...).
    """

    ENTRY_POINTS = ("send", "sendAsync")

    def __init__(
        self,
        bridge: RPCBridge,
        descriptors: Iterable[MethodDescriptor] = (),
        version: str = "",
    ) -> None:
        super().__init__(BRIDGE_MODULE, descriptors, bridge, version)
        self._modules: dict[str, ModuleBinding] = {}

    @property
    def methods(self) -> list[str]:
        return [*self.ENTRY_POINTS, *(n for n in self._descriptors if n not in self.ENTRY_POINTS)]

    def send(self, payload: Any) -> Any:
        return self._bridge.send(payload)

    def sendAsync(self, payload: Any, callback: Any = None) -> Any:
        return self._bridge.send_async(payload, callback)

    def mount(self, name: str, binding: ModuleBinding) -> None:
        self._modules[name] = binding

    def __getattr__(self, attr: str) -> Any:
        if not attr.startswith("_") and attr in self._modules:
            return self._modules[attr]
        return super().__getattr__(attr)

    def __dir__(self) -> list[str]:
        return sorted({*self.methods, *self._modules})
