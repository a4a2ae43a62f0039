#!/usr/bin/env python3
# nodeconsole/bindings/loader.py
from __future__ import annotations

"""
Dynamic module binder.

Features:
- Asks the backend which capability modules it supports (once per session).
- Mounts the bridge's own module ('web3') by hand.
- Binds every other module from its manifest, in discovery order, and
  installs a shortcut name for it in the script namespace.
- All-or-nothing: a single bad manifest aborts the whole setup and leaves
  the namespace untouched.
"""

import logging
from typing import Any, Mapping, MutableMapping

from nodeconsole.bridge import RPCBridge, RPCClient

from .catalog import CatalogEntry, ModuleCatalog
from .descriptors import BRIDGE_MODULE, BridgeNamespace, ModuleBinding
from .manifest import BindingError, BindingProvider, is_binding_name, parse_manifest

logger = logging.getLogger(__name__)

# Modules that are native to the namespace and never bound from a manifest.
NATIVE_MODULES = frozenset({BRIDGE_MODULE})


def discover_modules(client: RPCClient) -> dict[str, str]:
    """
    Query the backend for {module: version}.
    Connection failures propagate; the caller decides that they are fatal.
    """
    modules = dict(client.discover_modules())
    logger.debug("backend advertises %d module(s): %s", len(modules), ", ".join(modules))
    return modules


def _reserved_names(binding: ModuleBinding) -> set[str]:
    """Members a manifest may not shadow (regular class attributes)."""
    return {name for name in dir(type(binding)) if not name.startswith("_")}


def _bind_module(
    name: str, version: str, provider: BindingProvider, bridge: RPCBridge
) -> ModuleBinding:
    source = provider.render_binding(name)
    descriptors = parse_manifest(name, source)
    binding = ModuleBinding(name, descriptors, bridge, version)
    clashes = _reserved_names(binding).intersection(binding.methods)
    if clashes:
        raise BindingError(f"{name}: members shadow built-ins: {', '.join(sorted(clashes))}")
    if not descriptors:
        logger.warning("module '%s' has no binding manifest; it is mounted without members", name)
    return binding


def _mount_bridge(
    modules: Mapping[str, str], provider: BindingProvider, bridge: RPCBridge
) -> BridgeNamespace:
    descriptors = parse_manifest(BRIDGE_MODULE, provider.render_binding(BRIDGE_MODULE))
    namespace = BridgeNamespace(bridge, descriptors, modules.get(BRIDGE_MODULE, ""))
    clashes = _reserved_names(namespace).intersection(
        d.name for d in descriptors if d.name not in BridgeNamespace.ENTRY_POINTS
    )
    if clashes:
        raise BindingError(f"{BRIDGE_MODULE}: members shadow built-ins: {', '.join(sorted(clashes))}")
    return namespace


def load_bindings(
    modules: Mapping[str, str],
    provider: BindingProvider,
    bridge: RPCBridge,
    namespace: MutableMapping[str, Any],
) -> ModuleCatalog:
    """
    Bind all advertised modules into `namespace` and return the catalog.

    Raises BindingError if any module fails to bind; in that case nothing
    is written to `namespace`.
    """
    staged: dict[str, Any] = {}
    entries: dict[str, CatalogEntry] = {}

    bridge_ns = _mount_bridge(modules, provider, bridge)
    staged[BRIDGE_MODULE] = bridge_ns
    entries[BRIDGE_MODULE] = CatalogEntry(
        version=modules.get(BRIDGE_MODULE, ""), methods=tuple(bridge_ns.methods)
    )

    for name, version in modules.items():
        if name in NATIVE_MODULES:
            continue
        if not is_binding_name(name):
            raise BindingError(f"invalid module name: {name!r}")
        binding = _bind_module(name, version, provider, bridge)
        bridge_ns.mount(name, binding)
        staged[name] = binding
        entries[name] = CatalogEntry(version=version, methods=tuple(binding.methods))
        logger.debug("bound module %s:%s (%d members)", name, version, len(binding.methods))

    namespace.update(staged)
    return ModuleCatalog(entries)
