#!/usr/bin/env python3
# nodeconsole/bindings/__init__.py
from __future__ import annotations

"""
Package for capability module discovery and binding.

Provides:
- Typed method descriptors and namespace module objects (`descriptors`).
- Manifest parsing and the bundled manifest provider (`manifest`).
- The session-scoped module catalog (`catalog`).
- The binder that mounts every advertised module (`loader`).
"""


from .descriptors import (
    BRIDGE_MODULE,
    MethodDescriptor,
    BoundMethod,
    ModuleBinding,
    BridgeNamespace,
)
from .manifest import (
    MANIFEST_DIR,
    BindingError,
    BindingProvider,
    ManifestProvider,
    parse_manifest,
)
from .catalog import CatalogEntry, ModuleCatalog
from .loader import NATIVE_MODULES, discover_modules, load_bindings

__all__ = [
    "BRIDGE_MODULE",
    "MethodDescriptor",
    "BoundMethod",
    "ModuleBinding",
    "BridgeNamespace",
    "MANIFEST_DIR",
    "BindingError",
    "BindingProvider",
    "ManifestProvider",
    "parse_manifest",
    "CatalogEntry",
    "ModuleCatalog",
    "NATIVE_MODULES",
    "discover_modules",
    "load_bindings",
]
