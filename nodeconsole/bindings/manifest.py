#!/usr/bin/env python3
# nodeconsole/bindings/manifest.py
from __future__ import annotations

"""
Binding manifests: where module method sets come from.

A manifest is a small JSON document describing one capability module:

    {
      "methods": [
        "stopRPC",
        {"name": "addPeer", "params": 1},
        {"name": "datadir", "kind": "property"},
        {"name": "getBalance", "params": 2, "required": 1, "call": "exp_getBalance"}
      ]
    }

A bare string is a method taking no arguments. `call` defaults to
'<module>_<name>'. Manifests are parsed into MethodDescriptors, never executed.
"""

import json
import keyword
from pathlib import Path
from typing import Any, Protocol

from .descriptors import METHOD, PROPERTY, MethodDescriptor

# Bundled manifests shipped with the package.
MANIFEST_DIR = Path(__file__).parent / "manifests"

_KINDS = {METHOD, PROPERTY}


class BindingError(RuntimeError):
    """A module binding could not be built; session setup must abort."""


class BindingProvider(Protocol):
    """Anything that can produce the binding source for a module name."""

    def render_binding(self, module_name: str) -> str:  # pragma: no cover - signature only
        ...


class ManifestProvider:
    """Serves '<module>.json' manifests from a directory (bundled ones by default)."""

    def __init__(self, search_path: str | Path | None = None) -> None:
        self.search_path = Path(search_path) if search_path else MANIFEST_DIR

    def render_binding(self, module_name: str) -> str:
        """Return the manifest text, or '' when the module has no manifest."""
        if not is_binding_name(module_name):
            raise BindingError(f"invalid module name: {module_name!r}")
        path = self.search_path / f"{module_name}.json"
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""


def is_binding_name(name: str) -> bool:
    """A name usable as an attribute in console scripts."""
    return name.isidentifier() and not keyword.iskeyword(name)


def _as_arity(module_name: str, field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise BindingError(f"{module_name}: '{field}' must be a non-negative integer, got {value!r}")
    return value


def _parse_entry(module_name: str, entry: Any) -> MethodDescriptor:
    if isinstance(entry, str):
        entry = {"name": entry}
    if not isinstance(entry, dict):
        raise BindingError(f"{module_name}: method entries must be strings or objects, got {entry!r}")

    name = entry.get("name")
    if not isinstance(name, str) or not is_binding_name(name) or name.startswith("_"):
        raise BindingError(f"{module_name}: invalid method name {name!r}")

    kind = entry.get("kind", METHOD)
    if kind not in _KINDS:
        raise BindingError(f"{module_name}.{name}: kind must be one of {sorted(_KINDS)}, got {kind!r}")

    params = _as_arity(module_name, "params", entry.get("params", 0))
    required = _as_arity(module_name, "required", entry.get("required", params))
    if required > params:
        raise BindingError(f"{module_name}.{name}: required ({required}) exceeds params ({params})")
    if kind == PROPERTY and params:
        raise BindingError(f"{module_name}.{name}: properties take no parameters")

    call = entry.get("call", f"{module_name}_{name}")
    if not isinstance(call, str) or not call:
        raise BindingError(f"{module_name}.{name}: 'call' must be a non-empty string")

    return MethodDescriptor(name=name, call=call, params=params, required=required, kind=kind)


def parse_manifest(module_name: str, source: str) -> list[MethodDescriptor]:
    """
    Validate manifest text into descriptors (manifest order).
    Empty source binds a module with no members.
    """
    if not source.strip():
        return []
    try:
        document = json.loads(source)
    except json.JSONDecodeError as exc:
        raise BindingError(f"{module_name}: malformed manifest ({exc})") from exc

    if not isinstance(document, dict) or not isinstance(document.get("methods"), list):
        raise BindingError(f"{module_name}: manifest must be an object with a 'methods' array")

    descriptors: list[MethodDescriptor] = []
    seen: set[str] = set()
    for entry in document["methods"]:
        descriptor = _parse_entry(module_name, entry)
        if descriptor.name in seen:
            raise BindingError(f"{module_name}: duplicate method '{descriptor.name}'")
        seen.add(descriptor.name)
        descriptors.append(descriptor)
    return descriptors
