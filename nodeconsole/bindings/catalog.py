#!/usr/bin/env python3
# nodeconsole/bindings/catalog.py
from __future__ import annotations

"""
Session-scoped catalog of bound capability modules.

The catalog is produced by the binding loader from the modules it actually
mounted, so every method listed here exists in the script namespace. It is
read-only once built; each session holds its own instance.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Version advertised by the backend and the bound member names."""
    version: str
    methods: tuple[str, ...]


class ModuleCatalog(Mapping[str, CatalogEntry]):
    """Immutable mapping of module name -> CatalogEntry, in discovery order."""

    def __init__(self, entries: Mapping[str, CatalogEntry] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_methods(
        cls,
        methods: Mapping[str, Iterable[str]],
        versions: Mapping[str, str] | None = None,
    ) -> "ModuleCatalog":
        """Build a catalog from plain {module: [method, ...]} data."""
        versions = versions or {}
        return cls({
            name: CatalogEntry(version=versions.get(name, ""), methods=tuple(names))
            for name, names in methods.items()
        })

    # ---------------- Mapping ----------------

    def __getitem__(self, name: str) -> CatalogEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ---------------- Lookup ----------------

    def names(self) -> list[str]:
        """Module names in discovery order."""
        return list(self._entries)

    def methods(self, name: str) -> tuple[str, ...]:
        """Bound member names of a module, or () if unknown."""
        entry = self._entries.get(name)
        return entry.methods if entry else ()

    def summary(self) -> list[str]:
        """Sorted 'name:version' strings for the welcome banner."""
        return sorted(f"{name}:{entry.version}" for name, entry in self._entries.items())
