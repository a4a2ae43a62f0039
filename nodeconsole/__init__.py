#!/usr/bin/env python3
# nodeconsole/__init__.py
from __future__ import annotations
"""
Interactive scripting console for a JSON-RPC controlled node.

Avoid eager imports that trigger package initialization cascades; the
subpackages (bridge, bindings, interface, db, frontend, boot) expose their
APIs through their own __init__.py files.
"""

__version__ = "0.1.0"
