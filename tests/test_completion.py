"""Tests for catalog-backed completion."""

import pytest

from nodeconsole.bindings import ModuleCatalog
from nodeconsole.interface import CompletionEngine


@pytest.fixture
def engine():
    catalog = ModuleCatalog.from_methods({
        "admin": ["addPeer", "startRPC", "stopRPC", "datadir"],
        "exp": ["blockNumber", "getBalance"],
        "expanse": ["version"],
        "personal": ["newAccount", "unlockAccount"],
        "web3": ["send", "sendAsync", "sha3"],
    })
    return CompletionEngine(catalog)


def test_module_method_prefix(engine):
    """'admin.st' offers exactly the matching admin methods, in catalog order."""
    head, suggestions, tail = engine.complete("admin.st", 8)
    assert head == ""
    assert suggestions == ["admin.startRPC", "admin.stopRPC"]
    assert tail == ""


def test_head_and_tail_are_preserved(engine):
    line = "x = admin.st + 1"
    head, suggestions, tail = engine.complete(line, 12)
    assert head == "x = "
    assert suggestions == ["admin.startRPC", "admin.stopRPC"]
    assert tail == " + 1"


def test_exact_module_lists_its_methods(engine):
    _, suggestions, _ = engine.complete("admin", 5)
    assert suggestions == ["addPeer", "startRPC", "stopRPC", "datadir"]


def test_exact_module_also_offers_longer_module_names(engine):
    _, suggestions, _ = engine.complete("exp", 3)
    assert suggestions == ["blockNumber", "getBalance", "expanse"]


def test_module_prefix(engine):
    _, suggestions, _ = engine.complete("pers", 4)
    assert suggestions == ["personal"]


def test_bridge_alias_with_digit(engine):
    """The scan keeps 'web3' together."""
    _, suggestions, _ = engine.complete("y = web3.se", 11)
    assert suggestions == ["web3.send", "web3.sendAsync"]


def test_empty_line_or_cursor_at_start(engine):
    assert engine.complete("", 0) == ("", [], "")
    assert engine.complete("admin", 0) == ("", [], "admin")


def test_two_dots_offer_nothing(engine):
    _, suggestions, _ = engine.complete("web3.admin.st", 13)
    assert suggestions == []


def test_unknown_module(engine):
    _, suggestions, _ = engine.complete("nope.x", 6)
    assert suggestions == []


def test_suggest_qualifies_module_methods(engine):
    """Editors replace the whole token, so exact-module results are qualified."""
    assert engine.suggest("admin") == [
        "admin.addPeer",
        "admin.startRPC",
        "admin.stopRPC",
        "admin.datadir",
    ]
    assert engine.suggest("print(admin.sto") == ["admin.stopRPC"]
    assert engine.suggest("x = ") == []


def test_current_token():
    assert CompletionEngine.current_token("f(exp.get") == "exp.get"
    assert CompletionEngine.current_token("a b") == "b"
    assert CompletionEngine.current_token("") == ""
