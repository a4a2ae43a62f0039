"""Shared fixtures: an in-process backend with a handful of modules."""

import pytest

from nodeconsole.bindings import ManifestProvider, load_bindings
from nodeconsole.bridge import InProcClient, RPCBridge
from nodeconsole.interface import ScriptRuntime

MODULES = {"admin": "1.0", "exp": "1.0", "personal": "1.0", "web3": "1.0"}


class ScriptedPrompter:
    """
    Prompter fed from a list.

    Entries are returned in order. KeyboardInterrupt / EOFError instances
    are raised instead of returned; callables are invoked and the prompter
    moves on to the next entry.
    """

    def __init__(self, lines, passwords=()):
        self.lines = list(lines)
        self.passwords = list(passwords)
        self.prompts = []
        self.history = []
        self.setup_calls = 0
        self.teardown_calls = 0

    def __enter__(self):
        self.setup_calls += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.teardown_calls += 1

    def prompt(self, text):
        self.prompts.append(text)
        while self.lines:
            item = self.lines.pop(0)
            if isinstance(item, BaseException):
                raise item
            if callable(item):
                item()
                continue
            return item
        raise EOFError

    def password_prompt(self, text):
        self.prompts.append(text)
        if not self.passwords:
            raise EOFError
        item = self.passwords.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def append_history(self, entry):
        self.history.append(entry)


@pytest.fixture
def client():
    backend = InProcClient(MODULES)
    backend.register("admin_datadir", lambda: "/data/node")
    backend.register("admin_peers", lambda: [])
    backend.register("admin_startRPC", lambda *args: True)
    backend.register("admin_stopRPC", lambda: True)
    backend.register("admin_addPeer", lambda url: url.startswith("enode://"))
    backend.register("exp_blockNumber", lambda: 42)
    backend.register("exp_getBalance", lambda addr, block="latest": 1000)
    backend.register("personal_listAccounts", lambda: ["0x01"])
    backend.register("personal_unlockAccount", lambda addr, pw, *rest: pw == "hunter2")
    backend.register("web3_clientVersion", lambda: "Gexp/v1.0.0")
    backend.register("web3_sha3", lambda data: "0x" + data[::-1])
    return backend


@pytest.fixture
def bridge(client):
    return RPCBridge(client)


@pytest.fixture
def runtime():
    return ScriptRuntime()


@pytest.fixture
def catalog(client, bridge, runtime):
    return load_bindings(client.discover_modules(), ManifestProvider(), bridge, runtime.namespace)


@pytest.fixture
def scripted():
    return ScriptedPrompter
