"""Tests for the operator confirmation and unlock hooks."""

from nodeconsole.bridge import RPCBridge, RPCError
from nodeconsole.frontend import CONFIRM_QUESTION, PASSPHRASE_PROMPT, ConsoleFrontend


def test_confirm_yes(scripted, capsys):
    prompter = scripted(["  yes please"])
    frontend = ConsoleFrontend(prompter)
    assert frontend.confirm_transaction({"to": "0x02", "value": 1}) is True
    assert prompter.prompts == [CONFIRM_QUESTION]
    assert '"to": "0x02"' in capsys.readouterr().out


def test_confirm_anything_else_denies(scripted):
    frontend = ConsoleFrontend(scripted(["n", "", "Y", "ok"]))
    assert [frontend.confirm_transaction("tx") for _ in range(4)] == [False, False, False, False]


def test_confirm_prompt_failure_denies(scripted):
    assert ConsoleFrontend(scripted([KeyboardInterrupt()])).confirm_transaction("tx") is False
    assert ConsoleFrontend(scripted([])).confirm_transaction("tx") is False


def test_confirm_disabled_skips_prompt(scripted):
    prompter = scripted([])
    assert ConsoleFrontend(prompter, confirm_enabled=False).confirm_transaction("tx") is True
    assert prompter.prompts == []


def test_unlock_through_bridge(client, scripted, capsys):
    bridge = RPCBridge(client)
    prompter = scripted([], passwords=["hunter2"])
    frontend = ConsoleFrontend(prompter, bridge=bridge)
    bridge.attach_frontend(frontend)

    assert bridge.unlock_account(bytes.fromhex("0a0b")) is True
    out = capsys.readouterr().out
    assert "Please unlock account 0x0a0b." in out
    assert "Account is now unlocked for this session." in out
    assert prompter.prompts == [PASSPHRASE_PROMPT]


def test_unlock_wrong_passphrase(client, scripted, capsys):
    frontend = ConsoleFrontend(scripted([], passwords=["wrong"]), bridge=RPCBridge(client))
    assert frontend.unlock_account("0x01") is False
    assert "unlocked" not in capsys.readouterr().out


def test_unlock_backend_error(scripted, capsys):
    def unlock(address, passphrase):
        raise RPCError(-32000, "could not decrypt key")

    frontend = ConsoleFrontend(scripted([], passwords=["pw"]), unlock=unlock)
    assert frontend.unlock_account("0x01") is False
    assert "could not decrypt key" in capsys.readouterr().out


def test_unlock_prompt_interrupted(scripted):
    calls = []
    frontend = ConsoleFrontend(
        scripted([], passwords=[KeyboardInterrupt()]),
        unlock=lambda a, p: calls.append(a),
    )
    assert frontend.unlock_account("0x01") is False
    assert calls == []


def test_unlock_is_not_retried(scripted):
    calls = []

    def unlock(address, passphrase):
        calls.append(passphrase)
        return False

    frontend = ConsoleFrontend(scripted([], passwords=["a", "b"]), unlock=unlock)
    assert frontend.unlock_account("0x01") is False
    assert calls == ["a"]
