"""Tests for history recording, redaction and persistence."""

from nodeconsole.db import HistoryManager


def test_secret_calls_are_recorded_empty(tmp_path):
    history = HistoryManager(tmp_path / "history")
    assert history.record('personal.unlockAccount("0x01", "hunter2")') == ""
    assert history.record('personal.newAccount("pw")') == ""
    assert history.entries == ["", ""]


def test_raw_bridge_calls_to_secret_methods_are_recorded_empty(tmp_path):
    """Calling personal_unlockAccount through web3.send must not store the passphrase."""
    history = HistoryManager(tmp_path / "history")
    assert history.record(
        'web3.send({"method": "personal_unlockAccount", "params": ["0x01", "hunter2"]})'
    ) == ""
    assert history.record(
        'web3.sendAsync({"method": "personal_newAccount", "params": ["pw"]}, print)'
    ) == ""
    history.save()
    assert "hunter2" not in (tmp_path / "history").read_text(encoding="utf-8")


def test_public_reads_are_recorded_verbatim(tmp_path):
    history = HistoryManager(tmp_path / "history")
    assert history.record("personal.listAccounts") == "personal.listAccounts"
    assert history.record("exp.blockNumber") == "exp.blockNumber"
    assert len(history) == 2


def test_custom_pattern(tmp_path):
    history = HistoryManager(tmp_path / "history", pattern=r"secret")
    assert history.record("personal.unlockAccount(a)") == "personal.unlockAccount(a)"
    assert history.record("x = secret") == ""


def test_round_trip_with_multiline_and_empty_entries(tmp_path):
    path = tmp_path / "nested" / "history"
    history = HistoryManager(path)
    for statement in [
        "exp.blockNumber",
        'personal.unlockAccount("0x01", "pw")',
        "d = {\n  'a': 1,\n}",
        r"s = 'back\slash\n'",
    ]:
        history.record(statement)
    history.save()

    reloaded = HistoryManager(path)
    assert reloaded.load() == [
        "exp.blockNumber",
        "",
        "d = {\n  'a': 1,\n}",
        r"s = 'back\slash\n'",
    ]
    assert "hunter2" not in path.read_text(encoding="utf-8")


def test_save_truncates_previous_contents(tmp_path):
    path = tmp_path / "history"
    path.write_text("old one\nold two\nold three\n", encoding="utf-8")

    history = HistoryManager(path)
    history.record("new")
    history.save()

    assert path.read_text(encoding="utf-8") == "new\n"


def test_missing_file_is_empty(tmp_path):
    history = HistoryManager(tmp_path / "absent")
    assert history.load() == []


def test_file_without_trailing_newline(tmp_path):
    path = tmp_path / "history"
    path.write_text("a\nb", encoding="utf-8")
    assert HistoryManager(path).load() == ["a", "b"]


def test_save_leaves_no_temp_files(tmp_path):
    history = HistoryManager(tmp_path / "history")
    history.record("x")
    history.save()
    assert [p.name for p in tmp_path.iterdir()] == ["history"]
