"""Tests for the plain prompter and prompter selection."""

import io

import pytest

from nodeconsole.interface import DUMB_TERMINAL_WARNING, DumbPrompter, make_prompter


def test_dumb_prompter_reads_lines():
    out = io.StringIO()
    prompter = DumbPrompter(io.StringIO("first\r\nsecond\n"), out)
    assert prompter.prompt("> ") == "first"
    assert prompter.prompt(".. ") == "second"
    assert out.getvalue() == "> .. "
    with pytest.raises(EOFError):
        prompter.prompt("> ")


def test_dumb_prompter_warns_once_about_echo():
    out = io.StringIO()
    prompter = DumbPrompter(io.StringIO("pw1\npw2\n"), out)
    assert prompter.password_prompt("Passphrase: ") == "pw1"
    assert prompter.password_prompt("Passphrase: ") == "pw2"
    assert out.getvalue().count(DUMB_TERMINAL_WARNING) == 1


def test_dumb_prompter_is_a_context_manager():
    prompter = DumbPrompter(io.StringIO(""))
    with prompter as active:
        assert active is prompter
        prompter.append_history("ignored")


def test_non_interactive_sessions_get_the_plain_prompter():
    assert isinstance(make_prompter(interactive=False), DumbPrompter)
    stream = io.StringIO("x\n")
    prompter = make_prompter(stream=stream)
    assert isinstance(prompter, DumbPrompter)
    assert prompter.stream is stream
