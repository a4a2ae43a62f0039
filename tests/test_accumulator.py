"""Tests for the multi-line statement accumulator."""

from nodeconsole.interface import (
    BASE_PROMPT,
    State,
    StatementAccumulator,
    bracket_depth,
    continuation_prompt,
)


def test_single_line_statement_completes_immediately():
    """A balanced line is returned at once with its newline."""
    acc = StatementAccumulator()
    assert acc.feed("x = 1") == "x = 1\n"
    assert acc.state is State.IDLE
    assert acc.prompt == BASE_PROMPT


def test_brace_then_close_returns_whole_buffer():
    """'{' then '}' produces one statement covering both lines."""
    acc = StatementAccumulator()
    assert acc.feed("{") is None
    assert acc.state is State.CONTINUATION
    assert acc.depth == 1
    assert acc.feed("}") == "{\n}\n"
    assert acc.state is State.IDLE
    assert acc.buffer == ""


def test_depth_tracks_the_whole_buffer():
    """Closing brackets on later lines lower the depth."""
    acc = StatementAccumulator()
    assert acc.feed("f(a, {") is None
    assert acc.depth == 2
    assert acc.prompt == continuation_prompt(2)
    assert acc.feed("  'k': (1,") is None
    assert acc.depth == 3
    assert acc.feed("  2)}") is None
    assert acc.depth == 1
    assert acc.feed(")") == "f(a, {\n  'k': (1,\n  2)}\n)\n"
    assert acc.depth == 0


def test_continuation_prompt_shape():
    """Dots grow with depth and always end with a space."""
    assert continuation_prompt(1) == ".. "
    assert continuation_prompt(2) == "...... "
    assert continuation_prompt(3) == ".......... "


def test_bracket_depth_counts_both_kinds():
    assert bracket_depth("({") == 2
    assert bracket_depth("({})") == 0
    assert bracket_depth("}") == -1


def test_negative_depth_submits():
    """Surplus closers submit rather than waiting forever."""
    acc = StatementAccumulator()
    assert acc.feed(")") == ")\n"
    assert acc.state is State.IDLE


def test_empty_line_ignored_when_idle():
    acc = StatementAccumulator()
    assert acc.feed("") is None
    assert acc.buffer == ""
    assert acc.state is State.IDLE


def test_empty_line_kept_in_continuation():
    acc = StatementAccumulator()
    acc.feed("(")
    assert acc.feed("") is None
    assert acc.feed(")") == "(\n\n)\n"


def test_exit_only_at_idle_prompt():
    """'exit' ends the session only when nothing is pending."""
    acc = StatementAccumulator()
    assert acc.is_exit("exit")
    assert not acc.is_exit("exit()")
    assert not acc.is_exit(" exit")
    acc.feed("{")
    assert not acc.is_exit("exit")


def test_reset_discards_partial_statement():
    acc = StatementAccumulator("$ ")
    acc.feed("foo = {")
    acc.reset()
    assert acc.buffer == ""
    assert acc.depth == 0
    assert acc.prompt == "$ "
    assert acc.feed("x = 2") == "x = 2\n"
