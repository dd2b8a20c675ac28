"""Tests for command construction and argument classification."""

import re

import pytest

from pipesh import CommandSyntaxError, Flag, Span, build, flags
from pipesh.command import Command, parse_args
from pipesh.options import CommandOptions


def test_build_plain_command():
    command = build("ls")
    assert command.name == "ls"
    assert command.tokens == ()
    assert command.filter is None
    assert command.span is None
    assert command.options == CommandOptions()
    assert command.line == "ls"


def test_flag_renders_with_dash():
    command = build("ls", [flags.lh, "~"])
    assert command.line == "ls -lh ~"
    assert command.argv == ["ls", "-lh", "~"]


def test_flags_factory_matches_flag():
    assert flags.l == Flag("l")
    assert flags("la") == Flag("la")


def test_nested_sequences_are_flattened():
    nested = build("grep", ["-r", [flags.n, ("foo", [Flag("i")])], "src"])
    flat = build("grep", ["-r", flags.n, "foo", Flag("i"), "src"])
    assert nested == flat
    assert nested.tokens == ("-r", Flag("n"), "foo", Flag("i"), "src")


def test_filter_and_range_in_either_order():
    pattern = re.compile("x")
    a = build("ls", ["/tmp", pattern, Span(1, 3)])
    b = build("ls", ["/tmp", Span(1, 3), pattern])
    assert a == b
    assert a.filter is pattern
    assert a.span == Span(1, 3)


def test_integer_index_is_a_range():
    command = build("ls", [4])
    assert command.span == 4


def test_builtin_range_is_inclusive_span():
    command = build("ls", [range(2, 5)])
    assert command.span == Span(2, 4)


@pytest.mark.parametrize(
    "args",
    [
        [re.compile("a"), re.compile("b")],
        [re.compile("a"), 1, re.compile("b")],
        ["x", re.compile("a"), Span(0, 1), re.compile("b")],
    ],
)
def test_duplicate_filter_fails(args):
    with pytest.raises(CommandSyntaxError, match="Only one filter"):
        build("ls", args)


@pytest.mark.parametrize(
    "args",
    [
        [1, 2],
        [Span(0, 1), re.compile("a"), 3],
        [range(0, 2), Span(1, 2)],
    ],
)
def test_duplicate_range_fails(args):
    with pytest.raises(CommandSyntaxError, match="Only one range"):
        build("ls", args)


@pytest.mark.parametrize(
    "args",
    [
        [Span(5, 2)],
        ["a", flags.l, re.compile("x"), Span(3, 1)],
        [range(4, 2)],
        [range(0, 10, 2)],
    ],
)
def test_invalid_range_fails(args):
    with pytest.raises(CommandSyntaxError, match="invalid range"):
        build("ls", args)


@pytest.mark.parametrize(
    "span",
    [Span("a", "b"), Span(1, "x"), Span(True, 2), Span(0, 1.5)],
)
def test_non_integer_span_bounds_fail(span):
    with pytest.raises(CommandSyntaxError, match="invalid range bounds"):
        build("ls", [span])


def test_single_line_span_is_valid():
    assert build("ls", [Span(2, 2)]).span == Span(2, 2)


def test_trailing_map_becomes_options():
    command = build("ls", ["/tmp", {"objectify": True}])
    assert command.options.objectify is True
    assert command.options.captures


@pytest.mark.parametrize("leftover", [3.5, None, object(), True])
def test_non_map_leftover_fails(leftover):
    with pytest.raises(CommandSyntaxError, match="configuration map"):
        build("ls", ["a", leftover])


def test_more_than_one_leftover_fails():
    with pytest.raises(CommandSyntaxError, match="left over arguments"):
        build("ls", ["a", {"objectify": True}, {"objectify": "json"}])


def test_positional_after_filter_is_leftover():
    with pytest.raises(CommandSyntaxError):
        build("ls", [re.compile("a"), "late"])


def test_map_after_positional_then_more_fails():
    with pytest.raises(CommandSyntaxError, match="left over arguments"):
        build("ls", [{"objectify": True}, "extra"])


def test_nested_non_string_token_fails():
    with pytest.raises(CommandSyntaxError, match="Flag or string"):
        build("ls", [["a", 3]])


def test_unknown_option_key_fails():
    with pytest.raises(CommandSyntaxError, match="configuration map"):
        build("ls", [{"colour": "auto"}])


@pytest.mark.parametrize("name", ["", "   ", None, 3])
def test_bad_name_fails(name):
    with pytest.raises(CommandSyntaxError, match="command name"):
        build(name)


def test_rendering_is_deterministic():
    args = ["-a", [flags.v, "x y"], re.compile("z"), 1, {"objectify": True}]
    first = build("cmd", args)
    second = build("cmd", args)
    assert first == second
    assert first.line == second.line
    assert first.line.encode() == second.line.encode()


def test_strings_are_not_escaped():
    command = build("echo", ["$HOME", "a;b", "'q'"])
    assert command.line == "echo $HOME a;b 'q'"


def test_command_is_immutable():
    command = build("ls")
    with pytest.raises(AttributeError):
        command.name = "rm"


def test_direct_construction_renders_eagerly():
    with pytest.raises(CommandSyntaxError):
        Command(name="ls", tokens=("a", 1))


def test_parse_args_returns_classified_parts():
    pattern = re.compile("p")
    tokens, found_filter, span, values = parse_args(
        ["a", [flags.b], pattern, 2, {"shell": False}]
    )
    assert tokens == ["a", Flag("b")]
    assert found_filter is pattern
    assert span == 2
    assert values == {"shell": False}


def test_configure_implies_objectify():
    command = build("ls", [], configure=lambda opts: None)
    assert command.options.objectify is True


def test_configure_last_write_wins():
    def configure(opts):
        opts.objectify("json")
        opts.shell(False)
        opts.objectify("ndjson")

    command = build("ls", [], configure=configure)
    assert command.options.objectify == "ndjson"
    assert command.options.shell is False


def test_configure_order_of_distinct_keys_is_irrelevant():
    a = build("ls", [], configure=lambda o: o.objectify("json").shell(False))
    b = build("ls", [], configure=lambda o: o.shell(False).objectify("json"))
    assert a == b


def test_configure_applies_after_trailing_map():
    command = build(
        "ls", [{"shell": False}], configure=lambda o: o.objectify("json")
    )
    assert command.options.objectify == "json"
    assert command.options.shell is False


class TestSelect:
    lines = ["alpha", "beta", "gamma", "delta", "epsilon"]

    def test_no_selection_keeps_everything(self):
        assert build("x").select(self.lines) == self.lines

    def test_filter_uses_search(self):
        command = build("x", [re.compile("ta")])
        assert command.select(self.lines) == ["beta", "delta"]

    def test_index(self):
        assert build("x", [1]).select(self.lines) == ["beta"]
        assert build("x", [-1]).select(self.lines) == ["epsilon"]

    def test_index_out_of_bounds(self):
        assert build("x", [10]).select(self.lines) == []

    def test_span_is_inclusive(self):
        assert build("x", [Span(1, 3)]).select(self.lines) == [
            "beta",
            "gamma",
            "delta",
        ]

    def test_negative_span(self):
        assert build("x", [Span(-2, -1)]).select(self.lines) == [
            "delta",
            "epsilon",
        ]

    def test_filter_then_range(self):
        command = build("x", [re.compile("a$"), Span(0, 1)])
        assert command.select(self.lines) == ["alpha", "beta"]
