## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import click
import pytest

from flagspec.registry import ClickOptions, RecordingOptions, HasArg, Occur, ParsingStyle
from flagspec.extension import optflagmultiopt, optflagreqopt
from flagspec.errors import OptionRejected


def _options() -> ClickOptions:
    opts = ClickOptions()
    opts.optflag("v", "verbose", "be loud")
    opts.optflagmulti("d", "", "debug level")
    opts.optopt("o", "output", "output file", "FILE")
    opts.optmulti("", "include", "include path", "DIR")
    return opts


def test_flag_and_value_primitives_map_to_click_options():
    params = _options().parse(["-v", "-d", "-d", "--output", "out.txt", "--include", "a", "--include", "b"])
    assert params["verbose"] is True
    assert params["d"] == 2
    assert params["output"] == "out.txt"
    assert params["include"] == ("a", "b")


def test_defaults_when_absent():
    params = _options().parse([])
    assert params["verbose"] is False
    assert params["d"] == 0
    assert params["output"] is None
    assert params["include"] == ()


def test_free_arguments_are_collected():
    assert _options().parse(["a", "-v", "b"])["free"] == ("a", "b")


def test_stop_at_first_free_parsing_style():
    opts = _options().parsing_style(ParsingStyle.STOP_AT_FIRST_FREE)
    params = opts.parse(["a", "-v"])
    assert params["verbose"] is False
    assert params["free"] == ("a", "-v")


def test_required_value_must_be_given():
    opts = ClickOptions().reqopt("n", "name", "the name", "NAME")
    with pytest.raises(click.MissingParameter):
        opts.parse([])
    assert opts.parse(["-n", "x"])["name"] == "x"


def test_required_flag_must_be_given_exactly_once():
    opts = ClickOptions().reqflag("y", "yes", "confirm")
    assert opts.parse(["--yes"])["yes"] is True
    with pytest.raises(click.MissingParameter):
        opts.parse([])
    with pytest.raises(click.BadParameter):
        opts.parse(["-y", "-y"])


def test_optional_value_accepts_attached_value():
    opts = ClickOptions().optflagopt("c", "color", "colorize", "WHEN")
    assert opts.parse(["--color=never"])["color"] == "never"
    assert opts.parse([])["color"] is None


def test_optional_value_consumes_a_following_free_argument():
    opts = ClickOptions().optflagopt("c", "color", "colorize", "WHEN")
    assert opts.parse(["--color", "never"]) == {"color": "never", "free": ()}


@pytest.mark.parametrize("register", [
    lambda o: o.optopt("o", "output", "output file", "FILE"),
    lambda o: o.reqopt("o", "output", "output file", "FILE"),
    lambda o: o.optflagopt("o", "output", "output file", "FILE"),
])
def test_single_value_options_refuse_repeats(register):
    opts = register(ClickOptions())
    assert opts.parse(["-o", "a"])["output"] == "a"
    with pytest.raises(click.BadParameter):
        opts.parse(["-o", "a", "-o", "b"])


def test_required_optional_value_must_be_given_exactly_once():
    opts = ClickOptions()
    optflagreqopt(opts, "k", "keep", "keep pattern", "PATTERN")
    assert opts.parse(["--keep=x"])["keep"] == "x"
    with pytest.raises(click.MissingParameter):
        opts.parse([])
    with pytest.raises(click.BadParameter):
        opts.parse(["-k", "-k", "x"])


def test_repeatable_value_options_keep_every_value():
    opts = ClickOptions()
    optflagmultiopt(opts, "k", "keep", "keep pattern", "PATTERN")
    assert opts.parse(["--keep=a", "--keep=b"])["keep"] == ("a", "b")


def test_free_argument_name_cannot_be_taken_by_an_option():
    opts = ClickOptions()
    with pytest.raises(OptionRejected):
        opts.optopt("", "free", "clashes", "F")
    opts.optopt("f", "", "short f is fine", "F")
    assert opts.parse(["-f", "val", "pos"]) == {"f": "val", "free": ("pos",)}


def test_extension_builds_maybe_value_options():
    opts = ClickOptions()
    optflagmultiopt(opts, "k", "keep", "keep pattern", "PATTERN")
    optflagreqopt(opts, "", "level", "log level", "LEVEL")
    keep, level = opts.params
    assert keep.multiple and not keep.required and not keep.is_flag
    assert level.required and level.multiple and not level.is_flag
    assert keep.flag_value == "" and level.flag_value == ""
    assert keep.metavar == "PATTERN"


def test_extension_only_uses_low_level_primitive():
    rec = RecordingOptions()
    optflagmultiopt(rec, "k", "keep", "d", "P")
    optflagreqopt(rec, "r", "", "d", "L")
    assert rec.calls == [
        ('opt', ("k", "keep", "d", "P", HasArg.MAYBE, Occur.MULTI)),
        ('opt', ("r", "", "d", "L", HasArg.MAYBE, Occur.REQ)),
    ]


@pytest.mark.parametrize("short, long", [("", ""), ("ab", "x")])
def test_invalid_names_are_rejected(short, long):
    with pytest.raises(OptionRejected):
        ClickOptions().optflag(short, long, "bad")


def test_duplicate_names_are_rejected():
    opts = ClickOptions().optflag("a", "alpha", "first")
    with pytest.raises(OptionRejected):
        opts.optflag("a", "", "second")
    with pytest.raises(OptionRejected):
        opts.optopt("", "alpha", "third", "X")
    assert len(opts.params) == 1


def test_directives_call_registry_methods_with_literals():
    opts = ClickOptions()
    opts.directive('parsing_style("stop_at_first_free")')
    opts.directive('help("Does things.")')
    opts.directive('name("tool")')
    opts.directive('context_settings(max_content_width=100)')
    assert opts.style is ParsingStyle.STOP_AT_FIRST_FREE
    assert opts.help_text == "Does things."
    assert opts.command().name == "tool"
    assert opts.settings == {'max_content_width': 100}


@pytest.mark.parametrize("expression", [
    'optflag("a", "", "sneaky")',
    'help(some_variable)',
    'parsing_style("sideways")',
    'not a call',
])
def test_bad_directives_are_rejected(expression):
    with pytest.raises(OptionRejected):
        ClickOptions().directive(expression)


def test_usage_lists_options_in_registration_order():
    text = _options().usage("Brief text.", prog="tool")
    assert "Usage: tool" in text
    assert "Brief text." in text
    assert text.index("--verbose") < text.index("--output") < text.index("--include")
    assert "FILE" in text
