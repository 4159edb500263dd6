## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from flagspec.api import compile_spec
from flagspec.formatting import format_spec, format_option_name, format_call, write_without_ansi
from flagspec.registry import HasArg, Occur
from flagspec.types import ShortOnly, LongOnly, ShortAndLong


def test_option_names_render_in_clause_syntax():
    assert format_option_name(ShortOnly('m')) == "-m"
    assert format_option_name(LongOnly('long-arg')) == "--long-arg"
    assert format_option_name(ShortAndLong('c', 'center-rule')) == "-c, --center-rule"


def test_formatted_specs_compile_back_to_the_same_items():
    source = '-c --center-rule "a"; -k --keep *?= PATTERN "say \\"hi\\""; --x = "A B" "c"; -j + "d"; .help("e")'
    items = compile_spec(source)
    assert compile_spec('; '.join(format_spec(it) for it in items)) == items


def test_call_formatting_names_enums():
    out = []
    write_without_ansi(out.append)(format_call('opt', ('k', '', 'd', 'P', HasArg.MAYBE, Occur.REQ)))
    assert out == ["opt('k', '', 'd', 'P', HasArg.MAYBE, Occur.REQ)"]
