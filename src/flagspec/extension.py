## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Flags that may carry a value on the same occurrence, repeatable (`*?=`) or required once (`+?=`).
# Registries have no shortcut for these, so they go straight to the low-level `opt` primitive.
#

from .registry import BaseOptions, HasArg, Occur


def optflagmultiopt(options: BaseOptions, short_name: str, long_name: str, desc: str, hint: str):
    return options.opt(short_name, long_name, desc, hint, HasArg.MAYBE, Occur.MULTI)


def optflagreqopt(options: BaseOptions, short_name: str, long_name: str, desc: str, hint: str):
    return options.opt(short_name, long_name, desc, hint, HasArg.MAYBE, Occur.REQ)
