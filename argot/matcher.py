"""
Argot long-option matcher.

Resolves a long-option fragment ("ver" from "--ver" or "-ver") to a single
option of the model:
- an exact long name always wins, even when other names share the prefix;
- a single prefix candidate resolves, however short the fragment is;
- no candidate raises UnrecognizedOptionError;
- several candidates (none exact) raise AmbiguousOptionError listing them in
  registration order.

suggest() proposes close spellings for unrecognized tokens (difflib), used in
fault hints.
"""
import difflib

from .faults import AmbiguousOptionError, UnrecognizedOptionError
from .utils import Unset, coalesce


def candidates(model, fragment, /):
    """
    long names starting with fragment, in registration order.
    """
    return model.long_names_with_prefix(fragment)


def match(model, fragment, token=Unset, /):
    """
    resolve fragment to an option or raise.

    token is the raw text reported in faults; it defaults to "--" + fragment.
    for ambiguity only the part before '=' is reported.
    """
    token = coalesce(token, "--" + fragment)
    if not fragment:
        raise UnrecognizedOptionError(token, suggest(model, token))
    if (option := model.lookup_long(fragment)) is not None:
        return option
    match candidates(model, fragment):
        case ():
            raise UnrecognizedOptionError(token, suggest(model, token))
        case (name,):
            return model.lookup_long(name)
        case names:
            raise AmbiguousOptionError(token.partition("=")[0], fragment, names)


def suggest(model, token, /, limit=3):
    """
    close spellings of token among the model's option names.
    """
    names = []
    for option in model:
        if option.short is not None:
            names.append("-" + option.short)
        if option.long is not None:
            names.append("--" + option.long)
    return tuple(difflib.get_close_matches(token.partition("=")[0], names, limit))


__all__ = (
    "candidates",
    "match",
    "suggest",
)
