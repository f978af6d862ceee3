r"""
Argot tokenizer.

Turns a raw argument vector into an immutable tuple of classified tokens. The
model is consulted because the classification of single-dash arguments
depends on which short and long names exist and which options take values.

Classification, per raw argument
- "--"                       → SEPARATOR; every later argument → POSITIONAL verbatim.
- "--name" / "--name=value"  → LONG (split at the first '='); an empty name ("--=x") → UNKNOWN.
- "-..." (longer than "-")
  a. "-name[=value]" where name prefixes a long option → LONG, unless the prefix is
     ambiguous and its first character is a registered short option; a one-character
     name only counts when it is not a registered short option;
  b. first character is a registered short option → CLUSTER: flags are recorded left
     to right, the first value-taking option swallows the rest of the text (a
     leading '=' is dropped, so "-b=" carries an empty value), an unregistered
     character stops the scan ('rest');
  c. negative number ("-1", "-2.5") → POSITIONAL;
  d. anything else → UNKNOWN (still usable as a value, e.g. "-b -foo").
- anything else, including a lone "-" → POSITIONAL.
"""
import collections
import re
from enum import Enum

from .matcher import candidates


class TokenKind(Enum):
    LONG = "long"
    CLUSTER = "cluster"
    SEPARATOR = "separator"
    POSITIONAL = "positional"
    UNKNOWN = "unknown"


Token = collections.namedtuple(
    "Token",
    ("kind", "raw", "name", "value", "parts", "rest"),
    defaults=(None, None, (), None),
)
Token.__doc__ = """
One classified argument.

- kind: TokenKind
- raw: the argument exactly as given
- name: LONG fragment (no dashes, before '=')
- value: inline value (LONG) or attached text of the last CLUSTER part
- parts: CLUSTER options in order of appearance
- rest: CLUSTER tail starting at the first unregistered character
"""


def _number(argument):
    return re.fullmatch(r"-\d+(\.\d+)?", argument) is not None


def _cluster(model, argument):
    body = argument[1:]
    parts = []
    for index, char in enumerate(body):
        if (option := model.lookup_short(char)) is None:
            return Token(TokenKind.CLUSTER, argument, parts=tuple(parts), rest=body[index:])
        parts.append(option)
        if option.arity.takes_values:
            value = body[index + 1:]
            if value.startswith("="):
                value = value[1:]
            elif not value:
                value = None
            return Token(TokenKind.CLUSTER, argument, value=value, parts=tuple(parts))
    return Token(TokenKind.CLUSTER, argument, parts=tuple(parts))


def _classify(model, argument):
    if argument == "--":
        return Token(TokenKind.SEPARATOR, argument)

    if argument.startswith("--"):
        name, sep, value = argument[2:].partition("=")
        if not name:
            return Token(TokenKind.UNKNOWN, argument)
        return Token(TokenKind.LONG, argument, name, value if sep else None)

    if argument.startswith("-") and len(argument) > 1:
        name, sep, value = argument[1:].partition("=")
        short = model.lookup_short(argument[1])

        if name and (len(name) > 1 or short is None) and (names := candidates(model, name)):
            if name in names or len(names) == 1 or short is None:
                return Token(TokenKind.LONG, argument, name, value if sep else None)

        if short is not None:
            return _cluster(model, argument)

        if _number(argument):
            return Token(TokenKind.POSITIONAL, argument)

        return Token(TokenKind.UNKNOWN, argument)

    return Token(TokenKind.POSITIONAL, argument)


def tokenize(model, args, /):
    """
    classify every argument of args against model.

    returns a tuple of Token; arguments after "--" are POSITIONAL verbatim.
    """
    tokens = []
    verbatim = False
    for argument in args:
        if verbatim:
            tokens.append(Token(TokenKind.POSITIONAL, argument))
            continue
        tokens.append(token := _classify(model, argument))
        verbatim = token.kind is TokenKind.SEPARATOR
    return tuple(tokens)


__all__ = (
    "TokenKind",
    "Token",
    "tokenize",
)
