"""
Argot faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse-time issue
  (errors and warnings). Codes are grouped by domain to keep searches predictable.
- ParseError / ParseWarning: base types that carry a message, a structured payload
  (offending token, option, missing entries, ...) and know how to render themselves
  in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): host-provided documentation line for a fault code.

Payload
- Every fault keeps its keyword options in a read-only mapping (fault.options).
  The documented payload keys are also exposed as attributes, e.g.
  UnrecognizedOptionError.token or MissingOptionError.missing.

Integration
- The engine raises faults directly; Parser.parse() routes them through trigger()
  with its runtime options.
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered to stderr via rich and errors exit with status 1.
"""
import copy
import inspect
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, rename

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - model (2110x)
      • DUPLICATE_OPTION
    - tokens and options (2111x)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION, MISSING_ARGUMENT,
        ALREADY_SELECTED, INVALID_CHOICE, INVALID_VALUE
    - end-of-input validation (2112x)
      • MISSING_OPTION
    - warnings (22xxx)
      • EMPTY_INLINE_VALUE, DEPRECATED_OPTION
    """
    # --- model errors (21xxx) ---
    DUPLICATE_OPTION    = 21101

    # --- token/option errors (21xxx) ---
    UNRECOGNIZED_OPTION = 21111
    AMBIGUOUS_OPTION    = 21112
    MISSING_ARGUMENT    = 21113
    ALREADY_SELECTED    = 21114
    INVALID_CHOICE      = 21115
    INVALID_VALUE       = 21116

    # --- validation errors (21xxx) ---
    MISSING_OPTION      = 21121

    # --- warnings (22xxx) ---
    EMPTY_INLINE_VALUE  = 22111
    DEPRECATED_OPTION   = 22112

    def normalize(self):
        """
        label shown in fault headers: __main__.__codes__[self] when the host
        defines one, else the numeric value.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _detail(name, /):
    """
    read-only attribute backed by fault.options[name].
    """
    @rename(name)
    def getter(self):
        return self.options[name]
    return property(getter)


def _describe(entry, /):
    """
    short label for an option or a group inside messages.
    """
    if hasattr(entry, "members"):
        return entry.name or "[%s]" % " | ".join(member.key for member in entry.members)
    return entry.key


class _Fault:
    """
    shared state and rendering for errors and warnings.

    subclasses choose their palette through __palette__ and the title style key
    through __titled__.
    """
    __palette__ = {}
    __titled__ = "title"

    def _setup(self, message, options):
        assert isinstance(message, str)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, type(self).__palette__ | getattr(main, "__styles__", {}))
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = _resolve_prog(self.options.get("prog", Unset), main)
        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.options["code"].normalize(), "code"),
            " | ",
            text(self.options["title"].title(), type(self).__titled__),
            " ]"
        )
        message = text(self.message, "message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))
        body = [message, hint]

        # host-provided documentation is optional
        if docs := getdoc(self.options["code"]):
            body.append(text(docs, "docs"))

        if fancy:
            width = self.options.get("width")
            return Panel(Group(*body), title=header, title_align="left", width=width)

        return Group(header, *body)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        # payload-first constructors cannot be re-called with self.args
        fault = type(self).__new__(type(self))
        fault.__dict__.update(self.__dict__)
        fault.args = self.args
        fault.options = MappingProxyType({**self.options, **overrides})
        return fault


def _resolve_prog(prog, main, /):
    """
    resolve the program name shown in fault headers.

    precedence: explicit 'prog' option, then __main__.__prog__, then argv[0].
    """
    if prog is not Unset:
        return prog
    return getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argot")


class ParseError(_Fault, Exception):
    """
    base class of every parse-time error.

    construction
    - ParseError(message, **options): options must at least carry 'title',
      'code' and 'hint'; subclasses fill them in and add their payload.

    triggering
    - outside shell mode the error is raised (without chaining).
    - in shell mode it is printed to stderr and the process exits with status 1.
    """
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",

        # body
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
        "docs": "underline #00E5FF dim",
    }
    __titled__ = "error-title"

    def __init__(self, message, /, **options):
        self._setup(message, options)
        super().__init__(message)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class UnrecognizedOptionError(ParseError):
    """
    a token looked like an option but nothing in the model matched it.
    """
    token = _detail("token")
    suggestions = _detail("suggestions")

    def __init__(self, token, /, suggestions=(), **options):
        suggestions = tuple(suggestions)
        if suggestions:
            hint = "did you mean %r?" % suggestions[0]
        else:
            hint = "check the spelling or pass '--' before values that start with '-'"
        super().__init__(
            "unrecognized option %r" % token,
            **{
                "title": "unrecognized option",
                "code": FaultCode.UNRECOGNIZED_OPTION,
                "hint": hint,
                "token": token,
                "suggestions": suggestions,
            } | options
        )


class AmbiguousOptionError(ParseError):
    """
    a long-option abbreviation matched several options and none exactly.
    """
    token = _detail("token")
    fragment = _detail("fragment")
    candidates = _detail("candidates")

    def __init__(self, token, fragment, candidates, /, **options):
        candidates = tuple(candidates)
        super().__init__(
            "ambiguous option %r (could be: %s)" % (token, ", ".join("'%s'" % name for name in candidates)),
            **{
                "title": "ambiguous option",
                "code": FaultCode.AMBIGUOUS_OPTION,
                "hint": "spell out more of the name, for example '--%s'" % candidates[0] if candidates else "spell out more of the name",
                "token": token,
                "fragment": fragment,
                "candidates": candidates,
            } | options
        )


class MissingArgumentError(ParseError):
    """
    an option reached an option boundary or the end of input before its arity was satisfied.
    """
    option = _detail("option")

    def __init__(self, option, /, **options):
        super().__init__(
            "missing argument for option %r" % option.key,
            **{
                "title": "missing argument",
                "code": FaultCode.MISSING_ARGUMENT,
                "hint": "provide a value after %s" % option.names[0],
                "option": option,
            } | options
        )


class MissingOptionError(ParseError):
    """
    one or more required options or groups were absent; carries all of them.
    """
    missing = _detail("missing")

    def __init__(self, missing, /, **options):
        missing = tuple(missing)
        super().__init__(
            "missing required option%s: %s" % ("s" * (len(missing) > 1), ", ".join(map(_describe, missing))),
            **{
                "title": "missing required option%s" % ("s" * (len(missing) > 1)),
                "code": FaultCode.MISSING_OPTION,
                "hint": "add the missing option%s to the command line" % ("s" * (len(missing) > 1)),
                "missing": missing,
            } | options
        )


class AlreadySelectedError(ParseError):
    """
    two members of the same mutually exclusive group appeared in one parse.
    """
    group = _detail("group")
    selected = _detail("selected")
    option = _detail("option")

    def __init__(self, group, selected, option, /, **options):
        super().__init__(
            "option %r cannot be used together with %r" % (option.key, selected.key),
            **{
                "title": "option already selected",
                "code": FaultCode.ALREADY_SELECTED,
                "hint": "keep only one of %s" % _describe(group),
                "group": group,
                "selected": selected,
                "option": option,
            } | options
        )


class InvalidChoiceError(ParseError):
    """
    a value is not one of the option's declared choices.
    """
    option = _detail("option")
    value = _detail("value")
    choices = _detail("choices")

    def __init__(self, option, value, /, **options):
        super().__init__(
            "invalid value %r for option %r" % (value, option.key),
            **{
                "title": "invalid choice",
                "code": FaultCode.INVALID_CHOICE,
                "hint": "use one of: %s" % ", ".join(map(str, option.choices)),
                "option": option,
                "value": value,
                "choices": option.choices,
            } | options
        )


class InvalidValueError(ParseError):
    """
    a value was rejected by the option's validator.

    reason carries the validator's own message, or None when it only returned False.
    """
    option = _detail("option")
    value = _detail("value")
    reason = _detail("reason")

    def __init__(self, option, value, /, reason=None, **options):
        super().__init__(
            "invalid value %r for option %r%s" % (value, option.key, ": %s" % reason if reason else ""),
            **{
                "title": "invalid value",
                "code": FaultCode.INVALID_VALUE,
                "hint": "check the value given to %s" % option.names[0],
                "option": option,
                "value": value,
                "reason": reason,
            } | options
        )


class DuplicateOptionError(ParseError):
    """
    model construction conflict: a short or long name is already registered.
    """
    option = _detail("option")
    existing = _detail("existing")
    name = _detail("name")

    def __init__(self, option, existing, name, /, **options):
        super().__init__(
            "option name %r is already registered" % name,
            **{
                "title": "duplicate option",
                "code": FaultCode.DUPLICATE_OPTION,
                "hint": "rename one of the options or drop the duplicate",
                "option": option,
                "existing": existing,
                "name": name,
            } | options
        )


class ParseWarning(_Fault, Warning):
    """
    base class of every parse-time warning (never aborts a parse).
    """
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",

        # body
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
        "docs": "underline #FFB400 dim",
    }
    __titled__ = "warning-title"

    def __init__(self, message, /, **options):
        self._setup(message, options)
        super().__init__(message)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class EmptyInlineValueWarning(ParseWarning):
    """
    '--name=' was given with nothing after '='; the empty string is recorded.
    """
    option = _detail("option")
    token = _detail("token")

    def __init__(self, option, token, /, **options):
        super().__init__(
            "empty inline value for option %r" % option.key,
            **{
                "title": "empty inline value",
                "code": FaultCode.EMPTY_INLINE_VALUE,
                "hint": "add a value after '=' or remove '=' and pass the value after a space",
                "option": option,
                "token": token,
            } | options
        )


class DeprecatedOptionWarning(ParseWarning):
    """
    a deprecated option was used.
    """
    option = _detail("option")

    def __init__(self, option, /, **options):
        super().__init__(
            "option %r is deprecated" % option.key,
            **{
                "title": "deprecated option",
                "code": FaultCode.DEPRECATED_OPTION,
                "hint": "check the documentation for its replacement",
                "option": option,
            } | options
        )


def trigger(fault, /, **options):
    """
    raise, warn or print a copy of fault carrying the extra options.

    the fault is copied with copy.replace(fault, **options), so the given fault
    keeps its payload untouched; the copy then decides through __trigger__
    what surfacing means (shell, fancy, colorful, prog and width are read).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    documentation line for code from __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParseError",
    "UnrecognizedOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "MissingOptionError",
    "AlreadySelectedError",
    "InvalidChoiceError",
    "InvalidValueError",
    "DuplicateOptionError",
    "ParseWarning",
    "EmptyInlineValueWarning",
    "DeprecatedOptionWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
