"""
Argot parse engine.

The engine walks a token tuple with an index cursor. Each token goes through
step(), a pure transition (state, token) -> (state', effects); the Engine
applies the effects to accumulators owned by a single parse call.

States
- Scanning()                  consuming tokens normally.
- Collecting(option, count)   taking values for option; count values so far.
- Verbatim()                  after "--" (or the first non-option in stop mode):
                              every remaining token is a positional argument.

Effects
- Present(option)             option occurred (opens a new occurrence).
- Value(option, values, inline)
                              values for the current occurrence of option.
- Positional(text)            one positional argument.

Faults
- option tokens (LONG with candidates, CLUSTER) and "--" while a mandatory value
  is pending raise MissingArgumentError.
- unknown tokens raise UnrecognizedOptionError, unless stop mode turns them
  into positionals and switches to Verbatim.
- group conflicts (AlreadySelectedError), invalid choices and values
  (InvalidChoiceError, InvalidValueError) and the end-of-input
  checks (MissingArgumentError, MissingOptionError) are raised by Engine.
"""
import collections

from .faults import *
from .matcher import candidates, match, suggest
from .options import OptionGroup
from .results import CommandLine
from .tokens import TokenKind, tokenize

Scanning = collections.namedtuple("Scanning", ())
Collecting = collections.namedtuple("Collecting", ("option", "collected"))
Verbatim = collections.namedtuple("Verbatim", ())

Present = collections.namedtuple("Present", ("option",))
Value = collections.namedtuple("Value", ("option", "values", "inline"))
Positional = collections.namedtuple("Positional", ("text",))


def _split(option, text, capacity, /):
    """
    split one raw value by the option's separator, at most into capacity pieces.
    """
    if option.separator is None:
        return (text,)
    if capacity is None:
        return tuple(text.split(option.separator))
    return tuple(text.split(option.separator, capacity - 1))


def _valuelike(model, token, /):
    match token.kind:
        case TokenKind.POSITIONAL | TokenKind.UNKNOWN:
            return True
        case TokenKind.LONG:
            return not candidates(model, token.name)
    return False


def _open(model, option, value, token, /):
    """
    effects of one option occurrence, with its inline value if any.
    """
    effects = (Present(option),)
    if value is None:
        if option.arity.takes_values:
            return Collecting(option, 0), effects
        return Scanning(), effects

    if not option.arity.takes_values:
        raise UnrecognizedOptionError(token.raw, suggest(model, token.raw))

    values = _split(option, value, option.arity.capacity(0))
    effects += (Value(option, values, True),)
    if option.arity.accepts(len(values)):
        return Collecting(option, len(values)), effects
    return Scanning(), effects


def _scan(model, token, stop, /):
    match token.kind:
        case TokenKind.SEPARATOR:
            return Verbatim(), ()

        case TokenKind.POSITIONAL:
            return (Verbatim() if stop else Scanning()), (Positional(token.raw),)

        case TokenKind.UNKNOWN:
            if stop:
                return Verbatim(), (Positional(token.raw),)
            raise UnrecognizedOptionError(token.raw, suggest(model, token.raw))

        case TokenKind.LONG:
            if stop and not candidates(model, token.name):
                return Verbatim(), (Positional(token.raw),)
            option = match(model, token.name, token.raw)
            return _open(model, option, token.value, token)

        case TokenKind.CLUSTER:
            if token.rest is not None and not stop:
                raise UnrecognizedOptionError(token.raw, suggest(model, token.raw))
            *flags, last = token.parts
            effects = tuple(map(Present, flags))
            state, opened = _open(model, last, token.value, token)
            effects += opened
            if token.rest is not None:
                return Verbatim(), effects + (Positional(token.rest),)
            return state, effects

    raise TypeError("unsupported token kind %r" % (token.kind,))


def step(model, state, token, stop=False, /):
    """
    pure transition: (state, token) -> (state', effects).

    parameters
    - model: OptionModel consulted for long-name candidates.
    - state: Scanning | Collecting | Verbatim.
    - token: Token produced by tokenize() against the same model.
    - stop: stop-at-first-non-option mode.

    returns
    - (state', tuple of Present | Value | Positional)

    raises
    - UnrecognizedOptionError, AmbiguousOptionError, MissingArgumentError.
    """
    match state:
        case Verbatim():
            return state, (Positional(token.raw),)

        case Collecting(option=option, collected=collected):
            if _valuelike(model, token):
                values = _split(option, token.raw, option.arity.capacity(collected))
                collected += len(values)
                effects = (Value(option, values, False),)
                if option.arity.accepts(collected):
                    return Collecting(option, collected), effects
                return Scanning(), effects
            if option.arity.requires(collected):
                raise MissingArgumentError(option)
            return _scan(model, token, stop)

        case Scanning():
            return _scan(model, token, stop)

    raise TypeError("unsupported engine state %r" % (state,))


class Engine:
    """
    one parse call: cursor, accumulators and group selections.

    the engine never mutates the model; a fresh Engine (and therefore a fresh
    group-selection map) is used for every call.

    warnings (EmptyInlineValueWarning, DeprecatedOptionWarning) are handed to
    'notify', which defaults to faults.trigger.
    """

    def __init__(self, model, /, stop=False, notify=trigger):
        self.model = model
        self.stop = bool(stop)
        self.notify = notify
        self.state = Scanning()
        self.index = 0
        self._occurrences = {}
        self._positionals = []
        self._selected = {}

    def _present(self, option):
        if (group := self.model.group_of(option)) is not None:
            selected = self._selected.setdefault(group, option)
            if selected is not option:
                raise AlreadySelectedError(group, selected, option)
        if option.deprecated:
            self.notify(DeprecatedOptionWarning(option))
        self._occurrences.setdefault(option, []).append([])

    def _value(self, option, values, inline, token):
        if inline and values == ("",):
            self.notify(EmptyInlineValueWarning(option, token.raw))
        if option.choices:
            for value in values:
                if value not in option.choices:
                    raise InvalidChoiceError(option, value)
        if option.validator is not None:
            for value in values:
                try:
                    accepted = option.validator(value)
                except (ValueError, TypeError) as error:
                    raise InvalidValueError(option, value, str(error) or None) from None
                if accepted is False:
                    raise InvalidValueError(option, value)
        self._occurrences[option][-1].extend(values)

    def feed(self, token, /):
        """
        advance the state machine by one token and apply its effects.
        """
        self.state, effects = step(self.model, self.state, token, self.stop)
        for effect in effects:
            match effect:
                case Present(option=option):
                    self._present(option)
                case Value(option=option, values=values, inline=inline):
                    self._value(option, values, inline, token)
                case Positional(text=text):
                    self._positionals.append(text)
        self.index += 1

    def finish(self):
        """
        end-of-input validation; returns the frozen CommandLine.
        """
        match self.state:
            case Collecting(option=option, collected=collected) if option.arity.requires(collected):
                raise MissingArgumentError(option)

        missing = []
        for entry in self.model.required:
            if isinstance(entry, OptionGroup):
                if entry not in self._selected:
                    missing.append(entry)
            elif entry not in self._occurrences:
                missing.append(entry)
        if missing:
            raise MissingOptionError(missing)

        return CommandLine(self.model, self._occurrences, self._positionals)

    def run(self, args, /):
        """
        tokenize args and run them to completion.
        """
        tokens = tokenize(self.model, args)
        while self.index < len(tokens):
            self.feed(tokens[self.index])
        return self.finish()


__all__ = (
    "Scanning",
    "Collecting",
    "Verbatim",
    "Present",
    "Value",
    "Positional",
    "step",
    "Engine",
)
