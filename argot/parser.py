"""
Argot entry point.

Parser carries the runtime presentation flags and routes every fault through
faults.trigger():
- shell: render faults to stderr (rich) and exit with status 1 on errors,
  instead of raising them / emitting Python warnings.
- fancy: wrap rendered faults in a panel.
- colorful: apply the fault palette (overridable through __main__.__styles__).

Quick example:
    >>> from argot import Option, OptionModel, parse
    >>> model = OptionModel(Option("-a"), Option("-b", "--bfile", nargs=1))
    >>> line = parse(model, ["-a", "--bfile=toast", "rest"])
    >>> line.get_value("b"), line.get_positionals()
    ('toast', ['rest'])
"""
import functools
import shlex
import sys
from collections.abc import Iterable

from .engine import Engine
from .faults import ParseError, trigger
from .options import OptionModel
from .utils import Unset


def _arguments(args):
    """
    normalize the accepted argument forms into a list of strings.

    - Unset: sys.argv[1:]
    - str: shell-like string split with shlex.split
    - Iterable[str]: used as-is (each item must be a string)
    """
    if args is Unset:
        return sys.argv[1:]
    elif isinstance(args, str):
        return shlex.split(args)
    elif isinstance(args, Iterable):
        arguments = list(args)
        for argument in arguments:
            if not isinstance(argument, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return arguments
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser:
    """
    reusable parser holding runtime flags; stateless between calls.
    """

    def __init__(self, shell=False, fancy=False, colorful=False, prog=Unset):
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.prog = prog

    @property
    def _options(self):
        options = {"shell": self.shell, "fancy": self.fancy, "colorful": self.colorful}
        if self.prog is not Unset:
            options["prog"] = self.prog
        return options

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's runtime flags.
        """
        trigger(fault, **self._options | options)

    def parse(self, model, args=Unset, /, stop_at_non_option=False):
        """
        Parse args against model.

        Parameters
        - model: OptionModel
        - args: Unset (sys.argv[1:]) | str (shlex-split) | Iterable[str]
        - stop_at_non_option: bool
          The first positional or unknown option turns it and everything after
          it into positional arguments.

        Returns
        - CommandLine

        Raises
        - ParseError subclasses (outside shell mode).
        - TypeError for a model that is not an OptionModel or malformed args.
        """
        if not isinstance(model, OptionModel):
            raise TypeError("parse() first argument must be an option-model")
        arguments = _arguments(args)

        engine = Engine(model, stop=stop_at_non_option, notify=self.trigger)
        try:
            return engine.run(arguments)
        except ParseError as error:
            self.trigger(error)
            raise

    def __repr__(self):
        return "parser(shell=%r, fancy=%r, colorful=%r)" % (self.shell, self.fancy, self.colorful)


@functools.cache
def _default():
    return Parser()


def parse(model, args=Unset, /, stop_at_non_option=False):
    """
    parse with a default (non-shell) Parser; see Parser.parse.
    """
    return _default().parse(model, args, stop_at_non_option=stop_at_non_option)


__all__ = (
    "Parser",
    "parse",
)
