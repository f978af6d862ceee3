"""
Argot parse results.

CommandLine
- Frozen outcome of one parse: the options that occurred (first-appearance
  order), the values of every occurrence and the positional arguments.
- Queries accept any key the model resolves: "b", "-b", "bfile", "--bfile" or
  the Option itself.
- Value precedence: parsed values, then the default given to the query, then
  the option's declared default.

FallbackCommandLine
- Layers several CommandLine objects (e.g. the real command line over values
  parsed from a defaults string). The first layer with explicit values wins.
"""
from .utils import Unset, coalesce, mirror


def _pairs(values):
    for index in range(0, len(values), 2):
        key = values[index]
        yield key, values[index + 1] if index + 1 < len(values) else "true"


def _wrap(default):
    return (default,) if isinstance(default, str) else tuple(default)


class CommandLine:
    """
    immutable view over the options and positionals of one parse.
    """
    positionals = mirror("positionals")

    def __init__(self, model, occurrences, positionals, /):
        self._model = model
        self._occurrences = {
            option: tuple(tuple(values) for values in occurrence)
            for option, occurrence in occurrences.items()
        }
        self._positionals = tuple(positionals)

    @property
    def model(self):
        return self._model

    @property
    def options(self):
        """
        options present on the command line, in first-appearance order.
        """
        return tuple(self._occurrences)

    def has_option(self, key, /):
        return self._model.resolve(key) in self._occurrences

    def __contains__(self, key):
        return self.has_option(key)

    def get_occurrences(self, key, /):
        """
        value tuples of every occurrence of the option, in order.
        """
        return self._occurrences.get(self._model.resolve(key), ())

    def _parsed(self, key):
        return tuple(value for values in self.get_occurrences(key) for value in values)

    def _knows(self, key):
        return self._model.resolve(key) is not None

    def _declared(self, key):
        option = self._model.resolve(key)
        return option.default if option is not None else ()

    def get_values(self, key, /, default=Unset):
        """
        every value of the option, flattened across occurrences.

        falls back to default (str or iterable of str), then to the declared
        default; an empty tuple when none applies.
        """
        if values := self._parsed(key):
            return values
        if default is not Unset:
            return _wrap(default)
        return self._declared(key)

    def get_value(self, key, /, default=Unset):
        """
        first value of the option, or default, or the first declared default, or None.
        """
        if values := self._parsed(key):
            return values[0]
        if default is not Unset:
            return default
        return next(iter(self._declared(key)), None)

    def get_properties(self, key, /):
        """
        key/value pairs of a property option ("-Dkey=value").

        within each occurrence consecutive values pair up; a lone key maps to "true".
        """
        properties = {}
        for values in self.get_occurrences(key):
            properties.update(_pairs(values))
        return properties

    def get_positionals(self):
        return list(self._positionals)

    def __iter__(self):
        return iter(self._occurrences)

    def __repr__(self):
        return "command-line(options=%r, positionals=%r)" % (
            tuple(option.key for option in self._occurrences),
            self._positionals,
        )

    def __rich_repr__(self):
        yield "options", {option.key: self._parsed(option) for option in self._occurrences}
        yield "positionals", self._positionals


class FallbackCommandLine:
    """
    ordered layers of CommandLine objects queried as one.

    - has_option: true when any layer has the option.
    - values: taken from the first layer with explicit values, then the query
      default, then the declared default of the first layer that knows the key.
    - positionals: concatenated in layer order.
    """

    def __init__(self, *lines):
        self._lines = []
        for line in lines:
            self.append(line)

    @staticmethod
    def _check(line):
        if not isinstance(line, CommandLine | FallbackCommandLine):
            raise TypeError("fallback layers must be command-lines")
        return line

    def append(self, line, /):
        self._lines.append(self._check(line))
        return self

    def insert(self, index, line, /):
        self._lines.insert(index, self._check(line))
        return self

    @property
    def lines(self):
        return tuple(self._lines)

    @property
    def options(self):
        seen = {}
        for line in self._lines:
            seen.update(dict.fromkeys(line.options))
        return tuple(seen)

    def has_option(self, key, /):
        return any(line.has_option(key) for line in self._lines)

    def __contains__(self, key):
        return self.has_option(key)

    def get_occurrences(self, key, /):
        for line in self._lines:
            if line.has_option(key):
                return line.get_occurrences(key)
        return ()

    def _parsed(self, key):
        for line in self._lines:
            if values := line._parsed(key):
                return values
        return ()

    def _knows(self, key):
        return any(line._knows(key) for line in self._lines)

    def _declared(self, key):
        for line in self._lines:
            if line._knows(key):
                return line._declared(key)
        return ()

    def get_values(self, key, /, default=Unset):
        if values := self._parsed(key):
            return values
        if default is not Unset:
            return _wrap(default)
        return self._declared(key)

    def get_value(self, key, /, default=Unset):
        if values := self._parsed(key):
            return values[0]
        return coalesce(default, next(iter(self._declared(key)), None))

    def get_properties(self, key, /):
        for line in self._lines:
            if line.has_option(key):
                return line.get_properties(key)
        return {}

    def get_positionals(self):
        return [positional for line in self._lines for positional in line.get_positionals()]

    def __repr__(self):
        return "fallback-command-line(%s)" % ", ".join(map(repr, self._lines))

    def __rich_repr__(self):
        for line in self._lines:
            yield line


__all__ = (
    "CommandLine",
    "FallbackCommandLine",
)
