r"""
Argot option model: option specifications, exclusive groups and the registry.

Overview
- Arity
  • Arity(kind, count, optional): how many values an option takes.
  • kinds: NONE (flag), ONE, FIXED(n > 1), UNBOUNDED; optional marks the
    optional-value variant ('?' and '*').

- Specs
  • Option: a named option with at most one short ("-x") and one long ("--name") name.
  • OptionGroup: a mutually exclusive set of options, optionally required.

- Registry
  • OptionModel: validated collection of options and groups, indexed by short and
    long name, preserving registration order.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__, exposes the fields
    declared in __introspectable__ as read-only properties and seals spec classes.

Metadata (sanitized on construction)
- names: "-x" (one letter or digit) and/or "--long-name"; at least one is required.
- nargs: Unset | 0 | int (>= 1) | "?" | "+" | "*".
- optional: turns any value-bearing arity into its optional variant.
- separator: Unset | single character (property-style "key=value" splitting).
- default: str or iterable of str, stored as a tuple.
- choices: iterable of str (duplicates rejected unless a Set).
- validator: Unset | callable checking each collected value.
- descr: Unset | non-empty str.

Validation highlights
- Short names must match r"-[^\W_]" and long names r"--[^\W_]+(-[^\W_]+)*".
- separator, choices, default, validator and optional all require a value-bearing arity.
- separator and choices cannot be combined (split values would never match).
- group members cannot be required; the group's own 'required' flag decides.

Quick example:
    >>> from argot.options import Option, OptionGroup, OptionModel
    >>> model = OptionModel(
    ...     Option("-a", "--enable-a"),
    ...     Option("-b", "--bfile", nargs=1),
    ...     OptionGroup(Option("-x"), Option("-y"), required=True),
    ... )
    >>> model.lookup_long("bfile").key
    'b'
"""
import collections
import functools
import operator
import re
from collections.abc import Iterable, Set
from enum import IntEnum

from .faults import DuplicateOptionError
from .utils import *


class ArityKind(IntEnum):
    """
    shape of an option's value list.
    """
    NONE = 0
    ONE = 1
    FIXED = 2
    UNBOUNDED = 3


class Arity(collections.namedtuple("Arity", ("kind", "count", "optional"))):
    """
    Closed arity value: (kind, count, optional).

    count is 0 for NONE, 1 for ONE, n for FIXED and None for UNBOUNDED.
    optional is always False for NONE.
    """
    __slots__ = ()

    @classmethod
    def none(cls):
        return cls(ArityKind.NONE, 0, False)

    @classmethod
    def one(cls, optional=False):
        return cls(ArityKind.ONE, 1, bool(optional))

    @classmethod
    def fixed(cls, count, optional=False):
        if count == 1:
            return cls.one(optional)
        return cls(ArityKind.FIXED, count, bool(optional))

    @classmethod
    def unbounded(cls, optional=False):
        return cls(ArityKind.UNBOUNDED, None, bool(optional))

    @classmethod
    def from_nargs(cls, nargs=Unset, optional=False):
        """
        Build an arity from the nargs vocabulary.

        - Unset / 0 -> NONE
        - 1         -> ONE
        - n > 1     -> FIXED(n)
        - "?"       -> optional ONE
        - "+"       -> UNBOUNDED
        - "*"       -> optional UNBOUNDED

        optional=True turns any value-bearing arity into its optional variant.
        """
        match nargs:
            case UnsetType() | 0:
                if optional:
                    raise TypeError("optional arity requires a value-bearing 'nargs'")
                return cls.none()
            case "?":
                return cls.one(True)
            case "+":
                return cls.unbounded(optional)
            case "*":
                return cls.unbounded(True)
            case int():
                return cls.fixed(nargs, optional)
        raise ValueError("unsupported 'nargs' value %r" % (nargs,))

    @property
    def takes_values(self):
        return self.kind is not ArityKind.NONE

    def accepts(self, collected, /):
        """
        Whether another value may be taken after 'collected' values.
        """
        if self.kind is ArityKind.NONE:
            return False
        if self.kind is ArityKind.UNBOUNDED:
            return True
        return collected < self.count

    def requires(self, collected, /):
        """
        Whether more values are mandatory after 'collected' values.
        """
        if self.kind is ArityKind.NONE or self.optional:
            return False
        if self.kind is ArityKind.UNBOUNDED:
            return collected == 0
        return collected < self.count

    def capacity(self, collected, /):
        """
        Remaining number of values that may be taken, or None when unbounded.
        """
        if self.kind is ArityKind.UNBOUNDED:
            return None
        return max(self.count - collected, 0)

    def __repr__(self):
        return "arity(%s%s%s)" % (
            self.kind.name.lower(),
            ", %d" % self.count if self.kind is ArityKind.FIXED else "",
            ", optional" if self.optional else "",
        )


class SpecType(type):
    """
    Metaclass for option specifications.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Seal spec classes (sealed=True) against subclassing to keep semantics
      predictable.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(names=('-b', '--bfile'), arity=arity(one), ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                """
                Disallow subclassing of sealed spec classes.
                """
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate option names and split them into short and long.

    - at least one name, at most one short ("-x") and one long ("--name").
    - names keep the order they were given in.

    Raises
    - TypeError: when names are missing or contain non-string entries.
    - ValueError: when a name is malformed, duplicated, or a second short/long is given.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    short = long = Unset
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif re.fullmatch(r"-[^\W_]", name):
            if short is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        elif re.fullmatch(r"--[^\W_]+(-[^\W_]+)*", name):
            if long is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        else:
            raise ValueError(f"{cls.__typename__} names must look like '-x' or '--long-name' (got {name!r})")

    metadata["names"] = tuple(metadata["names"])
    metadata["short"] = coalesce(short)
    metadata["long"] = coalesce(long)


def _sanitize_values(cls, metadata, /):
    """
    Internal: validate arity and the value-bearing metadata.

    - nargs/optional become an Arity.
    - separator must be a single character.
    - default is normalized to a tuple of strings.
    - choices are normalized to a tuple (duplicates rejected) unless a Set.
    - validator must be callable.
    - separator, choices, default and validator need a value-bearing arity.
    """
    nargs = metadata.pop("nargs")
    if not isinstance(nargs, str | int | Unset) or isinstance(nargs, bool):
        raise TypeError(f"{cls.__typename__} 'nargs' must be a string or an integer")
    if isinstance(nargs, str) and nargs not in ("?", "+", "*"):
        raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '+', or '*'")
    if isinstance(nargs, int) and nargs < 0:
        raise ValueError(f"{cls.__typename__} 'nargs' cannot be negative")
    metadata["arity"] = arity = Arity.from_nargs(nargs, metadata.pop("optional"))

    if not isinstance(separator := metadata["separator"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'separator' must be a string")
    elif isinstance(separator, str) and len(separator) != 1:
        raise ValueError(f"{cls.__typename__} 'separator' must be a single character")
    metadata["separator"] = coalesce(separator)

    match default := metadata["default"]:
        case str():
            default = (default,)
        case Iterable():
            default = tuple(default)
        case _:
            raise TypeError(f"{cls.__typename__} 'default' must be a string or an iterable of strings")
    if not all(isinstance(value, str) for value in default):
        raise TypeError(f"{cls.__typename__} 'default' must only contain strings")
    metadata["default"] = default

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    if not isinstance(choices, Set):
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = tuple(sanitized)
    if not all(isinstance(choice, str) for choice in choices):
        raise TypeError(f"{cls.__typename__} 'choices' must only contain strings")
    metadata["choices"] = choices

    if (validator := metadata["validator"]) is not Unset and not callable(validator):
        raise TypeError(f"{cls.__typename__} 'validator' must be callable")
    metadata["validator"] = coalesce(validator)

    if not arity.takes_values:
        for name in ("separator", "default", "choices", "validator"):
            if metadata[name]:
                raise TypeError(f"{cls.__typename__} '{name}' requires a value-bearing 'nargs'")

    if metadata["separator"] and metadata["choices"]:
        raise TypeError(f"{cls.__typename__} cannot have both 'separator' and 'choices'")


def _sanitize_descr(cls, metadata, /):
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


class Option(metaclass=SpecType, sealed=True):
    """
    Named option specification.

    Option declares a command-line option with a short name ("-b"), a long name
    ("--bfile") or both, how many values it takes and how they are checked.
    Instances are immutable value objects: every field is a read-only property.

    Highlights
    - Arity through 'nargs': flags (Unset/0), single values (1 or "?"), fixed
      counts (n > 1) and unbounded lists ("+" or "*").
    - Property-style options through 'separator' (e.g. "-Dkey=value").
    - 'required' options must appear in every parse.
    - 'choices' restrict the accepted values and 'validator' checks each one;
      'default' is returned by value queries when the option is absent.
    - 'deprecated' options still parse but emit a DeprecatedOptionWarning.

    Properties
    - short / long: bare names (without dashes) or None.
    - key: short name if any, else long name; used in messages and queries.
    """

    __introspectable__ = (
        "names",
        "arity",
        "required",
        "separator",
        "default",
        "choices",
        "validator",
        "descr",
        "deprecated",
    )

    def __new__(
            cls,
            *names,
            nargs=Unset,
            optional=False,
            required=False,
            separator=Unset,
            default=(),
            choices=(),
            validator=Unset,
            descr=Unset,
            deprecated=False
    ):
        """
        Construct an Option spec with the provided metadata.

        Parameters
        - names: "-x" and/or "--long-name", in any order.
        - nargs: Unset | 0 | int | "?" | "+" | "*"
          Number of values. Integers must be >= 0.
        - optional: bool
          Values may be omitted (turns ONE/FIXED/UNBOUNDED into their optional variants).
        - required: bool
          Absence fails the parse with MissingOptionError.
        - separator: Unset | str
          Single character splitting each raw value ("key=value" -> "key", "value").
        - default: str | Iterable[str]
          Values returned by queries when the option is absent.
        - choices: Iterable[str]
          Accepted values. If not a Set, duplicates are rejected.
        - validator: Unset | Callable[[str], object]
          Called with every collected value; raising ValueError or TypeError, or
          returning False, rejects the value with InvalidValueError.
        - descr: Unset | str
          Short description. If Unset, becomes None.
        - deprecated: bool
          Warn whenever the option is used.
        """
        metadata = {
            "names": names,
            "nargs": nargs,
            "optional": bool(optional),
            "required": bool(required),
            "separator": separator,
            "default": default,
            "choices": choices,
            "validator": validator,
            "descr": descr,
            "deprecated": bool(deprecated),
        }
        _sanitize_names(cls, metadata)
        _sanitize_values(cls, metadata)
        _sanitize_descr(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def short(self):
        return self._short

    @property
    def long(self):
        return self._long

    @property
    def key(self):
        return self._short if self._short is not None else self._long


class OptionGroup(metaclass=SpecType, sealed=True):
    """
    Mutually exclusive set of options.

    At most one member may appear in a single parse; when the group is
    required, exactly one must. The group holds no selection state: which
    member was seen is tracked by the engine for the duration of one call.
    """

    __introspectable__ = (
        "members",
        "required",
        "name",
    )

    def __new__(cls, *options, required=False, name=Unset):
        if not options:
            raise TypeError(f"{cls.__typename__} must contain at least one option")
        members = []
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{cls.__typename__} members must be options")
            if option in members:
                raise ValueError(f"{cls.__typename__} cannot contain duplicates")
            if option.required:
                raise TypeError(f"{cls.__typename__} members cannot be required (mark the group as required instead)")
            members.append(option)

        if not isinstance(name, str | Unset):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

        self = super().__new__(cls)
        self._members = tuple(members)
        self._required = bool(required)
        self._name = coalesce(name)
        return self

    def __contains__(self, option):
        return option in self._members

    def __iter__(self):
        return iter(self._members)

    def __len__(self):
        return len(self._members)


class OptionModel:
    """
    Registry of options and exclusive groups.

    The model indexes options by short and long name and keeps registration
    order, which drives the order of long-name candidates and of the missing
    entries reported by MissingOptionError. Parsing never mutates a model, so
    one model can be reused for any number of parses.

    Registration
    - register(Option): adds a standalone option.
    - register(OptionGroup): adds the group and its members; a member that was
      already registered standalone joins the group.
    - name collisions between different options raise DuplicateOptionError;
      an option joining a second group raises ValueError.
    """

    def __init__(self, *entries):
        self._entries = []
        self._options = []
        self._shorts = {}
        self._longs = {}
        self._groups = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry, /):
        """
        Register an Option or an OptionGroup; returns the model for chaining.
        """
        match entry:
            case Option():
                if entry in self._options:
                    raise DuplicateOptionError(entry, entry, entry.names[0])
                self._check_names(entry)
                self._add(entry)
            case OptionGroup():
                if entry in self._groups.values():
                    raise ValueError("option-group is already registered")
                staged = OptionModel()
                for member in entry:
                    if member in self._groups:
                        raise ValueError(f"option {member.key!r} already belongs to another option-group")
                    if member not in self._options:
                        self._check_names(member)
                        staged._check_names(member)
                        staged._add(member)
                for member in entry:
                    if member not in self._options:
                        self._add(member)
                    self._groups[member] = entry
            case _:
                raise TypeError("register() argument must be an option or an option-group")
        self._entries.append(entry)
        return self

    def _check_names(self, option, /):
        if option.short is not None and (existing := self._shorts.get(option.short)) is not None:
            raise DuplicateOptionError(option, existing, "-" + option.short)
        if option.long is not None and (existing := self._longs.get(option.long)) is not None:
            raise DuplicateOptionError(option, existing, "--" + option.long)

    def _add(self, option, /):
        self._options.append(option)
        if option.short is not None:
            self._shorts[option.short] = option
        if option.long is not None:
            self._longs[option.long] = option

    def lookup_short(self, char, /):
        return self._shorts.get(char)

    def lookup_long(self, name, /):
        return self._longs.get(name)

    def long_names_with_prefix(self, prefix, /):
        """
        Long names starting with prefix, in registration order.
        """
        return tuple(name for name in self._longs if name.startswith(prefix))

    def resolve(self, key, /):
        """
        Find the option designated by a query key.

        Accepted keys: the Option itself, "b", "-b", "bfile" or "--bfile".
        Bare keys are looked up as short names first, then as long names.
        Returns None when nothing matches.
        """
        match key:
            case Option():
                return key if key in self._options else None
            case str() if key.startswith("--"):
                return self._longs.get(key[2:])
            case str() if key.startswith("-"):
                return self._shorts.get(key[1:])
            case str():
                return coalesce(self._shorts.get(key, Unset), self._longs.get(key))
        raise TypeError("option keys must be strings or options")

    def group_of(self, option, /):
        return self._groups.get(option)

    @property
    def options(self):
        return tuple(self._options)

    @property
    def groups(self):
        return tuple(entry for entry in self._entries if isinstance(entry, OptionGroup))

    @property
    def required(self):
        """
        Required standalone options and required groups, in registration order.
        """
        return tuple(entry for entry in self._entries if entry.required)

    def __contains__(self, key):
        try:
            return self.resolve(key) is not None
        except TypeError:
            return False

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "option-model(%s)" % ", ".join(map(repr, self._entries))

    def __rich_repr__(self):
        for entry in self._entries:
            yield entry


del SpecType


__all__ = (
    "ArityKind",
    "Arity",
    "Option",
    "OptionGroup",
    "OptionModel",
)
