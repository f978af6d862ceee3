"""
Argot utilities.

- Unset: the "not given" marker for keyword defaults where None (or an empty
  tuple) is a value a caller may legitimately pass.
- coalesce(): turn Unset into a fallback, leaving any other value alone.
- rename(): give generated accessors readable names in tracebacks and reprs.
- mirror(): read-only property over a private "_name" field, handing out
  frozen snapshots so option specs and results cannot be mutated through it.

    >>> coalesce(Unset, "-")
    '-'
    >>> coalesce((), "-")
    ()
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    type of the Unset marker.

    one instance per process, falsy, printed as "Unset", survives copy and
    pickle with its identity, and can be used inside PEP 604 unions
    (``isinstance(value, str | Unset)``).
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    __ror__ = __or__

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        # module-level global name
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    default when object is Unset, otherwise object (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    set __name__ and __qualname__ of a callable.

    rename(function, "name") renames in place and returns the function;
    rename("name") returns a decorator doing the same.
    """
    match parameters:
        case (function, str() as name):
            if not builtins.callable(function):
                raise TypeError("rename() first argument must be callable")
            try:
                function.__name__ = function.__qualname__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() cannot update the name of %r" % (function,)) from None
            return function
        case (_, _):
            raise TypeError("rename() second argument must be a string")
        case (str() as name,):
            return rename(lambda function: rename(function, name), "rename")
        case (_,):
            raise TypeError("@rename() argument must be a string")
        case _:
            raise TypeError("rename() takes 1 or 2 arguments (%d given)" % len(parameters))


def _freeze(object):
    match object:
        case tuple() | str() | bytes() | bytearray():
            return object
        case Sequence():
            return tuple(object)
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
    return object


def mirror(name, /):
    """
    read-only property returning a frozen view of self._<name>.

    lists become tuples, dicts mapping proxies and sets frozensets; anything
    else is returned unchanged.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
