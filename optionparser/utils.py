"""
Small helpers shared by the grammar, declaration and parser layers.

- Unset: "argument not given" marker for parameters where None means something
  (OptionParser(prog=None) is not the same as omitting prog).
- coalesce(value, default): swap Unset for a default, keep everything else.
- mirror("name"): read-only property over self._name; containers come back
  frozen, so Declaration.shorts or OptionParser.stop_predicates cannot be
  edited through the accessor.

    >>> coalesce(Unset, "-")
    '-'
    >>> coalesce("", "-")
    ''
"""
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    type of the Unset marker; one instance per process, falsy, sealed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    # allows annotations such as `str | UnsetType` and checks like isinstance(x, str | Unset)
    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    object, unless it is Unset; then default (None when omitted).
    """
    return default if object is Unset else object


def _freeze(object):
    match object:
        case str():
            return object
        case Sequence():
            return tuple(object)
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
        case _:
            return object


def mirror(name, /):
    """
    Property reading self._<name>, with lists, dicts and sets handed out as
    tuple, MappingProxyType and frozenset.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter, doc="read-only view of the %s field" % name)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "mirror",
    "UnsetType",
    "Unset",
)
