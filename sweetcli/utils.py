"""
SweetCLI utilities shared by the value types of the framework.

Contents
- Unset: sentinel for "argument not given", distinct from None (an option default
  may legitimately be None).
- coalesce(value, default): Unset → default, anything else unchanged.
- rename(name): decorator fixing __name__/__qualname__ of generated functions.
- mirror(name): read-only property over "_name" that hands out container copies.
- ordinal(n): "first", "second", … "11th", "22nd"; used in parse fault messages.
- IntrospectableType: metaclass of OptionSpec, SchemaSet, ParseResult, descriptors,
  outcomes and the context. Publishes __introspectable__ fields as mirrors and
  generates __repr__/__rich_repr__.

    >>> coalesce(Unset, 8)
    8
    >>> coalesce(None, 8) is None
    True
    >>> ordinal(12)
    '12th'
"""
import functools
import operator
import re
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    There is exactly one instance. It is falsy, prints as "Unset", survives
    copy/deepcopy and can appear in PEP 604 unions (isinstance(x, str | Unset)).
    """

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

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


Unset = UnsetType()


def coalesce(value, default=None, /):
    """Return `default` when `value` is Unset; falsy values such as None, 0 or "" are kept."""
    return default if value is Unset else value


def rename(name, /):
    """Decorator giving a generated function a readable name in tracebacks and reprs."""
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _detach(value):
    # Tuples stay tuples (positionals, valid values); other containers become
    # fresh lists, dicts and sets.
    match value:
        case str():
            return value
        case tuple():
            return tuple(_detach(item) for item in value)
        case Sequence():
            return [_detach(item) for item in value]
        case Mapping():
            return {key: _detach(item) for key, item in value.items()}
        case Set():
            return {_detach(item) for item in value}
    return value


def mirror(name, /):
    """Read-only property returning a detached copy of `self._<name>`."""
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    """Position label for fault messages: words up to ten, then "11th", "21st", "112th"."""
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if number % 100 in (11, 12, 13):
        return f"{number}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


class IntrospectableType(type):
    """
    Metaclass of the framework's value types.

    - every name in __introspectable__ becomes a mirror() property unless the class
      body defines it by hand (properties with setters, for instance);
    - __typename__ is the hyphenated class name ("option-spec", "schema-set") used in
      TypeError messages;
    - __repr__ and __rich_repr__ are generated from __displayable__ (falling back to
      __introspectable__) unless written by hand.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ()) if field not in namespace
            },
        )

        if self.__repr__ is object.__repr__ or getattr(self.__repr__, "__generated__", False):
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__typename__}({
                    ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
                })"
            __repr__.__generated__ = True
            self.__repr__ = __repr__

        if (rich := getattr(self, "__rich_repr__", Unset)) is Unset or getattr(rich, "__generated__", False):
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield field, getattr(self, field)
            __rich_repr__.__generated__ = True
            self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
)
