"""
Lodestar utilities (internal helpers, carefully exposed)

Scope
- Building blocks shared by the command tree, the flag sets and the views.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", usable in unions (str | Unset).

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr). Containers are
    handed out frozen (tuple, frozenset, mapping proxy) so callers cannot mutate the source.

- IntrospectableType
  • Metaclass that publishes every name in __introspectable__ through mirror() and provides
    __repr__/__rich_repr__ from __displayable__.

Quick examples
    >>> one = coalesce(Unset, "fallback")  # "fallback"
    >>> two = coalesce(None, "fallback")    # None  (None is preserved)
    >>> class X:
    ...     _items = [1, 2]
    ...     items = mirror("items")
    ... X().items
    (1, 2)
"""
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type for "no value given" where None is a legitimate value.

    Unset is falsey, prints as "Unset" and is the only instance of its type.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __ror__(self, other, /):
        # str | Unset -> str | UnsetType, usable with isinstance()
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return 'default' when 'object' is Unset, otherwise 'object' (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a generated callable a stable __name__/__qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def wrapper(callable):
        callable.__name__ = callable.__qualname__ = name
        return callable

    return wrapper


def _freeze(object):
    """
    Return a read-only rendition of container values.

    - Sequence (non-string, non-tuple): tuple.
    - Mapping: mapping proxy over a shallow copy.
    - Set: frozenset.
    - Anything else (tuples, commands, flag sets, strings, scalars): returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str | tuple):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and hands containers
    out frozen (see _freeze).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


class IntrospectableType(type):
    """
    Metaclass for the package's read-only, introspectable objects.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property via mirror().
    - Provide stable __repr__/__rich_repr__ implementations. __displayable__ (if set)
      narrows which properties are shown; otherwise __introspectable__ is used.
    - Derive __typename__ from the class name (camel-case split with hyphens) for messages.
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
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='build', ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    "Unset",
    "UnsetType",
    "coalesce",
    "rename",
    "mirror",
    "IntrospectableType",
)
