"""
Lodestar flags: option definitions attached to commands, and their collections.

What this module provides
- Flag: a named option definition (e.g., -v/--verbose) carrying help metadata only.
  Parsing is left to whatever parser consumes the tree; a Flag never holds a parsed value.
- FlagSet: an ordered, name-keyed collection of flags with the queries help output needs
  (“is anything visible?”, the aligned usage listing).

Naming
- Short names are a dash followed by one letter or digit ("-v").
- Long names are two dashes followed by an identifier ("--dry-run").
- Flag.name is the first long name without dashes, or the first short name when the flag
  has no long name. FlagSet keys on it.
"""
import re

from .utils import Unset, IntrospectableType, coalesce

_SHORT = re.compile(r"-[^\W_]")
_LONG = re.compile(r"--[^\W_][\w-]*")


class Flag(metaclass=IntrospectableType):
    """
    Named, help-facing option specification.

    Highlights
    - Supports aliases via 'names' (e.g., "-v", "--verbose").
    - metavar names the value placeholder; presence-only flags leave it unset.
    - hidden suppresses the flag from every help listing.
    - deprecated keeps the flag listed but marks it in the usage listing.
    """

    __introspectable__ = (
        "names",
        "name",
        "descr",
        "metavar",
        "default",
        "hidden",
        "deprecated",
    )

    __displayable__ = (
        "names",
        "descr",
        "hidden",
        "deprecated",
    )

    def __init__(self, *names, descr=Unset, metavar=Unset, default=Unset, hidden=False, deprecated=False):
        if not names:
            raise TypeError(f"{type(self).__typename__} requires at least one name")
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{type(self).__typename__} names must be strings")
            if not _SHORT.fullmatch(name) and not _LONG.fullmatch(name):
                raise ValueError(f"{type(self).__typename__} name {name!r} is not a valid switch")
        if len(set(names)) != len(names):
            raise ValueError(f"{type(self).__typename__} names must be unique")
        if not isinstance(descr, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        if not isinstance(metavar, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'metavar' must be a string")

        shorts = [name for name in names if not name.startswith("--")]
        longs = [name for name in names if name.startswith("--")]

        # Shorts first, then longs: the listing reads "-v, --verbose".
        self._names = shorts + longs
        self._name = (longs or shorts)[0].lstrip("-")
        self._descr = coalesce(descr, "")
        self._metavar = coalesce(metavar, "")
        self._default = default
        self._hidden = bool(hidden)
        self._deprecated = bool(deprecated)

    def usage(self):
        """
        Return the names column of the usage listing (e.g., "-o, --output string").

        Flags without a short name are indented so long names line up under the
        long names of flags that do have one.
        """
        column = ", ".join(self._names)
        if self._names[0].startswith("--"):
            column = "    " + column
        if self._metavar:
            column += " " + self._metavar
        return column

    def help(self):
        """
        Return the description column of the usage listing.
        """
        help = self._descr
        if self._default is not Unset and self._default not in (None, False, ""):
            help += f" (default {self._default})"
        if self._deprecated:
            help += " (deprecated)"
        return help.strip()

    def __flag__(self):
        """
        Introspection hook: identify this object as a Flag.
        """
        return self


class FlagSet:
    """
    Ordered, name-keyed collection of flags.

    Behavior
    - Iteration follows insertion order.
    - add() rejects a different flag under an existing name; re-adding the same flag is a no-op.
    - merge() adds only the flags whose name is not present yet (first one wins).
    """

    def __init__(self, flags=()):
        self._flags = {}
        for flag in flags:
            self.add(flag)

    def add(self, flag, /):
        if not hasattr(flag, "__flag__") or not callable(flag.__flag__):
            raise TypeError("add() argument must be a flag")
        flag = flag.__flag__()
        if self._flags.setdefault(flag.name, flag) is not flag:
            raise ValueError(f"flag name {flag.name!r} is already in use")
        return flag

    def merge(self, other, /):
        if not isinstance(other, FlagSet):
            raise TypeError("merge() argument must be a flag set")
        for flag in other:
            self._flags.setdefault(flag.name, flag)
        return self

    def lookup(self, name, /):
        """
        Return the flag known as 'name' ("verbose", "--verbose" or "-v"), or None.
        """
        try:
            return self._flags[name]
        except KeyError:
            pass
        for flag in self._flags.values():
            if name in flag.names:
                return flag
        return None

    def visible(self):
        return tuple(flag for flag in self._flags.values() if not flag.hidden)

    def has_available_flags(self):
        """
        Return True when at least one flag would appear in help output.
        """
        return any(not flag.hidden for flag in self._flags.values())

    def usages(self):
        """
        Return the aligned usage listing of the visible flags, one per line.

        Layout
        - Two leading spaces, the names column padded to the widest entry, three
          spaces, then the description (with default/deprecation notes).
        """
        rows = [("  " + flag.usage(), flag.help()) for flag in self.visible()]
        if not rows:
            return ""
        width = max(len(column) for column, _ in rows)
        return "\n".join(
            (column.ljust(width) + "   " + help).rstrip() for column, help in rows
        ) + "\n"

    def __iter__(self):
        return iter(self._flags.values())

    def __len__(self):
        return len(self._flags)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __bool__(self):
        return bool(self._flags)

    def __repr__(self):
        return f"flag-set({', '.join(self._flags)})"

    def __rich_repr__(self):
        for flag in self._flags.values():
            yield flag


__all__ = (
    "Flag",
    "FlagSet",
)
