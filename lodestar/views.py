"""
Lodestar views: read-only projections of commands for help and documentation output.

What this module provides
- CommandView: wraps one command and exposes everything a help or documentation
  renderer reads from it.
  • Plain fields (booleans, display strings, flag sets, aliases) are captured once,
    when the view is built, and never recomputed.
  • The child view list is built on first request and cached for the life of the view.
  • Alignment widths (usage/command-path/name padding) are answered by asking the
    parent command for the widest of its direct children.
- Padding: the minimum column widths used by the padding queries. DEFAULT_PADDING
  holds the stock values; pass another Padding to widen or narrow the floor.

Contract
- A view never mutates the command tree.
- The cached child list goes stale if the tree changes after it was built; build a
  new view when fresh data is needed.
- A view is meant for one render pass on one thread. Concurrent first calls to
  commands() on the same instance are not supported.
- parent() requires has_parent(); on a root it raises OrphanCommandError.

Example
    from lodestar import Command

    root = Command("app")
    root.command("list", aliases=("ls", "ll"), short="list things", callback=print)

    view = root.view()
    for child in view.commands():
        print(child.name.ljust(child.name_padding()), child.short)
"""
import logging
from typing import NamedTuple

from .faults import OrphanCommandError
from .utils import Unset, IntrospectableType

logger = logging.getLogger(__name__)


class Padding(NamedTuple):
    """
    Minimum column widths for aligned listings.
    """
    usage: int = 25
    command_path: int = 11
    name: int = 11


DEFAULT_PADDING = Padding()


class CommandView(metaclass=IntrospectableType):
    """
    Read-only projection of a single command.

    Every name listed in __introspectable__ is published as a read-only property. The
    values are taken from the command when the view is constructed; later changes to
    the command are not reflected.
    """

    __introspectable__ = (
        "runnable",
        "has_help_subcommands",
        "has_subcommands",
        "has_available_subcommands",
        "has_available_local_flags",
        "has_available_inherited_flags",
        "has_example",
        "is_available_command",
        "is_additional_help_topic_command",
        "disable_auto_gen_tag",
        "use_line",
        "command_path",
        "name",
        "short",
        "long",
        "example",
        "version",
        "local_flags",
        "inherited_flags",
        "non_inherited_flags",
        "aliases",
        "command",
        "padding",
    )

    __displayable__ = (
        "name",
        "command_path",
        "runnable",
        "is_available_command",
    )

    def __init__(self, command, /, padding=DEFAULT_PADDING):
        if not hasattr(command, "__command__") or not callable(command.__command__):
            raise TypeError(f"{type(self).__typename__} argument must be a command")
        if not isinstance(padding, Padding):
            raise TypeError(f"{type(self).__typename__} 'padding' must be a padding")
        command = command.__command__()

        self._runnable = command.runnable
        self._has_help_subcommands = command.has_help_subcommands()
        self._has_subcommands = len(command.children) > 0
        self._has_available_subcommands = command.has_available_subcommands()
        self._has_available_local_flags = command.has_available_local_flags()
        self._has_available_inherited_flags = command.has_available_inherited_flags()
        self._has_example = len(command.example) > 0
        self._is_available_command = command.is_available_command()
        self._is_additional_help_topic_command = command.is_additional_help_topic_command()
        self._disable_auto_gen_tag = command.disable_auto_gen_tag
        self._use_line = command.use_line()
        self._command_path = command.command_path()
        self._name = command.name
        self._short = command.short
        self._long = command.long
        self._example = command.example
        self._version = command.version
        self._local_flags = command.local_flags()
        self._inherited_flags = command.inherited_flags()
        self._non_inherited_flags = command.non_inherited_flags()
        self._aliases = command.aliases
        self._command = command
        self._padding = padding
        # Populated once by commands(); Unset marks “not built yet” so an empty
        # child list is cached like any other.
        self._commands = Unset

    def commands(self):
        """
        Return the views of the command's children, in the command's order.

        The list is built on the first call and the very same list object is returned
        afterwards, even if the command tree has changed in between.
        """
        if self._commands is Unset:
            self._commands = [type(self)(child, self._padding) for child in self._command.children]
            logger.debug("built %d child views for %r", len(self._commands), self._command_path)
        return self._commands

    def has_parent(self):
        return self._command.has_parent()

    def parent(self):
        """
        Return a fresh view of the parent command.

        Parent views are not cached: two calls yield two distinct, equivalent views.

        Raises
        - OrphanCommandError: when the command is a root (check has_parent() first).
        """
        if not self._command.has_parent():
            raise OrphanCommandError(
                f"command {self._command_path!r} has no parent",
                hint="check has_parent() before asking for the parent view",
                tool=self._command,
            )
        return type(self)(self._command.parent, self._padding)

    def visit_parents(self, visit, /):
        """
        Invoke visit(command) on each ancestor, nearest first, root last.
        """
        self._command.visit_parents(visit)

    def usage_string(self):
        """
        Return the command's rendered usage text, recomputed on every call.
        """
        return self._command.usage_string()

    def name_and_aliases(self):
        """
        Return the name followed by every alias, comma separated (e.g., "list, ls, ll").
        """
        return ", ".join((self._name, *self._aliases))

    def usage_padding(self):
        """
        Return the column width for use lines among this command and its siblings.
        """
        return self._pad(self._padding.usage, "max_usage_length")

    def command_path_padding(self):
        """
        Return the column width for command paths among this command and its siblings.
        """
        return self._pad(self._padding.command_path, "max_command_path_length")

    def name_padding(self):
        """
        Return the column width for names among this command and its siblings.
        """
        return self._pad(self._padding.name, "max_name_length")

    def _pad(self, minimum, measure):
        # Roots have no siblings to align with.
        if not self._command.has_parent():
            return minimum
        return max(getattr(self._command.parent, measure)(), minimum)


__all__ = (
    "CommandView",
    "Padding",
    "DEFAULT_PADDING",
)
