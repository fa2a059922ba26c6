"""
Lodestar command layer: the command tree that views are built from.

What this module provides
- Command: one node of a hierarchical CLI.
  • Identity and help text: use (usage stub, first word is the name), aliases,
    short/long descriptions, example, version.
  • Classification: hidden, deprecated, runnable (has a callback), help topic.
  • Hierarchy: parent reference and ordered children, with unique child names.
  • Flags: local and persistent flag sets; inherited flags are resolved from ancestors.
  • Alignment measures over direct children (widest use line, path and name).
  • Presentation: view() builds a CommandView, usage_string() renders usage text.

- Factories
  • command(...): create a root Command, or a decorator that wraps a callable into one.
  • Command.command(...): the same, attaching the result as a child.

Quick start
    from lodestar import Flag, command

    @command(use="app", short="an example tool", persistent_flags=[Flag("-v", "--verbose")])
    def app():
        pass

    @app.command(use="list [pattern]", aliases=("ls",), short="list things")
    def list_(pattern=None):
        pass

    app.command("config", short="configuration reference")  # help topic, no callback

    print(app.usage_string())

Design notes
- The tree is owned by the code that builds it. Views read from it and never write.
- Flag parsing is out of scope: flags here are help metadata only.
"""
import logging

from .faults import CommandCycleError, DuplicateCommandError
from .flags import FlagSet
from .render import render_usage
from .utils import Unset, IntrospectableType, coalesce, rename
from .views import CommandView, DEFAULT_PADDING

logger = logging.getLogger(__name__)


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing the tree shape.

    Raises
    - DuplicateCommandError: self already has a parent, or the name (or one of the
      aliases) is taken by a sibling.
    - CommandCycleError: parent is self or one of self's descendants.
    """
    if parent is self or any(ancestor is self for ancestor in parent.path):
        raise CommandCycleError(
            f"command {self.name!r} cannot be attached under itself or its descendants",
            tool=parent,
        )
    if self._parent is not Unset:
        raise DuplicateCommandError(
            f"command {self.name!r} is already attached to {self._parent.command_path()!r}",
            hint="detach it with remove_command() first",
            tool=parent,
        )

    names = {self.name, *self.aliases}
    for sibling in parent._children:
        if names & {sibling.name, *sibling.aliases}:
            typeof = "subcommand" if parent.has_parent() else "command"
            raise DuplicateCommandError(
                f"{typeof} name {self.name!r} is already in use under {parent.command_path()!r}",
                tool=parent,
            )

    parent._children.append(self)
    self._parent = parent
    logger.debug("attached %r under %r", self.name, parent.command_path())


class Command(metaclass=IntrospectableType):
    """
    A node of the command tree.

    Every name listed in __introspectable__ is published as a read-only property;
    collections come out frozen (children as a tuple snapshot, aliases as a tuple).
    """

    __introspectable__ = (
        "use",
        "name",
        "aliases",
        "short",
        "long",
        "example",
        "version",
        "deprecated",
        "hidden",
        "disable_auto_gen_tag",
        "disable_flags_in_use_line",
        "callback",
        "flags",
        "persistent_flags",
        "children",
    )

    __displayable__ = (
        "name",
        "use",
        "aliases",
        "short",
        "hidden",
        "deprecated",
        "runnable",
    )

    def __init__(
            self,
            use,
            /,
            parent=Unset,
            *,
            aliases=(),
            short=Unset,
            long=Unset,
            example=Unset,
            version=Unset,
            deprecated=Unset,
            hidden=False,
            disable_auto_gen_tag=False,
            disable_flags_in_use_line=False,
            callback=Unset,
            flags=(),
            persistent_flags=()
    ):
        """
        Construct a command and, when 'parent' is given, attach it as a child.

        Parameters
        - use: str
          Usage stub ("list [pattern]"); its first word is the command name.
        - parent: Command | Unset
          Parent to attach to. If Unset, the command is a root.
        - aliases: Iterable[str]
          Alternative names, in display order.
        - short, long, example, version: str | Unset
          Help text. Unset becomes "".
        - deprecated: str | Unset
          Deprecation message. A non-empty message marks the command deprecated.
        - hidden, disable_auto_gen_tag, disable_flags_in_use_line: bool
        - callback: Callable | Unset
          The run action. A command with a callback is runnable.
        - flags, persistent_flags: Iterable[Flag]
          Local flags, and flags that descendants inherit.

        Raises
        - TypeError/ValueError on invalid metadata; tree faults from attachment.
        """
        if not isinstance(parent, Command | Unset):
            raise TypeError(f"{type(self).__typename__} 'parent' must be a command")
        if not isinstance(use, str):
            raise TypeError(f"{type(self).__typename__} 'use' must be a string")
        if not use.strip():
            raise ValueError(f"{type(self).__typename__} 'use' cannot be empty")
        if isinstance(aliases, str):
            raise TypeError(f"{type(self).__typename__} 'aliases' must be an iterable of non-empty strings")
        aliases = list(aliases)
        if not all(isinstance(alias, str) and alias for alias in aliases):
            raise TypeError(f"{type(self).__typename__} 'aliases' must be an iterable of non-empty strings")
        for name, value in (("short", short), ("long", long), ("example", example), ("version", version), ("deprecated", deprecated)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a string")
        if callback is not Unset and not callable(callback):
            raise TypeError(f"{type(self).__typename__} 'callback' must be callable")

        self._use = use.strip()
        self._name = self._use.split()[0]
        self._aliases = aliases
        self._short = coalesce(short, "")
        self._long = coalesce(long, "")
        self._example = coalesce(example, "")
        self._version = coalesce(version, "")
        self._deprecated = coalesce(deprecated, "")
        self._hidden = bool(hidden)
        self._disable_auto_gen_tag = bool(disable_auto_gen_tag)
        self._disable_flags_in_use_line = bool(disable_flags_in_use_line)
        self._callback = coalesce(callback)
        self._flags = FlagSet(flags)
        self._persistent_flags = FlagSet(persistent_flags)
        self._parent = Unset
        self._children = []

        if parent is not Unset:
            _attach_to_parent(self, parent)

    def __command__(self):
        """
        Introspection hook: identify this object as a Command.
        """
        return self

    @property
    def parent(self):
        """
        Return the parent command, or None for a root.
        """
        return coalesce(self._parent)

    @property
    def runnable(self):
        return self._callback is not None

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    def has_parent(self):
        return self._parent is not Unset

    def visit_parents(self, visit, /):
        """
        Invoke visit(command) on each ancestor, nearest first, root last.
        """
        if not callable(visit):
            raise TypeError("visit_parents() argument must be callable")
        parent = self.parent
        while parent:
            visit(parent)
            parent = parent.parent

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Create a child command, or return a decorator that creates one.

        Forms
        - self.command("list", short=..., callback=fn) -> Command
        - @self.command(use="list", short=...) applied to a callable -> Command
        - @self.command applied to a callable -> Command named after the callable

        A positional use stub always builds the child at once, with or without a
        callback, so help topics need no decorator. To decorate, pass the stub as
        use=...; @self.command("list") raises TypeError when applied.
        """
        return command(source, *args, parent=self, **kwargs)

    def add_command(self, *children):
        """
        Attach existing root commands as children, in order.
        """
        for child in children:
            if not isinstance(child, Command):
                raise TypeError("add_command() arguments must be commands")
            _attach_to_parent(child, self)

    def remove_command(self, *children):
        """
        Detach children from this command. Commands that are not children are ignored.
        """
        for child in children:
            if child in self._children:
                self._children.remove(child)
                child._parent = Unset
                logger.debug("detached %r from %r", child.name, self.command_path())

    def command_path(self):
        """
        Return the names from the root to this command, space separated.
        """
        return " ".join(command.name for command in self.path)

    def use_line(self):
        """
        Return the full invocation line shown in usage text.

        The parent's command path is prefixed, and " [flags]" is appended when the
        command has visible flags and its use stub does not mention them already.
        """
        if self.has_parent():
            line = self.parent.command_path() + " " + self._use
        else:
            line = self._use
        if self._disable_flags_in_use_line:
            return line
        if self.has_available_flags() and "[flags]" not in line:
            line += " [flags]"
        return line

    def usage_string(self):
        """
        Return the rendered usage text for this command.
        """
        return render_usage(self.view())

    def view(self, padding=DEFAULT_PADDING):
        """
        Return a fresh read-only view of this command.
        """
        return CommandView(self, padding)

    def local_flags(self):
        """
        Return the flags defined on this command: local flags, then its own persistent flags.
        """
        return FlagSet(self._flags).merge(self._persistent_flags)

    def inherited_flags(self):
        """
        Return the persistent flags of all ancestors that this command does not shadow.

        The nearest ancestor wins when two ancestors define the same flag name.
        """
        local = self.local_flags()
        inherited = FlagSet()

        def collect(parent):
            for flag in parent.persistent_flags:
                if flag.name not in local and flag.name not in inherited:
                    inherited.add(flag)

        self.visit_parents(collect)
        return inherited

    def non_inherited_flags(self):
        return self.local_flags()

    def has_available_local_flags(self):
        return self.local_flags().has_available_flags()

    def has_available_inherited_flags(self):
        return self.inherited_flags().has_available_flags()

    def has_available_flags(self):
        return self.has_available_local_flags() or self.has_available_inherited_flags()

    def is_available_command(self):
        """
        Return True when the command belongs in a subcommand listing.

        Hidden and deprecated commands never do; otherwise the command must be runnable
        or lead to at least one available subcommand.
        """
        if self._hidden or self._deprecated:
            return False
        return self.runnable or self.has_available_subcommands()

    def is_additional_help_topic_command(self):
        """
        Return True for a leaf that only carries help text: not runnable, no children,
        not hidden and not deprecated.
        """
        if self.runnable or self._children or self._hidden or self._deprecated:
            return False
        return True

    def has_available_subcommands(self):
        return any(child.is_available_command() for child in self._children)

    def has_help_subcommands(self):
        return any(child.is_additional_help_topic_command() for child in self._children)

    def max_usage_length(self):
        """
        Return the length of the widest use line among the direct children (0 if none).
        """
        return max((len(child.use_line()) for child in self._children), default=0)

    def max_command_path_length(self):
        """
        Return the length of the widest command path among the direct children (0 if none).
        """
        return max((len(child.command_path()) for child in self._children), default=0)

    def max_name_length(self):
        """
        Return the length of the widest name among the direct children (0 if none).
        """
        return max((len(child.name) for child in self._children), default=0)


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command, or return a decorator that builds one around a callable.

    Invocation modes
    - Direct (source is the use stub):
        cmd = command("app", short=..., callback=fn)
      Returns a Command; callback is optional (help topics have none).

    - Decorated callable:
        @command
        def app(): ...
      The callable becomes the callback; its name is the use stub and the first
      line of its docstring the short text.

    - Decorator with metadata:
        @command(use="list [pattern]", aliases=("ls",))
        def list_(pattern=None): ...
      Returns a decorator; 'use' and 'short' override the derived values.
    """
    if isinstance(source, str):
        return Command(source, *args, **kwargs)

    @rename("command")
    def wrapper(callback, /):
        if not callable(callback) or isinstance(callback, Command):
            raise TypeError("@command() must be applied to a callable")
        options = {
            "use": callback.__name__.strip("_").replace("_", "-"),
            "short": (callback.__doc__ or "").strip().split("\n")[0],
        } | kwargs
        return Command(options.pop("use"), *args, callback=callback, **options)

    # Direct mode if a callable was provided, otherwise return the decorator.
    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
)
