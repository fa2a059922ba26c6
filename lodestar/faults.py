"""
Lodestar faults (errors raised by the command tree and its views) and rendering.

Scope
- CommandException: base type that carries a message plus options and knows how to
  render itself through rich (header, message, hint).
- OrphanCommandError: a parent view was requested from a root command.
- DuplicateCommandError: a child name is already taken, or the child is attached elsewhere.
- CommandCycleError: a command was attached under itself or one of its descendants.

Contract
- Faults are raised at the call site and propagate; the package never catches its own
  faults. They describe caller-contract violations, not recoverable runtime conditions.
- Each fault subclasses a builtin error (LookupError/ValueError) so callers that do not
  know about this module can still handle them generically.

Rendering
- console.print(fault) renders a “[ prog — title ]” header, the message and a hint.
- Palette overrides are read from __main__.__styles__, as the help renderer does.
- copy.replace(fault, hint=...) (Python 3.13+) copies a fault with some options changed.
"""
from collections import defaultdict
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class CommandException(Exception):
    """
    Base type for command-tree faults.

    Options
    - title: short headline shown in the rendered header (defaults to the typename).
    - hint: one actionable sentence shown below the message.
    - tool: the command involved, when known (its root name heads the rendering).
    - colorful: apply the palette when rendering (default False).
    - fancy: wrap the rendering in a panel (default False).
    """
    __title__ = "command fault"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        tool = self.options.get("tool")
        prog = tool.root.name if tool is not None else getattr(main, "__prog__", "lodestar")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.options.get("title", self.__title__), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders[1:]), title=header, title_align="left")
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        """
        Return a copy with the same message and 'overrides' merged into the options.
        """
        if unused:
            raise TypeError(f"{type(self).__name__}.__replace__() takes no positional arguments")
        return type(self)(self.message, **{**self.options, **overrides})


class OrphanCommandError(CommandException, LookupError):
    __title__ = "missing parent"


class DuplicateCommandError(CommandException, ValueError):
    __title__ = "duplicate command"


class CommandCycleError(CommandException, ValueError):
    __title__ = "command cycle"


__all__ = (
    "CommandException",
    "OrphanCommandError",
    "DuplicateCommandError",
    "CommandCycleError",
)
