"""
Lodestar usage renderer: turns a CommandView into usage text.

The renderer reads nothing but the view's public surface (fields, padding queries,
child views), so any other renderer can be written against the same contract.

Layout (sections are emitted only when they have content)
    Usage:
      <use line>                      runnable commands
      <command path> [command]        commands with available subcommands

    Aliases:
      <name, alias, ...>

    Examples:
    <example>

    Available Commands:
      <name padded to name_padding()> <short>

    Flags:
    <local flag listing>

    Global Flags:
    <inherited flag listing>

    Additional help topics:
      <path padded to command_path_padding()> <short>

    Use "<command path> [command] --help" for more information about a command.

Styling
- print_usage() applies a palette; override any entry with a __styles__ mapping in __main__.
- render_usage() returns the same content as plain text.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text


def rpad(text, padding, /):
    """
    Left-justify text to at least 'padding' columns.
    """
    return f"{text:<{padding}}"


def _assemble(view, styler):
    """
    Build the usage Text for 'view', styling fragments with styler(key).
    """
    usage = Text()

    def section(label):
        usage.append("\n\n").append(label, styler("section-label")).append(":")

    usage.append("Usage", styler("section-label")).append(":")
    if view.runnable:
        usage.append("\n  ").append(view.use_line, styler("use-line"))
    if view.has_available_subcommands:
        usage.append("\n  ").append(view.command_path, styler("command-path")).append(" [command]")

    if view.aliases:
        section("Aliases")
        usage.append("\n  ").append(view.name_and_aliases(), styler("aliases"))

    if view.has_example:
        section("Examples")
        usage.append("\n").append(view.example, styler("example"))

    if view.has_available_subcommands:
        section("Available Commands")
        for child in view.commands():
            if child.is_available_command or child.name == "help":
                usage.append("\n  ").append(rpad(child.name, child.name_padding()), styler("children"))
                usage.append(" ").append(child.short, styler("children-description"))

    if view.has_available_local_flags:
        section("Flags")
        usage.append("\n").append(view.local_flags.usages().rstrip(), styler("flags"))

    if view.has_available_inherited_flags:
        section("Global Flags")
        usage.append("\n").append(view.inherited_flags.usages().rstrip(), styler("flags"))

    if view.has_help_subcommands:
        section("Additional help topics")
        for child in view.commands():
            if child.is_additional_help_topic_command:
                usage.append("\n  ").append(rpad(child.command_path, child.command_path_padding()), styler("help-topic"))
                usage.append(" ").append(child.short, styler("children-description"))

    if view.has_available_subcommands:
        usage.append("\n\n").append(
            f'Use "{view.command_path} [command] --help" for more information about a command.',
            styler("footer"),
        )

    return usage.append("\n")


def render_usage(view, /):
    """
    Return the usage text of 'view' as a plain string.
    """
    return _assemble(view, lambda style: "").plain


def print_usage(view, /, *, console=None, colorful=True):
    """
    Print the usage text of 'view' to a rich console (stdout when not given).

    Palette keys
    - section-label, use-line, command-path, aliases, example
    - children, children-description, help-topic, flags, footer
    """
    console = console or Console()
    styles = defaultdict(str, {
        "section-label": "bold #FFFFFF",  # Pure white headers
        "use-line": "bold #36C5F0",  # SKY-BLUE signature
        "command-path": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "aliases": "#9CA3AF",  # Muted gray
        "example": "#E5E7EB",
        "children": "bold #36C5F0",  # Sky-blue subcommands
        "children-description": "#9CA3AF",
        "help-topic": "bold #22C55E",  # GREEN topics
        "flags": "#D1D5DB",
        "footer": "#737373",  # Dim footer gray
    } | getattr(__import__('__main__'), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    console.print(_assemble(view, styler), end="")


__all__ = (
    "render_usage",
    "print_usage",
    "rpad",
)
