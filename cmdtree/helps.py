"""
cmdtree help rendering.

render(node, prog) lays out, in fixed order:

    USAGE
      <prog> <path> [OPTIONS] <SUBCOMMAND> <arg> ...

    DESCRIPTION
      <description>

    SUBCOMMANDS
      <name>  <description>

    OPTIONS
      <aliases>  <description>

    PARENT OPTIONS
      <aliases>  <description>

USAGE is always present; every other section only when it has content. Each
table is left-aligned to the longest name of that table alone. Subcommands and
options are listed in declaration order, parent options root first, exactly
as the consumer enumerates them.

Palette keys (overridable through __styles__ in __main__, applied only when
colorful=True)
- section-label, program-name, command-path, usage-token, placeholder
- description, subcommand-name, option-name, parent-option-name, item-description
- panel-title
"""
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def _palette(colorful):
    styles = defaultdict(str, {
        "section-label": "bold #FFFFFF",
        "program-name": "bold #FF4D94",
        "command-path": "bold #36C5F0",
        "usage-token": "#00E6FF",
        "placeholder": "bold #FFD600",
        "description": "italic #A3A3A3",
        "subcommand-name": "bold #36C5F0",
        "option-name": "bold #00E6FF",
        "parent-option-name": "#00E6FF dim",
        "item-description": "#9CA3AF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _table(output, label, rows, name_style, styler):
    width = max((len(name) for name, _ in rows), default=0)
    output.append("\n").append(label, styler("section-label")).append("\n")
    for name, descr in rows:
        output.append("  ").append(name, styler(name_style))
        if descr:
            output.append(" " * (width - len(name) + 2)).append(descr, styler("item-description"))
        output.append("\n")


def render(node, prog, /, *, colorful=False):
    """
    Render the help screen of node for the program named prog.

    Returns
    - rich.text.Text: str() of it (or .plain) is the help text; spans carry
      the palette when colorful is True.
    """
    styler = _palette(colorful)
    output = Text()

    output.append("USAGE", styler("section-label")).append("\n")
    output.append("  ").append(prog, styler("program-name"))
    if node.path:
        output.append(" ").append(node.path, styler("command-path"))
    if node.options:
        output.append(" ").append("[OPTIONS]", styler("usage-token"))
    if node.subcommands:
        output.append(" ").append("<SUBCOMMAND>", styler("usage-token"))
    elif node.unbounded:
        output.append(" ").append("[<arg>]...", styler("placeholder"))
    elif isinstance(node.parameter_count, int):
        for _ in range(node.parameter_count):
            output.append(" ").append("<arg>", styler("placeholder"))
    output.append("\n")

    if node.descr:
        output.append("\n").append("DESCRIPTION", styler("section-label")).append("\n")
        output.append("  ").append(node.descr, styler("description")).append("\n")

    if node.subcommands:
        _table(
            output, "SUBCOMMANDS",
            [(subcommand.name, subcommand.descr) for subcommand in node.subcommands],
            "subcommand-name", styler
        )

    if node.options:
        _table(
            output, "OPTIONS",
            [(option.display_name, option.descr) for option in node.options],
            "option-name", styler
        )

    if node.parent_options:
        _table(
            output, "PARENT OPTIONS",
            [(option.display_name, option.descr) for option in node.parent_options],
            "parent-option-name", styler
        )

    return output


def print_help(node, prog, /, *, file=None, stderr=False, colorful=False, fancy=False):
    """
    Write the help screen of node through a rich console.

    Parameters
    - file: a text stream; defaults to stdout (stderr when stderr=True).
    - colorful: apply the palette.
    - fancy: frame the help in a titled panel.

    Write failures of the underlying stream propagate unchanged.
    """
    console = Console(file=file, stderr=stderr, highlight=False, no_color=not colorful)
    renderable = render(node, prog, colorful=colorful)

    if fancy:
        renderable.rstrip()
        styler = _palette(colorful)
        title = " ".join(part for part in (prog, node.path, "help") if part)
        console.print(Panel(
            renderable,
            title=Text.assemble("[", " ", title.upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        ))
        return

    console.print(renderable, end="", soft_wrap=True)


__all__ = (
    "render",
    "print_help",
)
