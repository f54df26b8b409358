# src/terminal_shell/core/utils/helptext.py
from html import escape
from typing import List

from terminal_shell.core.parser import TYPE_LABELS, ArgumentSignature
from terminal_shell.model import CommandDefinition

WELCOME_TEXT = "Type '<b>help</b>' or '<b>help &lt;command&gt;</b>' to start."

HELP_CMD_TEMPLATE = "<b>{cmd}</b> - <i>{definition}</i>"

DEPRECATED_COMMAND_TEMPLATE = (
    "<ansiyellow>'{alias}' is a deprecated name, please use '{cmd}' instead</ansiyellow>"
)

HELP_LEGEND = "<> ~> Required Parameter\n[] ~> Optional Parameter"


def build_syntax(definition: CommandDefinition) -> str:
    """
    Returns the declared syntax, or derives one from the argument signature
    (e.g. "i*" -> "<INT> <STRING...>").
    """
    if definition.syntax:
        return definition.syntax
    parts = []
    for slot in ArgumentSignature.from_spec(definition.args).slots:
        label = TYPE_LABELS[slot.kind]
        parts.append(f"[{label}]" if slot.optional else f"<{label}>")
    return " ".join(parts)


def render_help_simple(cmd: str, definition: CommandDefinition) -> str:
    return HELP_CMD_TEMPLATE.format(cmd=escape(cmd), definition=escape(definition.definition))


def render_deprecated(alias: str, cmd: str) -> str:
    return DEPRECATED_COMMAND_TEMPLATE.format(alias=escape(alias), cmd=escape(cmd))


def render_help_detailed(cmd: str, definition: CommandDefinition) -> List[str]:
    """Returns the plain text lines of the detailed help of a command."""
    lines = [definition.detail or definition.definition, " ", f"Syntax: {cmd} {build_syntax(definition)}".rstrip()]
    if definition.aliases:
        lines.append(f"Aliases: {', '.join(definition.aliases)}")
    if definition.example:
        lines.append(f"Example: {cmd} {definition.example}")
    return lines
