"""
Console subpackage: command registry, input parsing, dispatch, rendering and
the terminal hosts.
"""

from devconsole.console.commands import DEFAULT_COMMANDS, ConsoleCommand
from devconsole.console.dispatcher import CommandConsole
from devconsole.console.parser import ParsedInput, parse_input
from devconsole.console.registry import CommandRegistry

__all__ = [
    "DEFAULT_COMMANDS",
    "CommandConsole",
    "CommandRegistry",
    "ConsoleCommand",
    "ParsedInput",
    "parse_input",
]
