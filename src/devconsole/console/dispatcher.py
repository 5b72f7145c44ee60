"""
The command console: parses input, dispatches it to commands and owns the
open/closed state.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from devconsole.console.commands import DEFAULT_COMMANDS
from devconsole.console.parser import parse_input
from devconsole.console.plugins import load_plugin_commands
from devconsole.console.registry import CommandRegistry
from devconsole.console.rendering import (
    ECHO_STYLE,
    ERROR_STYLE,
    DisplaySink,
    MemoryDisplaySink,
)
from devconsole.console.state import ConsoleState
from devconsole.runtime_config import RuntimeConfig

__all__ = [
    "CommandConsole",
    "COMMAND_FAILED_MSG",
    "INVALID_CMD_MSG",
    "create_command_console",
]

logger = logging.getLogger(__name__)

INVALID_CMD_MSG = 'Command "{0}" does not exist.'
COMMAND_FAILED_MSG = "command '{0}' failed: {1}"


def _noop() -> None:
    pass


class CommandConsole:
    """
    Developer command console.

    The host supplies the display sink and the show/hide hooks, and calls
    ``handle_input`` with whatever the user submitted. Whether input is only
    forwarded while the console is open is up to the host.
    """

    def __init__(
        self,
        sink: Optional[DisplaySink] = None,
        registry: Optional[CommandRegistry] = None,
        on_show: Callable[[], None] = _noop,
        on_hide: Callable[[], None] = _noop,
        dump_dir: Union[str, Path, None] = None,
    ) -> None:
        self.sink: DisplaySink = sink if sink is not None else MemoryDisplaySink()
        self.registry = (
            registry if registry is not None else CommandRegistry.from_factories(DEFAULT_COMMANDS)
        )
        self.state = ConsoleState()
        self.dump_dir = Path(dump_dir) if dump_dir is not None else Path.cwd()
        self._on_show = on_show
        self._on_hide = on_hide

    @property
    def is_open(self) -> bool:
        return self.state.open

    def show(self) -> None:
        """Mark the console open and invoke the show hook."""
        self.state.open = True
        self._on_show()

    def hide(self) -> None:
        """Mark the console closed and invoke the hide hook."""
        self.state.open = False
        self._on_hide()

    def toggle(self) -> None:
        """Switch between hidden and shown depending on the current state."""
        if self.state.open:
            self.hide()
        else:
            self.show()

    def handle_input(self, raw_input: str) -> None:
        """
        Handle one line of user input.

        The first whitespace-separated token selects the command, the rest
        are passed to it as parameters. Empty input prints a blank line.
        Errors raised by a command are reported on the console and logged;
        they never propagate to the caller.
        """
        parsed = parse_input(raw_input)
        if parsed.is_empty:
            self.print("")
            return

        command = self.registry.resolve(parsed.command)
        if command is None:
            logger.debug("Unknown console command: %r", parsed.command)
            self.report_missing(parsed.command)
            return

        self.print(raw_input, style=ECHO_STYLE)
        try:
            command.execute(self, parsed.parameters)
        except Exception as e:
            logger.exception("Console command %r failed", parsed.command)
            self.print(COMMAND_FAILED_MSG.format(parsed.command, e), style=ERROR_STYLE)

    def report_missing(self, name: str) -> None:
        """Print the standard message for a command that does not exist."""
        self.print(INVALID_CMD_MSG.format(name), style=ERROR_STYLE)

    def print(self, text: str, style: str = "") -> None:
        self.sink.print(text, style)

    def clear(self) -> None:
        self.sink.clear()

    def get_current_content(self) -> str:
        return self.sink.get_current_content()


def create_command_console(
    config: RuntimeConfig,
    sink: DisplaySink,
    on_show: Callable[[], None] = _noop,
    on_hide: Callable[[], None] = _noop,
) -> CommandConsole:
    """Build a console with the built-in commands followed by any plugin commands."""
    factories = [*DEFAULT_COMMANDS, *load_plugin_commands(config.plugins)]
    return CommandConsole(
        sink=sink,
        registry=CommandRegistry.from_factories(factories),
        on_show=on_show,
        on_hide=on_hide,
        dump_dir=config.dump_dir,
    )
