import sys
from typing import Iterable, List, Protocol

from devconsole.console.dispatcher import create_command_console
from devconsole.console.rendering import RichDisplaySink
from devconsole.console.repl_console import ReplConsole
from devconsole.runtime_config import RuntimeConfig

__all__ = ["ConsoleInterface", "HeadlessConsole", "ReplConsole", "read_command_lines"]


class ConsoleInterface(Protocol):
    """Common interface for console hosts."""

    config: RuntimeConfig

    async def run(self) -> None:
        pass


class HeadlessConsole(ConsoleInterface):
    """Console host that runs a fixed list of input lines and exits."""

    def __init__(self, config: RuntimeConfig) -> None:
        self.config = config
        self.sink = RichDisplaySink(clear_screen=False)
        self.command_console = create_command_console(config, self.sink)

    async def run(self) -> None:
        """
        Open the console and submit each configured input line in order.
        """
        if not self.config.commands:
            raise ValueError("Commands are required for headless mode")

        self.command_console.show()
        for line in self.config.commands:
            self.command_console.handle_input(line)


def read_command_lines(values: Iterable[str]) -> List[str]:
    """Expand ``-`` entries into the lines read from stdin."""
    lines: List[str] = []
    for value in values:
        if value == "-":
            lines.extend(sys.stdin.read().splitlines())
        else:
            lines.append(value)
    return lines
