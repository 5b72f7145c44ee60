"""
Console command base class and the built-in commands.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from devconsole.console.rendering import ERROR_STYLE

if TYPE_CHECKING:
    from devconsole.console.dispatcher import CommandConsole

logger = logging.getLogger(__name__)

# year-day-month--hour-minute-second
DUMP_TIMESTAMP_FORMAT = "%Y-%d-%m--%H-%M-%S"
DUMP_FILENAME_TEMPLATE = "consoledump_{timestamp}.txt"


class ConsoleCommand(ABC):
    """
    A command that can be invoked from the console by any of its names.

    Subclasses set ``names`` and ``help_text`` and implement ``execute``.
    Name matching is case-insensitive, so ``("HelloWorld", "hw")`` is
    reachable as ``helloworld`` or ``HW``.
    """

    names: Tuple[str, ...] = ()
    help_text: str = ""

    def get_names(self) -> List[str]:
        return list(self.names)

    def get_help(self) -> str:
        return self.help_text

    @abstractmethod
    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        """Run the command with the parsed parameters."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={self.names!r})"


CommandFactory = Callable[[], ConsoleCommand]


class EchoCommand(ConsoleCommand):
    names = ("echo",)
    help_text = 'Takes input and "echoes" it back to the console.'

    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        console.print(" ".join(parameters))


class HelpCommand(ConsoleCommand):
    names = ("h", "help")
    help_text = "Provides help, info, documentation, etc. about the given command."

    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        if not parameters:
            for command in console.registry.all_commands():
                console.print(f"{', '.join(command.get_names())} --> {command.get_help()}")
            return

        command = console.registry.resolve(parameters[0])
        if command is None:
            console.report_missing(parameters[0])
        else:
            console.print(command.get_help())


class ClearCommand(ConsoleCommand):
    names = ("c", "cls", "clr", "clear")
    help_text = "Clears the console of all text."

    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        console.clear()


def default_dump_filename(now: Optional[datetime] = None) -> str:
    """Return ``consoledump_<timestamp>.txt`` for the given (or current) time."""
    timestamp = (now or datetime.now()).strftime(DUMP_TIMESTAMP_FORMAT)
    return DUMP_FILENAME_TEMPLATE.format(timestamp=timestamp)


class DumpCommand(ConsoleCommand):
    names = ("dump",)
    help_text = (
        "Writes all console text to a file. Usage: dump [filename] "
        "(defaults to consoledump_<timestamp>.txt)."
    )

    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        # "dump  name" parses as ["", "name"]
        filename = next((p for p in parameters if p), None) or default_dump_filename()
        path = Path(console.dump_dir) / filename
        content = console.get_current_content()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to dump console content to %s: %s", path, e)
            console.print(f"Failed to dump console content: {e}", style=ERROR_STYLE)
            return

        logger.info("Dumped %d characters of console content to %s", len(content), path)
        console.print(f'Console content dumped to "{path}".')


# Registration order is the order `help` lists commands in.
DEFAULT_COMMANDS: Sequence[CommandFactory] = (
    EchoCommand,
    HelpCommand,
    ClearCommand,
    DumpCommand,
)
