"""
Command registry: holds every available command and resolves input tokens
to commands by any of their aliases, ignoring case.
"""

import logging
import threading
from typing import Iterable, Iterator, List, Optional

from devconsole.console.commands import CommandFactory, ConsoleCommand
from devconsole.console.errors import CommandRegistrationError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Ordered collection of console commands.

    Resolution walks commands in registration order, so when two commands
    share an alias the one registered first wins. Collisions are logged but
    not rejected.
    """

    def __init__(self, commands: Optional[Iterable[ConsoleCommand]] = None) -> None:
        self._commands: List[ConsoleCommand] = []
        self._lock = threading.Lock()
        for command in commands or ():
            self.register(command)

    @classmethod
    def from_factories(cls, factories: Iterable[CommandFactory]) -> "CommandRegistry":
        """
        Build a registry by instantiating each factory in turn.

        A factory that fails to produce a usable command is logged and
        skipped; it never aborts startup.
        """
        registry = cls()
        for factory in factories:
            try:
                registry.register(_instantiate(factory))
            except CommandRegistrationError as e:
                logger.warning("Skipping console command: %s", e)
        return registry

    def register(self, command: ConsoleCommand) -> None:
        """Add a command. Raises CommandRegistrationError if it has no usable alias."""
        names = [name for name in command.get_names() if name]
        if not names:
            logger.error("Console command %r declares no names", command)
            raise CommandRegistrationError(f"{command!r} declares no names")

        with self._lock:
            for name in names:
                shadowing = self._find(name.lower())
                if shadowing is not None:
                    logger.debug(
                        "Alias %r of %r is already taken by %r", name, command, shadowing
                    )
            self._commands.append(command)

        logger.debug("Registered console command: %s", ", ".join(names))

    def resolve(self, name: str) -> Optional[ConsoleCommand]:
        """Return the first command with an alias matching ``name``, or None."""
        return self._find(name.lower())

    def all_commands(self) -> List[ConsoleCommand]:
        """All registered commands, in registration order."""
        return list(self._commands)

    def _find(self, formatted_name: str) -> Optional[ConsoleCommand]:
        for command in self._commands:
            for command_name in command.get_names():
                if command_name and command_name.lower() == formatted_name:
                    return command
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self) -> Iterator[ConsoleCommand]:
        return iter(self.all_commands())

    def __len__(self) -> int:
        return len(self._commands)


def _instantiate(factory: CommandFactory) -> ConsoleCommand:
    try:
        command = factory()
    except Exception as e:
        raise CommandRegistrationError(
            f"failed to create console command from {factory!r}: {e}"
        ) from e
    if not isinstance(command, ConsoleCommand):
        raise CommandRegistrationError(
            f"{factory!r} produced {type(command).__name__}, not a ConsoleCommand"
        )
    return command
