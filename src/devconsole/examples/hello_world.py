from typing import TYPE_CHECKING, List

from devconsole.console.commands import ConsoleCommand

if TYPE_CHECKING:
    from devconsole.console.dispatcher import CommandConsole


class HelloWorldCommand(ConsoleCommand):
    # capitalization doesn't matter, names are matched case-insensitively
    names = ("HelloWorld", "hw")
    help_text = 'Prints out "Hello World" to the console.'

    def execute(self, console: "CommandConsole", parameters: List[str]) -> None:
        console.print("Hello World")


COMMANDS = [HelloWorldCommand]
