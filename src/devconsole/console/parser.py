"""
Split raw console input into a command token and its parameters.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ParsedInput:
    """A single parsed input line."""

    command: str
    parameters: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.command and not self.parameters


def parse_input(raw_input: str) -> ParsedInput:
    """
    Parse a raw input line.

    The line is trimmed and then split on single spaces. Consecutive spaces
    produce empty tokens, which are kept as-is: ``"cmd  x"`` parses to
    ``ParsedInput("cmd", ["", "x"])``. Empty input parses to an empty command
    with no parameters.
    """
    tokens = raw_input.strip().split(" ")
    return ParsedInput(command=tokens[0], parameters=tokens[1:])
